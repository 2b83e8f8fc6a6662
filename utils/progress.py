# utils/progress.py
import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import config
from models.checkin import Checkin
from models.task import Task
from repositories.checkin_repository import CheckinRepository
from repositories.result import Result
from utils.dates import format_month_day


@dataclass(frozen=True)
class TaskProgress:
    completed: int
    total: int          # whole days shown to the user
    percentage: float


def total_days(task: Task) -> float:
    """Length of the task window in days; fractional, never rounded here."""
    return (task.end_date - task.start_date) / config.SECONDS_PER_DAY


def display_total(task: Task) -> int:
    return math.ceil(total_days(task))


def percentage(task: Task, completed: int) -> float:
    # floor of one day keeps zero-length windows finite
    return completed / max(1, total_days(task)) * 100


def cumulative_series(checkins: Iterable[Checkin]) -> List[Tuple[str, int]]:
    """Running count of completed days, one point per check-in date."""
    running = 0
    points = []
    for c in checkins:
        running += 1 if c.completed else 0
        points.append((format_month_day(c.date), running))
    return points


class ProgressCalculator:
    def __init__(self, checkins: CheckinRepository):
        self.checkins = checkins

    def task_progress(self, task: Task) -> Result[TaskProgress]:
        res = self.checkins.count_completed(task.id)
        if not res.ok:
            return Result.failure(res.error)
        completed = res.value
        return Result.success(TaskProgress(
            completed=completed,
            total=display_total(task),
            percentage=percentage(task, completed),
        ))

    def percentage(self, task: Task) -> Result[float]:
        res = self.task_progress(task)
        if not res.ok:
            return Result.failure(res.error)
        return Result.success(res.value.percentage)

    def cumulative_series(self, task: Task) -> Result[List[Tuple[str, int]]]:
        res = self.checkins.list_ordered_by_date(task.id)
        if not res.ok:
            return Result.failure(res.error)
        return Result.success(cumulative_series(res.value))
