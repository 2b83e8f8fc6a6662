# utils/charts.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import config
from logger import get_logger
from models.task import Task
from repositories.task_repository import TaskRepository
from utils.cache import TaggedCache
from utils.i18n import t
from utils.progress import ProgressCalculator

logger = get_logger()

BAR = "bar"
LINE = "line"


@dataclass(frozen=True)
class ChartSeries:
    title: str
    data: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class ChartData:
    """Chart description that does not depend on any plotting library."""
    title: str = ""
    chart_type: str = BAR
    series: List[ChartSeries] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.labels or not any(s.data for s in self.series)


def _options(**extra) -> Dict[str, Any]:
    opts = {"responsive": True, "maintainAspectRatio": False}
    opts.update(extra)
    return opts


class ChartDataBuilder:
    def __init__(self, tasks: TaskRepository, progress: ProgressCalculator, cache: TaggedCache):
        self.tasks = tasks
        self.progress = progress
        self.cache = cache

    def overall_chart(self, now: int) -> ChartData:
        cid = config.OVERALL_CHART_CID
        cached = self.cache.get(cid)
        if cached is not None:
            return cached

        gen = self.cache.generation(config.CHART_CACHE_TAG)
        tasks = self.tasks.list_active(now)
        series, labels = [], []
        complete = True
        if tasks:
            points = []
            for task in tasks:
                res = self.progress.percentage(task)
                if not res.ok:
                    complete = False
                    logger.warning("No progress for task %(id)s in overall chart", {"id": task.id})
                points.append(res.value if res.ok else 0.0)
            series = [ChartSeries(title=t("Completion %"), data=points)]
            labels = [task.title for task in tasks]

        chart = ChartData(
            title=t("Overall Task Progress"),
            chart_type=BAR,
            series=series,
            labels=labels,
            options=_options(scales={"y": {"min": 0, "max": 100}}),
        )
        # a partial chart, or one that raced a mutation, is shown once but never kept
        if complete:
            self.cache.set(cid, chart, tags=[config.CHART_CACHE_TAG], generation=gen)
        return chart

    def task_chart(self, task: Task) -> ChartData:
        cid = config.TASK_CHART_CID.format(task_id=task.id)
        cached = self.cache.get(cid)
        if cached is not None:
            return cached

        gen = self.cache.generation(config.CHART_CACHE_TAG)
        res = self.progress.cumulative_series(task)
        points = res.value if res.ok else []
        chart = ChartData(
            title=t("Progress: @task", task=task.title),
            chart_type=LINE,
            series=[ChartSeries(title=t("Completed Days"), data=[v for _, v in points])],
            labels=[label for label, _ in points],
            options=_options(),
        )
        if res.ok:
            self.cache.set(cid, chart, tags=[config.CHART_CACHE_TAG], generation=gen)
        return chart
