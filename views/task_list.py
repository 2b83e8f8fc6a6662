# views/task_list.py
import routes
from logger import get_logger
from models.task import Task
from repositories.task_repository import TaskRepository
from utils.dates import format_short
from utils.i18n import t
from utils.progress import ProgressCalculator
from views.view_models import Link, TaskListViewModel, TaskRow

logger = get_logger()

HEADER = ["Task", "Timeframe", "Progress", "Operations"]


class TaskListView:
    """Table of active tasks with their progress and operation links."""

    def __init__(self, tasks: TaskRepository, progress: ProgressCalculator):
        self.tasks = tasks
        self.progress = progress

    def build(self, now: int) -> TaskListViewModel:
        rows = [
            TaskRow(
                task_id=task.id,
                title=task.title,
                timeframe=self.format_timeframe(task),
                progress=self.format_progress(task),
                operations=self.operation_links(task),
            )
            for task in self.tasks.list_active(now)
        ]
        return TaskListViewModel(
            title=t("Daily Progress Tracker"),
            add_link=Link(t("Add new task"), routes.ADD, style="primary"),
            header=[t(h) for h in HEADER],
            rows=rows,
            empty_text=t("No tasks found. Add a new task to get started."),
        )

    @staticmethod
    def format_timeframe(task: Task) -> str:
        return t("@start to @end",
                 start=format_short(task.start_date),
                 end=format_short(task.end_date))

    def format_progress(self, task: Task) -> str:
        res = self.progress.task_progress(task)
        if not res.ok:
            logger.error("Error calculating progress: %(error)s", {"error": res.error})
            return t("N/A")
        p = res.value
        return t("@completed/@total days (@percentage%)",
                 completed=p.completed,
                 total=p.total,
                 percentage=f"{p.percentage:,.1f}")

    @staticmethod
    def operation_links(task: Task):
        return [
            Link(t("Edit"), routes.EDIT, task.id),
            Link(t("Delete"), routes.DELETE, task.id),
            Link(t("Check-in"), routes.CHECKIN, task.id),
        ]
