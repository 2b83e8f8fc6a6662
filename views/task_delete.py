# views/task_delete.py
from __future__ import annotations

from typing import Union

import routes
from logger import get_logger
from repositories.checkin_repository import CheckinRepository
from repositories.task_repository import TaskRepository
from utils.i18n import format_plural, t
from utils.messages import Messenger
from views.view_models import ConfirmViewModel, Link, Redirect

logger = get_logger()


def cascade_warning(check_in_count: int) -> str:
    if check_in_count <= 0:
        return ""
    return format_plural(
        check_in_count,
        "This will also permanently delete 1 check-in record associated with this task.",
        "This will also permanently delete @count check-in records associated with this task.",
    )


def deleted_checkins_message(check_in_count: int) -> str:
    if check_in_count <= 0:
        return ""
    return format_plural(
        check_in_count,
        "1 associated check-in record was also deleted.",
        "@count associated check-in records were also deleted.",
    )


class TaskDeleteForm:
    """Two-step delete: confirm (showing the cascade impact), then delete."""

    form_id = "daily_progress_tracker_task_delete_form"

    def __init__(self, tasks: TaskRepository, checkins: CheckinRepository, messenger: Messenger):
        self.tasks = tasks
        self.checkins = checkins
        self.messenger = messenger

    def build(self, task_id) -> Union[ConfirmViewModel, Redirect]:
        res = self.tasks.get(task_id)
        task = res.value if res.ok else None
        if task is None:
            self.messenger.add_error(t("Task not found."))
            return Redirect(routes.LIST)

        counted = self.checkins.count_all(task.id)
        count = counted.value if counted.ok else 0

        description = t("This action cannot be undone.")
        warning = cascade_warning(count)
        if warning:
            description += " " + warning

        return ConfirmViewModel(
            form_id=self.form_id,
            question=t('Are you sure you want to delete the task "@title"?', title=task.title),
            description=description,
            confirm_label=t("Delete"),
            cancel=Link(t("Cancel"), routes.LIST),
            task_id=task.id,
            task_title=task.title,
            check_in_count=count,
        )

    def submit(self, task_id) -> Redirect:
        confirm = self.build(task_id)
        if isinstance(confirm, Redirect):
            return confirm

        deleted = self.tasks.delete(confirm.task_id)
        if not deleted.ok:
            self.messenger.add_error(t(
                "An error occurred while deleting the task. "
                "The task and its check-ins have not been deleted."
            ))
            logger.error("Error deleting task %(id)s: %(error)s",
                         {"id": confirm.task_id, "error": deleted.error})
            return Redirect(routes.LIST)

        self.messenger.add_status(t('Task "@title" has been deleted.', title=confirm.task_title))
        message = deleted_checkins_message(deleted.value)
        if message:
            self.messenger.add_status(message)
        return Redirect(routes.LIST)
