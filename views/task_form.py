# views/task_form.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import config
import routes
from logger import get_logger
from models.task import Task
from repositories.task_repository import TaskRepository
from utils.clock import Clock
from utils.dates import date_to_epoch, epoch_to_date, one_month_later, parse_date, today
from utils.i18n import t
from utils.messages import Messenger
from views.view_models import FieldDescriptor, FormViewModel, Link, Redirect

logger = get_logger()

SAVE_FAILED = "An error occurred while saving the task. The changes have not been saved."


class TaskForm:
    """Add/edit form for a task.

    ``build`` returns the form to render (or a redirect when an edit id
    does not resolve); ``submit`` validates and persists, returning either
    a redirect to the list or the form again with the user's input.
    """

    form_id = "daily_progress_tracker_task_form"

    def __init__(self, tasks: TaskRepository, clock: Clock, messenger: Messenger,
                 current_user: str = "anonymous"):
        self.tasks = tasks
        self.clock = clock
        self.messenger = messenger
        self.current_user = current_user

    def _load(self, task_id) -> Optional[Task]:
        res = self.tasks.get(task_id)
        return res.value if res.ok else None

    def build(self, task_id: Optional[int] = None) -> Union[FormViewModel, Redirect]:
        task = None
        if task_id is not None:
            task = self._load(task_id)
            if task is None:
                self.messenger.add_error(t("Unable to load task for editing."))
                return Redirect(routes.LIST)
        return self._form(task)

    def _form(self, task: Optional[Task]) -> FormViewModel:
        start = today(self.clock.now())
        fields = [
            FieldDescriptor(
                "title", t("Task Title"), "textfield", required=True,
                default=task.title if task else "",
                max_length=config.TITLE_MAX_LENGTH,
            ),
            FieldDescriptor(
                "description", t("Description"), "textarea",
                default=(task.description or "") if task else "",
                description=t("Optional description of the task."),
            ),
            FieldDescriptor(
                "start_date", t("Start Date"), "date", required=True,
                default=epoch_to_date(task.start_date) if task else start,
            ),
            FieldDescriptor(
                "end_date", t("End Date"), "date", required=True,
                default=epoch_to_date(task.end_date) if task else one_month_later(start),
            ),
        ]
        links = [Link(t("Delete"), routes.DELETE, task.id, style="danger")] if task else []
        return FormViewModel(
            form_id=self.form_id,
            title=t("Edit task") if task else t("Add task"),
            fields=fields,
            submit_label=t("Update Task") if task else t("Save Task"),
            links=links,
            task_id=task.id if task else None,
        )

    def validate(self, values: Mapping[str, Any]) -> Dict[str, str]:
        errors = {}
        raw_title = values.get("title") or ""
        title = raw_title.strip()
        if not title:
            errors["title"] = t("Task Title field is required.")
        elif len(raw_title) > config.TITLE_MAX_LENGTH:
            errors["title"] = t("Task Title cannot be longer than @max characters.",
                                max=config.TITLE_MAX_LENGTH)
        elif len(title) < config.TITLE_MIN_LENGTH:
            errors["title"] = t("Task title must be at least @min characters long.",
                                min=config.TITLE_MIN_LENGTH)

        start = parse_date(values.get("start_date"))
        end = parse_date(values.get("end_date"))
        if start is None:
            errors["start_date"] = t("Start Date field is required.")
        if end is None:
            errors["end_date"] = t("End Date field is required.")
        if start and end and end < start:
            errors["end_date"] = t("End date must be after the start date.")
        return errors

    def submit(self, values: Mapping[str, Any], task_id: Optional[int] = None) -> Union[FormViewModel, Redirect]:
        task = None
        if task_id is not None:
            task = self._load(task_id)
            if task is None:
                self.messenger.add_error(t("Unable to load task for editing."))
                return Redirect(routes.LIST)

        form = self._form(task)
        errors = self.validate(values)
        if errors:
            return form.with_input(dict(values), errors)

        fields = {
            "title": values["title"].strip(),
            "description": (values.get("description") or "").strip(),
            "start_date": date_to_epoch(parse_date(values["start_date"])),
            "end_date": date_to_epoch(parse_date(values["end_date"])),
        }

        if task:
            res = self.tasks.update(task.id, fields)
        else:
            res = self.tasks.create(fields, now=self.clock.now())
        if not res.ok:
            self.messenger.add_error(t(SAVE_FAILED))
            logger.error("Database error while saving task: %(error)s", {"error": res.error})
            return form.with_input(dict(values), {})

        if task:
            self.messenger.add_status(t('Task "@title" has been updated.', title=fields["title"]))
            logger.info("Task %(id)s (%(title)s) was updated by %(uid)s",
                        {"id": task.id, "title": fields["title"], "uid": self.current_user})
        else:
            self.messenger.add_status(t('Task "@title" has been created.', title=fields["title"]))
            logger.info("New task %(id)s (%(title)s) was created by %(uid)s",
                        {"id": res.value, "title": fields["title"], "uid": self.current_user})
        return Redirect(routes.LIST)
