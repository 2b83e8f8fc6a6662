# views/checkin_form.py
from __future__ import annotations

from typing import Any, Mapping, Union

import routes
from logger import get_logger
from repositories.checkin_repository import CheckinRepository
from repositories.task_repository import TaskRepository
from utils.clock import Clock
from utils.dates import date_to_epoch, parse_date, today
from utils.i18n import t
from utils.messages import Messenger
from views.view_models import FieldDescriptor, FormViewModel, Link, Redirect

logger = get_logger()


class CheckinForm:
    form_id = "daily_progress_tracker_checkin_form"

    def __init__(self, tasks: TaskRepository, checkins: CheckinRepository,
                 clock: Clock, messenger: Messenger):
        self.tasks = tasks
        self.checkins = checkins
        self.clock = clock
        self.messenger = messenger

    def build(self, task_id) -> Union[FormViewModel, Redirect]:
        res = self.tasks.get(task_id)
        task = res.value if res.ok else None
        if task is None:
            self.messenger.add_error(t("Task not found."))
            return Redirect(routes.LIST)

        return FormViewModel(
            form_id=self.form_id,
            title=t("Check-in: @task", task=task.title),
            fields=[
                FieldDescriptor("date", t("Check-in Date"), "date", required=True,
                                default=today(self.clock.now())),
                FieldDescriptor("completed", t("Task completed for this day"), "checkbox",
                                default=False),
                FieldDescriptor("notes", t("Notes"), "textarea", default="", rows=3),
            ],
            submit_label=t("Save Check-in"),
            links=[Link(t("Cancel"), routes.LIST)],
            task_id=task.id,
        )

    def submit(self, task_id, values: Mapping[str, Any]) -> Union[FormViewModel, Redirect]:
        form = self.build(task_id)
        if isinstance(form, Redirect):
            return form

        day = parse_date(values.get("date"))
        if day is None:
            return form.with_input(dict(values), {"date": t("Check-in Date field is required.")})

        res = self.checkins.upsert(
            form.task_id,
            date_to_epoch(day),
            bool(values.get("completed")),
            values.get("notes") or None,
        )
        if res.ok:
            self.messenger.add_status(t("Check-in has been saved."))
        else:
            self.messenger.add_error(t("An error occurred while saving the check-in."))
            logger.error("Error saving check-in: %(error)s", {"error": res.error})
        return Redirect(routes.LIST)
