from __future__ import annotations

from typing import List, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

import config
from db import transaction
from logger import get_logger
from models.task import Task
from repositories.checkin_repository import CheckinRepository
from repositories.result import Result
from utils.cache import TaggedCache

logger = get_logger()

EDITABLE_FIELDS = ("title", "description", "start_date", "end_date")

LOAD_ERROR = "Unable to load the task."
SAVE_ERROR = "Unable to save the task."
DELETE_ERROR = "Unable to delete the task."


class TaskRepository:
    def __init__(self, session_factory: sessionmaker, checkins: CheckinRepository,
                 cache: Optional[TaggedCache] = None):
        self.session_factory = session_factory
        self.checkins = checkins
        self.cache = cache

    def _invalidate_charts(self) -> None:
        if self.cache is not None:
            self.cache.invalidate_tags([config.CHART_CACHE_TAG])

    # ---- reads ----
    def list_active(self, now: int) -> List[Task]:
        """Tasks whose window has not ended yet, newest start first.

        Read failures are logged and reported as an empty list.
        """
        stmt = (
            select(Task)
            .where(Task.end_date > int(now))
            .order_by(Task.start_date.desc(), Task.id.desc())
        )
        try:
            with self.session_factory() as s:
                return list(s.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error loading tasks: %(error)s", {"error": e})
            return []

    def get(self, task_id) -> Result[Task]:
        try:
            task_id = int(task_id)
        except (TypeError, ValueError):
            return Result.success(None)
        try:
            with self.session_factory() as s:
                return Result.success(s.get(Task, task_id))
        except SQLAlchemyError:
            logger.exception("Error loading task %(id)s", {"id": task_id})
            return Result.failure(LOAD_ERROR)

    # ---- writes ----
    def create(self, fields: Mapping, now: int) -> Result[int]:
        values = {k: fields.get(k) for k in EDITABLE_FIELDS}
        values["created"] = int(now)
        try:
            with transaction(self.session_factory) as s:
                task = Task(**values)
                s.add(task)
                s.flush()
                new_id = task.id
        except SQLAlchemyError:
            logger.exception("Database error while creating task %(title)s", {"title": values["title"]})
            return Result.failure(SAVE_ERROR)
        self._invalidate_charts()
        return Result.success(new_id)

    def update(self, task_id: int, fields: Mapping) -> Result[int]:
        try:
            with transaction(self.session_factory) as s:
                task = s.get(Task, int(task_id))
                if task is None:
                    raise LookupError(task_id)
                for k in EDITABLE_FIELDS:
                    setattr(task, k, fields.get(k))
        except LookupError:
            logger.warning("Task %(id)s vanished before it could be updated", {"id": task_id})
            return Result.failure(SAVE_ERROR)
        except SQLAlchemyError:
            logger.exception("Database error while updating task %(id)s", {"id": task_id})
            return Result.failure(SAVE_ERROR)
        self._invalidate_charts()
        return Result.success(int(task_id))

    def delete(self, task_id: int) -> Result[int]:
        """Delete a task and its check-ins atomically.

        Returns the number of check-ins removed alongside the task.
        """
        try:
            with transaction(self.session_factory) as s:
                removed = self.checkins.delete_for_task(s, int(task_id))
                s.execute(delete(Task).where(Task.id == int(task_id)))
        except SQLAlchemyError:
            logger.exception("Error deleting task %(id)s", {"id": task_id})
            return Result.failure(DELETE_ERROR)
        self._invalidate_charts()
        return Result.success(removed)
