from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

import config
from db import transaction
from logger import get_logger
from models.checkin import Checkin
from repositories.result import Result
from utils.cache import TaggedCache

logger = get_logger()

READ_ERROR = "Unable to read check-ins."
WRITE_ERROR = "Unable to save the check-in."

ON_CONFLICT_INSERTS = {"sqlite": sqlite_insert, "postgresql": pg_insert}


class CheckinRepository:
    def __init__(self, session_factory: sessionmaker, cache: Optional[TaggedCache] = None):
        self.session_factory = session_factory
        self.cache = cache

    def _invalidate_charts(self) -> None:
        if self.cache is not None:
            self.cache.invalidate_tags([config.CHART_CACHE_TAG])

    # ---- writes ----
    def upsert(self, task_id: int, date: int, completed: bool, notes: Optional[str]) -> Result[None]:
        values = {
            "task_id": int(task_id),
            "date": int(date),
            "completed": 1 if completed else 0,
            "notes": notes,
        }
        try:
            try:
                self._upsert(values)
            except IntegrityError:
                # lost the race for the (task_id, date) key; the row exists now
                self._upsert(values)
        except SQLAlchemyError:
            logger.exception("Error saving check-in for task %(task_id)s on %(date)s",
                             {"task_id": task_id, "date": date})
            return Result.failure(WRITE_ERROR)
        self._invalidate_charts()
        return Result.success()

    def _upsert(self, values: dict) -> None:
        with transaction(self.session_factory) as s:
            insert = self._on_conflict_insert(s)
            if insert is not None:
                stmt = insert(Checkin).values(**values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=["task_id", "date"],
                    set_={"completed": stmt.excluded.completed, "notes": stmt.excluded.notes},
                )
                s.execute(stmt)
                return
            row = s.get(Checkin, (values["task_id"], values["date"]))
            if row is None:
                s.add(Checkin(**values))
            else:
                row.completed, row.notes = values["completed"], values["notes"]

    def _on_conflict_insert(self, session: Session):
        """Dialect insert supporting ON CONFLICT, or None to select then write."""
        return ON_CONFLICT_INSERTS.get(session.get_bind().dialect.name)

    def delete_for_task(self, session: Session, task_id: int) -> int:
        """Delete every check-in of a task inside the caller's transaction."""
        res = session.execute(delete(Checkin).where(Checkin.task_id == task_id))
        return int(res.rowcount or 0)

    # ---- reads ----
    def count_completed(self, task_id: int) -> Result[int]:
        return self._count(task_id, completed_only=True)

    def count_all(self, task_id: int) -> Result[int]:
        return self._count(task_id, completed_only=False)

    def _count(self, task_id: int, completed_only: bool) -> Result[int]:
        stmt = select(func.count()).select_from(Checkin).where(Checkin.task_id == task_id)
        if completed_only:
            stmt = stmt.where(Checkin.completed == 1)
        try:
            with self.session_factory() as s:
                return Result.success(int(s.execute(stmt).scalar_one()))
        except SQLAlchemyError:
            logger.exception("Error counting check-ins for task %(task_id)s", {"task_id": task_id})
            return Result.failure(READ_ERROR)

    def list_ordered_by_date(self, task_id: int) -> Result[List[Checkin]]:
        stmt = select(Checkin).where(Checkin.task_id == task_id).order_by(Checkin.date.asc())
        try:
            with self.session_factory() as s:
                return Result.success(list(s.execute(stmt).scalars().all()))
        except SQLAlchemyError:
            logger.exception("Error loading check-ins for task %(task_id)s", {"task_id": task_id})
            return Result.failure(READ_ERROR)
