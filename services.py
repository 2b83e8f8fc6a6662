# services.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

import db
from logger import get_logger
from repositories.checkin_repository import CheckinRepository
from repositories.task_repository import TaskRepository
from utils.cache import TaggedCache
from utils.charts import ChartDataBuilder
from utils.clock import Clock, SystemClock
from utils.messages import Messenger
from utils.progress import ProgressCalculator
from views.checkin_form import CheckinForm
from views.task_delete import TaskDeleteForm
from views.task_form import TaskForm
from views.task_list import TaskListView

logger = get_logger()


@dataclass
class AppServices:
    engine: Engine
    session_factory: sessionmaker
    cache: TaggedCache
    clock: Clock
    checkins: CheckinRepository
    tasks: TaskRepository
    progress: ProgressCalculator
    charts: ChartDataBuilder

    # ---- per-request views ----
    def task_list(self) -> TaskListView:
        return TaskListView(self.tasks, self.progress)

    def task_form(self, messenger: Messenger, current_user: str = "anonymous") -> TaskForm:
        return TaskForm(self.tasks, self.clock, messenger, current_user)

    def checkin_form(self, messenger: Messenger) -> CheckinForm:
        return CheckinForm(self.tasks, self.checkins, self.clock, messenger)

    def delete_form(self, messenger: Messenger) -> TaskDeleteForm:
        return TaskDeleteForm(self.tasks, self.checkins, messenger)


def build_services(database_url: Optional[str] = None, clock: Optional[Clock] = None,
                   engine: Optional[Engine] = None) -> AppServices:
    engine = engine or db.make_engine(database_url)
    db.init_db(engine)
    session_factory = db.make_session_factory(engine)
    cache = TaggedCache()
    checkins = CheckinRepository(session_factory, cache)
    tasks = TaskRepository(session_factory, checkins, cache)
    progress = ProgressCalculator(checkins)
    logger.info("Storage ready at %(url)s", {"url": engine.url.render_as_string(hide_password=True)})
    return AppServices(
        engine=engine,
        session_factory=session_factory,
        cache=cache,
        clock=clock or SystemClock(),
        checkins=checkins,
        tasks=tasks,
        progress=progress,
        charts=ChartDataBuilder(tasks, progress, cache),
    )
