from datetime import date

import pytest

from services import build_services
from utils.clock import FixedClock
from utils.dates import date_to_epoch
from utils.messages import Messenger

DAY = 24 * 60 * 60
DAY0 = date_to_epoch(date(2026, 3, 1))


@pytest.fixture
def clock():
    return FixedClock(DAY0 + 2 * DAY + 3600)


@pytest.fixture
def services(clock):
    svc = build_services("sqlite://", clock=clock)
    yield svc
    svc.engine.dispose()


@pytest.fixture
def messenger():
    return Messenger()


@pytest.fixture
def make_task(services):
    def _make(title="Morning run", start=DAY0, end=DAY0 + 10 * DAY, description=""):
        res = services.tasks.create(
            {"title": title, "description": description, "start_date": start, "end_date": end},
            now=services.clock.now(),
        )
        assert res.ok
        return services.tasks.get(res.value).value
    return _make


def failing_commits(session_factory, message="database is locked"):
    """Session factory whose sessions flush their work and then fail to commit."""
    from sqlalchemy.exc import OperationalError

    def make():
        s = session_factory()

        def commit():
            s.flush()
            raise OperationalError("COMMIT", {}, Exception(message))

        s.commit = commit
        return s
    return make
