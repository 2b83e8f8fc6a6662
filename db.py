# db.py

#============================================================#
#                   Daily Progress Tracker                   #
#============================================================#
# Purpose     : Engine, session factory and transaction      #
#               scope shared by the repositories             #
#============================================================#


from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import config

# Table models register themselves on SQLModel.metadata when imported
import models  # noqa: F401


# ---- Engine / Session ----
def make_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    url = url or config.DATABASE_URL
    echo = config.SQL_ECHO if echo is None else echo
    if url == "sqlite://" or (url.startswith("sqlite") and ":memory:" in url):
        # one shared connection, otherwise every session sees an empty database
        return create_engine(
            url, echo=echo, future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo, future=True,
                             connect_args={"check_same_thread": False})
    return create_engine(url, echo=echo, pool_pre_ping=True, future=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False,
                        expire_on_commit=False, future=True)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


@contextmanager
def transaction(session_factory: sessionmaker) -> Iterator[Session]:
    """Open a session, commit when the block exits cleanly.

    Any exception raised inside the block rolls every statement back and is
    re-raised, so callers decide how to report it.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()
