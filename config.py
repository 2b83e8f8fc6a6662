# config.py

#============================================================#
#                   Daily Progress Tracker                   #
#============================================================#
# Purpose     : Track recurring daily tasks with check-ins,  #
#               progress tables and Plotly charts            #
#               (SQLite/PostgreSQL powered)                  #
#============================================================#

import os

# ---- Secrets / environment ----
try:
    import streamlit as st
    _secrets = dict(getattr(st, "secrets", {}))
except Exception:
    _secrets = {}


def setting(name: str, default=None):
    """Look a setting up in Streamlit secrets, then the environment."""
    value = _secrets.get(name)
    if value is None:
        value = os.getenv(name)
    return default if value in (None, "") else value


def _flag(name: str, default: bool = False) -> bool:
    raw = setting(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = setting("DATABASE_URL", "sqlite:///daily_progress.db")
SQL_ECHO = _flag("DAILY_PROGRESS_SQL_ECHO")

LOGGER_NAME = "daily_progress"
LOG_LEVEL = str(setting("DAILY_PROGRESS_LOG_LEVEL", "INFO")).upper()
LOG_FILE = setting("DAILY_PROGRESS_LOG_FILE")

SECONDS_PER_DAY = 24 * 60 * 60
TITLE_MAX_LENGTH = 255
TITLE_MIN_LENGTH = 3

# Chart cache
CHART_CACHE_TAG = "daily_progress_charts"
OVERALL_CHART_CID = "daily_progress:overall_chart"
TASK_CHART_CID = "daily_progress:task_chart:{task_id}"

# Date formats
SHORT_DATE_FORMAT = "%m/%d/%Y"

APP_TITLE = "Daily Progress Tracker"
