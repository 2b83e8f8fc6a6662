# utils/dates.py
from datetime import date, datetime
from typing import Optional

from dateutil import parser
from dateutil.relativedelta import relativedelta

import config


def date_to_epoch(d: date) -> int:
    """Epoch seconds of local midnight on ``d``."""
    return int(datetime(d.year, d.month, d.day).timestamp())


def epoch_to_date(ts: int) -> date:
    return datetime.fromtimestamp(int(ts)).date()


def parse_date(x) -> Optional[date]:
    if not x:
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        return parser.parse(str(x)).date()
    except (ValueError, OverflowError):
        return None


def format_short(ts: int) -> str:
    return datetime.fromtimestamp(int(ts)).strftime(config.SHORT_DATE_FORMAT)


def format_month_day(ts: int) -> str:
    """"Mar 5" style label, no leading zero on the day."""
    dt = datetime.fromtimestamp(int(ts))
    return f"{dt.strftime('%b')} {dt.day}"


def today(now: int) -> date:
    return epoch_to_date(now)


def one_month_later(d: date) -> date:
    return d + relativedelta(months=1)
