"""Timestamp helpers based on the configured Sao Paulo timezone."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from despesas.core.settings import get_settings


def app_timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().app_timezone)


def now_local() -> datetime:
    """Return the current timestamp in the application timezone."""

    return datetime.now(tz=app_timezone())


def local_day(moment: datetime) -> date:
    """Return the calendar day of a timestamp in the application timezone.

    Naive timestamps (SQLite drops tzinfo) are assumed to already be local.
    """

    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(app_timezone()).date()
