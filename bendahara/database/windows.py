"""Local-time window predicates shared by every aggregate query."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Tuple

TS_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Today:
    """Same local calendar date as ``now``."""

    label: str = "today"

    def bounds(self, now: datetime) -> Tuple[datetime, datetime]:
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return start, start + timedelta(days=1)

    def contains(self, ts: datetime, now: datetime) -> bool:
        start, end = self.bounds(now)
        return start <= ts < end


@dataclass(frozen=True)
class ThisMonth:
    """Same local year-month as ``now``."""

    label: str = "this_month"

    def bounds(self, now: datetime) -> Tuple[datetime, datetime]:
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        # day 28 + 4 always lands in the following month
        end = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
        return start, end

    def contains(self, ts: datetime, now: datetime) -> bool:
        start, end = self.bounds(now)
        return start <= ts < end


TODAY = Today()
THIS_MONTH = ThisMonth()


def sql_bounds(window, now: datetime) -> Tuple[str, str]:
    """Window bounds rendered in the stored timestamp format."""
    start, end = window.bounds(now)
    return start.strftime(TS_FORMAT), end.strftime(TS_FORMAT)


__all__ = ["TS_FORMAT", "Today", "ThisMonth", "TODAY", "THIS_MONTH", "sql_bounds"]
