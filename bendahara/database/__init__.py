"""Database backend for Bendahara."""

from .sqlite import LedgerStore
from .windows import THIS_MONTH, TODAY, ThisMonth, Today

__all__ = ["LedgerStore", "TODAY", "THIS_MONTH", "Today", "ThisMonth"]
