"""Ledger records returned by the store."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TransactionKind(str, Enum):
    INCOME = "in"
    EXPENSE = "out"


@dataclass
class User:
    identity: int
    display_name: Optional[str] = None
    greeted: bool = False


@dataclass(frozen=True)
class Transaction:
    id: int
    owner_identity: int
    kind: TransactionKind
    amount: int
    category: str
    method: Optional[str]
    note: Optional[str]
    timestamp: datetime


@dataclass(frozen=True)
class Totals:
    """Income and expense sums over one window."""

    income: int = 0
    expense: int = 0

    @property
    def balance(self) -> int:
        return self.income - self.expense


__all__ = ["TransactionKind", "User", "Transaction", "Totals"]
