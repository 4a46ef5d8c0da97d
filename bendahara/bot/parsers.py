"""Parsing of chat text into ledger commands."""

import re
from dataclasses import dataclass
from typing import Optional

from ..constants import CATAT_USAGE, DEFAULT_CATEGORY, IN_USAGE, OUT_USAGE


class Command:
    """Base for every parsed command."""


@dataclass(frozen=True)
class Expense(Command):
    amount: int
    category: str


@dataclass(frozen=True)
class Income(Command):
    amount: int
    category: str


@dataclass(frozen=True)
class Catat(Command):
    amount: int
    category: str = DEFAULT_CATEGORY
    method: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class Malformed(Command):
    """A numeric command whose arguments did not parse."""

    usage: str


@dataclass(frozen=True)
class Report(Command):
    pass


@dataclass(frozen=True)
class Balance(Command):
    pass


@dataclass(frozen=True)
class Top(Command):
    pass


@dataclass(frozen=True)
class Export(Command):
    pass


@dataclass(frozen=True)
class Reset(Command):
    pass


@dataclass(frozen=True)
class ResetAll(Command):
    pass


@dataclass(frozen=True)
class Confirm(Command):
    pass


@dataclass(frozen=True)
class Cancel(Command):
    pass


@dataclass(frozen=True)
class Help(Command):
    pass


@dataclass(frozen=True)
class Start(Command):
    pass


@dataclass(frozen=True)
class Unrecognized(Command):
    text: str = ""


_KEYWORDS = {
    "lapor": Report(),
    "saldo": Balance(),
    "top 3": Top(),
    "export": Export(),
    "reset": Reset(),
    "reset all": ResetAll(),
    "help": Help(),
    "/help": Help(),
    "ya": Confirm(),
    "batal": Cancel(),
    "/start": Start(),
}

_RESET_ALL = re.compile(r"^reset\s+all$", re.IGNORECASE)
_OUT_PREFIX = re.compile(r"^out\s+", re.IGNORECASE)
_OUT = re.compile(r"^out\s+([0-9]+)\s+(.+)$", re.IGNORECASE)
_IN_PREFIX = re.compile(r"^in\s+", re.IGNORECASE)
_IN = re.compile(r"^in\s+([0-9]+)\s+(.+)$", re.IGNORECASE)
# catat 25000 kopi #cash "nasi ""uduk"""
_CATAT = re.compile(
    r'^catat\s+([0-9]+)'
    r'(?:\s+([^#"]+?))?'
    r'(?:\s+#([^\s"]+))?'
    r'(?:\s+"((?:[^"]|"")*)")?$',
    re.IGNORECASE,
)


class CommandParser:
    """Ordered grammar over the fixed command vocabulary."""

    @staticmethod
    def parse(text: str) -> Command:
        stripped = (text or "").strip()
        keyword = stripped.lower()
        if keyword in _KEYWORDS:
            return _KEYWORDS[keyword]
        if _RESET_ALL.match(stripped):
            return ResetAll()

        if _OUT_PREFIX.match(stripped):
            m = _OUT.match(stripped)
            if not m:
                return Malformed(OUT_USAGE)
            return Expense(int(m.group(1)), m.group(2).strip().lower())

        if _IN_PREFIX.match(stripped):
            m = _IN.match(stripped)
            if not m:
                return Malformed(IN_USAGE)
            return Income(int(m.group(1)), m.group(2).strip().lower())

        m = _CATAT.match(stripped)
        if m:
            category = (m.group(2) or "").strip().lower() or DEFAULT_CATEGORY
            method = m.group(3).lower() if m.group(3) else None
            note = m.group(4).replace('""', '"') if m.group(4) else None
            return Catat(int(m.group(1)), category, method, note)

        return Unrecognized(stripped)

    @staticmethod
    def usage_for(command: Command) -> str:
        """Format guidance for a command that failed validation."""
        if isinstance(command, Income):
            return IN_USAGE
        if isinstance(command, Catat):
            return CATAT_USAGE
        return OUT_USAGE


parse = CommandParser.parse


__all__ = [
    "Command",
    "CommandParser",
    "Expense",
    "Income",
    "Catat",
    "Malformed",
    "Report",
    "Balance",
    "Top",
    "Export",
    "Reset",
    "ResetAll",
    "Confirm",
    "Cancel",
    "Help",
    "Start",
    "Unrecognized",
    "parse",
]
