"""Telegram bot package wrappers."""

from .config import BotConfig
from .core import LedgerBot
from .keyboards import KeyboardFactory
from .parsers import CommandParser
from .reports import ReportEngine
from .router import Reply, Router
from .session import SessionState, SessionStore

__all__ = [
    "BotConfig",
    "LedgerBot",
    "KeyboardFactory",
    "CommandParser",
    "ReportEngine",
    "Reply",
    "Router",
    "SessionState",
    "SessionStore",
]
