import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bendahara.bot import BotConfig, LedgerBot, Router
from bendahara.database import LedgerStore


ADMIN_ID = 999


# ============== Shared Dummy / Mock Objects ==============


class FakeClock:
    """Settable stand-in for datetime.now."""
    def __init__(self, now=None):
        self.now = now or datetime(2026, 10, 19, 12, 0, 0)

    def __call__(self):
        return self.now


class DummyMessage:
    """Mock message object for testing."""
    def __init__(self, text=""):
        self.text = text
        self.texts = []
        self.documents = []

    async def reply_text(self, text, **kwargs):
        self.texts.append({"text": text, "kwargs": kwargs})
        return MagicMock()

    async def reply_document(self, document=None, filename=None, caption=None, **kwargs):
        self.documents.append({
            "content": document.read().decode("utf-8"),
            "path": document.name,
            "filename": filename,
            "caption": caption,
        })
        return MagicMock()


class DummyUser:
    """Mock user object."""
    def __init__(self, user_id=12345, username="test_user"):
        self.id = user_id
        self.username = username


class DummyUpdate:
    """Mock update object for testing."""
    def __init__(self, text="", user_id=12345):
        self.message = DummyMessage(text)
        self.effective_message = self.message
        self.effective_user = DummyUser(user_id)


class DummyContext:
    """Mock context object for testing."""
    def __init__(self):
        self.user_data = {}
        self.error = None
        self.bot = MagicMock()
        self.bot.send_message = AsyncMock()
        self.bot.send_document = AsyncMock()


# ============== Shared Fixtures ==============


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(tmp_path, clock):
    """Create a fresh LedgerStore with a temp database."""
    return LedgerStore(db_path=str(tmp_path / "test_money.db"), clock=clock)


@pytest.fixture()
def router(store):
    return Router(store, admin_id=ADMIN_ID)


@pytest.fixture()
def bot_instance(tmp_path, router):
    """Create LedgerBot instance with test configuration."""
    config = BotConfig(token="123:TEST", admin_id=ADMIN_ID, export_dir=str(tmp_path / "exports"))
    return LedgerBot(config, router=router)


def greeted(router, identity, name=None):
    """Helper to get a user past the first-contact greeting."""
    router.store.upsert_user_greeted(identity)
    if name:
        router.store.upsert_user_name(identity, name)
    return identity


def texts(replies):
    return [r.text for r in replies]
