"""Transport-independent message routing.

Every inbound text for an identity goes through :meth:`Router.handle`, which
returns the replies to send back. The router owns the dialogue state and is
the only place that enforces the greeting-once and admin-only rules.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..constants import (
    ADMIN_ONLY_TEXT,
    ASK_NAME_TEXT,
    CONFIRM_PENDING_TEXT,
    HELP_TEXT,
    NAME_PENDING_TEXT,
    NAME_UNREADABLE_TEXT,
    NO_DATA_MONTH_TEXT,
    ONBOARDING_TEXT,
    RESET_ALL_PROMPT_TEXT,
    RESET_CANCELLED_TEXT,
    RESET_PROMPT_TEXT,
    STORE_FAILED_TEXT,
    greet_text,
    rupiah,
)
from ..database import LedgerStore
from ..errors import AuthorizationError, StoreError, ValidationError
from ..models import TransactionKind
from .parsers import (
    Balance,
    Cancel,
    Catat,
    Command,
    CommandParser,
    Confirm,
    Expense,
    Export,
    Help,
    Income,
    Malformed,
    Report,
    Reset,
    ResetAll,
    Start,
    Top,
    Unrecognized,
)
from .reports import CsvExport, ReportEngine
from .session import SessionState, SessionStore

logger = logging.getLogger(__name__)

KEYBOARD_MENU = "menu"
KEYBOARD_REMOVE = "remove"


@dataclass(frozen=True)
class Reply:
    text: Optional[str] = None
    keyboard: Optional[str] = None
    parse_mode: Optional[str] = None
    document: Optional[CsvExport] = None


class Router:
    """Decides the single handler for each inbound message."""

    def __init__(
        self,
        store: LedgerStore,
        admin_id: Optional[int] = None,
        sessions: Optional[SessionStore] = None,
        reports: Optional[ReportEngine] = None,
    ):
        self.store = store
        self.admin_id = admin_id
        self.sessions = sessions or SessionStore()
        self.reports = reports or ReportEngine(store)

    def handle(self, identity: int, text: str) -> List[Reply]:
        try:
            if not self._greet_once(identity):
                return [Reply(ONBOARDING_TEXT)]
            command = CommandParser.parse(text)
            state = self.sessions.get(identity)
            if state.is_pending:
                return self._continue_dialogue(identity, state, command, text)
            return self._dispatch(identity, command)
        except StoreError:
            logger.exception("Store failure while handling message from %s", identity)
            return [Reply(STORE_FAILED_TEXT)]

    def touch(self, identity: int) -> List[Reply]:
        """Greet-once check for messages that carry no command text."""
        try:
            if not self._greet_once(identity):
                return [Reply(ONBOARDING_TEXT)]
        except StoreError:
            logger.exception("Store failure while greeting %s", identity)
            return [Reply(STORE_FAILED_TEXT)]
        return []

    def is_admin(self, identity: int) -> bool:
        return self.admin_id is not None and identity == self.admin_id

    def _greet_once(self, identity: int) -> bool:
        """Return True if the identity was already greeted, greeting it otherwise."""
        user = self.store.get_user(identity)
        if user and user.greeted:
            return True
        self.store.upsert_user_greeted(identity)
        logger.info("New user %s greeted", identity)
        return False

    # ===== Pending dialogues =====

    def _continue_dialogue(self, identity: int, state: SessionState, command: Command, text: str) -> List[Reply]:
        if state is SessionState.AWAITING_NAME:
            return self._receive_name(identity, command, text)

        if isinstance(command, Confirm):
            if state is SessionState.AWAITING_GLOBAL_RESET_CONFIRM:
                return self._confirm_global_reset(identity)
            return self._confirm_personal_reset(identity)
        if isinstance(command, Cancel):
            self.sessions.clear(identity)
            return [Reply(RESET_CANCELLED_TEXT)]
        return [Reply(CONFIRM_PENDING_TEXT, parse_mode="Markdown")]

    def _receive_name(self, identity: int, command: Command, text: str) -> List[Reply]:
        if not isinstance(command, Unrecognized):
            return [Reply(NAME_PENDING_TEXT)]
        try:
            saved = self.store.upsert_user_name(identity, text)
        except ValidationError:
            return [Reply(NAME_UNREADABLE_TEXT)]
        self.sessions.clear(identity)
        return [Reply(greet_text(saved), keyboard=KEYBOARD_MENU)]

    def _confirm_personal_reset(self, identity: int) -> List[Reply]:
        count = self.store.delete_all_for_user(identity)
        self.sessions.clear(identity)
        logger.info("User %s deleted %s transactions", identity, count)
        return [Reply(f"✅ Semua data milikmu telah dihapus ({count} transaksi).")]

    def _confirm_global_reset(self, identity: int) -> List[Reply]:
        self._authorize_global_reset(identity)
        count = self.store.delete_all()
        self.sessions.clear(identity)
        logger.warning("Admin %s deleted all %s transactions", identity, count)
        return [Reply(f"🧹 Semua data dihapus ({count} transaksi).")]

    def _authorize_global_reset(self, identity: int) -> None:
        if not self.is_admin(identity):
            raise AuthorizationError(f"{identity} is not the admin")

    # ===== Idle dispatch =====

    def _dispatch(self, identity: int, command: Command) -> List[Reply]:
        if isinstance(command, Start):
            return self._start(identity)
        if isinstance(command, (Expense, Income, Catat)):
            return self._record(identity, command)
        if isinstance(command, Malformed):
            return [Reply(command.usage)]
        if isinstance(command, Report):
            return [Reply(self.reports.daily_report(identity))]
        if isinstance(command, Balance):
            return [Reply(self.reports.balance(identity))]
        if isinstance(command, Top):
            return [Reply(self.reports.top_categories(identity))]
        if isinstance(command, Export):
            return self._export(identity)
        if isinstance(command, Reset):
            self.sessions.transition(identity, SessionState.AWAITING_PERSONAL_RESET_CONFIRM)
            return [Reply(RESET_PROMPT_TEXT, parse_mode="Markdown")]
        if isinstance(command, ResetAll):
            return self._request_global_reset(identity)
        if isinstance(command, Help):
            return [Reply(HELP_TEXT)]
        # Unrecognized text, and ya/batal with nothing pending, get no reply.
        return []

    def _start(self, identity: int) -> List[Reply]:
        user = self.store.get_user(identity)
        if user and user.display_name:
            return [Reply(greet_text(user.display_name), keyboard=KEYBOARD_MENU)]
        self.sessions.transition(identity, SessionState.AWAITING_NAME)
        return [Reply(ASK_NAME_TEXT, keyboard=KEYBOARD_REMOVE)]

    def _record(self, identity: int, command: Command) -> List[Reply]:
        if isinstance(command, Income):
            kind, label = TransactionKind.INCOME, "Pemasukan"
        else:
            kind, label = TransactionKind.EXPENSE, "Pengeluaran"
        method = getattr(command, "method", None)
        note = getattr(command, "note", None)
        try:
            txn = self.store.insert(identity, kind, command.amount, command.category, method, note)
        except ValidationError:
            return [Reply(CommandParser.usage_for(command))]

        text = f"✅ {label} Rp{rupiah(txn.amount)} • {txn.category}"
        if txn.method:
            text += f" • #{txn.method}"
        if txn.note:
            text += f" • \"{txn.note}\""
        return [Reply(text)]

    def _export(self, identity: int) -> List[Reply]:
        export = self.reports.export(identity)
        if export is None:
            return [Reply(NO_DATA_MONTH_TEXT)]
        return [Reply(document=export)]

    def _request_global_reset(self, identity: int) -> List[Reply]:
        try:
            self._authorize_global_reset(identity)
        except AuthorizationError:
            logger.warning("Refused reset all from %s", identity)
            return [Reply(ADMIN_ONLY_TEXT)]
        self.sessions.transition(identity, SessionState.AWAITING_GLOBAL_RESET_CONFIRM)
        return [Reply(RESET_ALL_PROMPT_TEXT, parse_mode="Markdown")]


__all__ = ["KEYBOARD_MENU", "KEYBOARD_REMOVE", "Reply", "Router"]
