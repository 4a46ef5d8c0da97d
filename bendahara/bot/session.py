"""Per-identity dialogue state."""

import logging
from enum import Enum
from typing import Dict

from ..errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    AWAITING_NAME = "awaiting_name"
    AWAITING_PERSONAL_RESET_CONFIRM = "awaiting_personal_reset_confirm"
    AWAITING_GLOBAL_RESET_CONFIRM = "awaiting_global_reset_confirm"

    @property
    def is_pending(self) -> bool:
        return self is not SessionState.IDLE


class SessionStore:
    """In-memory map from identity to its single dialogue state.

    Every change goes through :meth:`transition`. A pending dialogue can only
    return to ``IDLE``; starting a new dialogue is only possible from ``IDLE``.
    State is process-local and lost on restart.
    """

    def __init__(self):
        self._states: Dict[int, SessionState] = {}

    def get(self, identity: int) -> SessionState:
        return self._states.get(identity, SessionState.IDLE)

    def transition(self, identity: int, target: SessionState) -> SessionState:
        current = self.get(identity)
        if current.is_pending and target.is_pending:
            raise InvalidTransitionError(f"{identity}: {current.value} -> {target.value}")
        if target is SessionState.IDLE:
            self._states.pop(identity, None)
        else:
            self._states[identity] = target
        logger.debug("session %s: %s -> %s", identity, current.value, target.value)
        return target

    def clear(self, identity: int) -> None:
        self.transition(identity, SessionState.IDLE)

    def __len__(self) -> int:
        return len(self._states)


__all__ = ["SessionState", "SessionStore"]
