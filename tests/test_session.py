import pytest

from bendahara.bot.session import SessionState, SessionStore
from bendahara.errors import InvalidTransitionError


@pytest.fixture()
def sessions():
    return SessionStore()


def test_new_identity_is_idle(sessions):
    assert sessions.get(1) is SessionState.IDLE
    assert len(sessions) == 0


def test_transition_and_clear(sessions):
    sessions.transition(1, SessionState.AWAITING_NAME)
    assert sessions.get(1) is SessionState.AWAITING_NAME

    sessions.clear(1)
    assert sessions.get(1) is SessionState.IDLE
    assert len(sessions) == 0


@pytest.mark.parametrize("first,second", [
    (SessionState.AWAITING_NAME, SessionState.AWAITING_PERSONAL_RESET_CONFIRM),
    (SessionState.AWAITING_PERSONAL_RESET_CONFIRM, SessionState.AWAITING_GLOBAL_RESET_CONFIRM),
    (SessionState.AWAITING_GLOBAL_RESET_CONFIRM, SessionState.AWAITING_PERSONAL_RESET_CONFIRM),
])
def test_only_one_pending_dialogue(sessions, first, second):
    sessions.transition(1, first)
    with pytest.raises(InvalidTransitionError):
        sessions.transition(1, second)
    assert sessions.get(1) is first


def test_states_are_per_identity(sessions):
    sessions.transition(1, SessionState.AWAITING_PERSONAL_RESET_CONFIRM)
    sessions.transition(2, SessionState.AWAITING_NAME)

    assert sessions.get(1) is SessionState.AWAITING_PERSONAL_RESET_CONFIRM
    assert sessions.get(2) is SessionState.AWAITING_NAME
    assert sessions.get(3) is SessionState.IDLE
