"""Exception types shared by the store, router and Telegram layer."""


class BendaharaError(Exception):
    """Base class for all ledger errors."""


class ValidationError(BendaharaError):
    """Malformed user input such as a zero amount or a blank name."""


class AuthorizationError(BendaharaError):
    """A non-privileged identity asked for a privileged operation."""


class StoreError(BendaharaError):
    """The underlying database failed."""


class DeliveryError(BendaharaError):
    """Sending an export file back to the chat failed."""


class InvalidTransitionError(BendaharaError):
    """A session tried to enter a second pending dialogue."""


__all__ = [
    "BendaharaError",
    "ValidationError",
    "AuthorizationError",
    "StoreError",
    "DeliveryError",
    "InvalidTransitionError",
]
