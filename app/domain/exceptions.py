"""Errors raised by the notification subsystem and its collaborators."""


class NotificationError(Exception):
    """Base class for notification related failures."""


class NotFoundError(NotificationError, LookupError):
    """Requested notification or user does not exist or is not owned by the caller."""


class PreferenceValidationError(NotificationError, ValueError):
    """Notification preference update could not be interpreted."""


class DeliveryFailure(NotificationError):
    """A realtime push or an email could not be transmitted."""


class PersistenceFailure(NotificationError):
    """A notification could not be written to the ledger."""


__all__ = [
    "NotificationError",
    "NotFoundError",
    "PreferenceValidationError",
    "DeliveryFailure",
    "PersistenceFailure",
]
