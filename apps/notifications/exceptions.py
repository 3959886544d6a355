"""Domain exceptions for notifications app."""


class NotificationError(Exception):
    """Base exception for notification errors."""
    pass


class DeliveryFailedError(NotificationError):
    """
    Raised when the email transport fails to send a notification.

    Never fatal to the workflow that triggered it: callers log it and keep
    the already-committed data change.
    """

    def __init__(self, kind, recipient, original=None):
        self.kind = kind
        self.recipient = recipient
        self.original = original
        super().__init__(f"Failed to deliver {kind} notification to {recipient}: {original}")


class UnknownNotificationKindError(NotificationError):
    """Raised when asked to build a message for an unsupported kind."""
    pass
