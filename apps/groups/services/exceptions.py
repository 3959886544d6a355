"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class GroupsServiceError(Exception):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError):
    """Raised when a group does not exist."""
    pass


class UserNotFoundError(GroupsServiceError):
    """Raised when a user referenced by username or id does not exist."""
    pass


class AlreadyMemberError(GroupsServiceError):
    """Raised when a user is added to a group they're already in."""
    pass


class NotMemberError(GroupsServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass
