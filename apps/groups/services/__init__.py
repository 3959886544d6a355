"""
Groups app services layer.

Services contain business logic and orchestrate operations across the
data access layer and the notification dispatcher.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    UserNotFoundError,
    AlreadyMemberError,
    NotMemberError,
)

from .group_management import (
    create_group,
    get_group_by_id,
    get_groups_for_user,
)

from .membership_management import (
    add_member,
    get_group_members,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'UserNotFoundError',
    'AlreadyMemberError',
    'NotMemberError',

    # Group Management
    'create_group',
    'get_group_by_id',
    'get_groups_for_user',

    # Membership Management
    'add_member',
    'get_group_members',
]
