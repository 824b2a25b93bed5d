"""Rampart: role and channel permission resolution for community servers."""

from rampart.auth.permissions import (
    get_all_permissions,
    get_permission_description,
    has_permission,
    is_valid_permission,
)
from rampart.core.access import check_role_management, get_channel_access, get_server_access
from rampart.core.guard import can_manage_overrides, can_manage_role, manageable_roles
from rampart.core.hierarchy import calculate_role_hierarchy, get_highest_role
from rampart.core.resolver import get_effective_permissions
from rampart.models import (
    ChannelPermissionOverride,
    EffectivePermissions,
    InvalidOverrideError,
    Permission,
    Role,
    ServerSnapshot,
)

__version__ = "0.1.0"

__all__ = [
    "ChannelPermissionOverride",
    "EffectivePermissions",
    "InvalidOverrideError",
    "Permission",
    "Role",
    "ServerSnapshot",
    "calculate_role_hierarchy",
    "can_manage_overrides",
    "can_manage_role",
    "check_role_management",
    "get_all_permissions",
    "get_channel_access",
    "get_effective_permissions",
    "get_highest_role",
    "get_permission_description",
    "get_server_access",
    "has_permission",
    "is_valid_permission",
    "manageable_roles",
]
