"""Rampart data models."""

from rampart.models.override import ChannelPermissionOverride, InvalidOverrideError
from rampart.models.permission import EffectivePermissions, Permission
from rampart.models.role import Role
from rampart.models.snapshot import ServerSnapshot

__all__ = [
    "ChannelPermissionOverride",
    "EffectivePermissions",
    "InvalidOverrideError",
    "Permission",
    "Role",
    "ServerSnapshot",
]
