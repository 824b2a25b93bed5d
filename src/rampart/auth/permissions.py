"""Permission key catalog: listing, descriptions and checks."""

from __future__ import annotations

from typing import Any

from rampart.models.permission import EffectivePermissions, Permission, parse_permission

_DESCRIPTIONS = {
    Permission.READ_MESSAGES: "View channels and read message history",
    Permission.SEND_MESSAGES: "Send messages in channels",
    Permission.MANAGE_MESSAGES: "Delete and edit messages from other users",
    Permission.MANAGE_CHANNELS: "Create, edit, and delete channels",
    Permission.MANAGE_ROLES: "Create and modify roles below their highest role",
    Permission.MANAGE_SERVER: "Change server name and other server settings",
    Permission.MENTION_EVERYONE: "Use @everyone and @here mentions",
    Permission.ADMINISTRATOR: "All permissions and bypass channel overrides",
}


def get_all_permissions() -> list[Permission]:
    """Return every permission key in catalog order."""
    return list(Permission)


def get_permission_description(permission: Permission | str) -> str:
    """Return a human-readable description, or an empty string for unknown keys."""
    parsed = parse_permission(permission)
    if parsed is None:
        return ""
    return _DESCRIPTIONS[parsed]


def is_valid_permission(value: Any) -> bool:
    """Check if a value names one of the permission keys."""
    return parse_permission(value) is not None


def has_permission(permission: Permission | str, effective: EffectivePermissions) -> bool:
    """Check a resolved permission map, letting administrator bypass the check."""
    if effective.administrator:
        return True
    return effective.get(permission)
