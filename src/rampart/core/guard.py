"""Role-management guard: who may create, edit, delete or assign a role."""

from __future__ import annotations

from collections.abc import Iterable

from rampart.core.hierarchy import calculate_role_hierarchy, get_highest_role
from rampart.core.resolver import get_effective_permissions
from rampart.models.role import Role


def can_manage_role(actor_roles: Iterable[Role], target_role: Role, actor_is_owner: bool = False) -> bool:
    """Check if an actor may manage target_role.

    The owner may manage every role. Anyone else needs manageRoles or
    administrator on at least one role, and their highest role must rank
    strictly above the target. Administrator does not lift the rank check.
    """
    if actor_is_owner:
        return True

    actor_roles = list(actor_roles)
    if not any(role.manage_roles or role.administrator for role in actor_roles):
        return False

    highest = get_highest_role(actor_roles)
    if highest is None:
        return False
    return highest.rank > target_role.rank


def manageable_roles(
    actor_roles: Iterable[Role], roles: Iterable[Role], actor_is_owner: bool = False
) -> list[Role]:
    """Return the roles an actor may manage, most senior first."""
    actor_roles = list(actor_roles)
    return [
        role
        for role in calculate_role_hierarchy(roles)
        if can_manage_role(actor_roles, role, actor_is_owner)
    ]


def can_manage_overrides(actor_roles: Iterable[Role], actor_is_owner: bool = False) -> bool:
    """Check if an actor may create, edit or delete channel overrides."""
    permissions = get_effective_permissions(actor_roles, is_owner=actor_is_owner)
    return permissions.manage_channels or permissions.manage_roles
