"""Permission resolver: role grants, owner and administrator bypass, channel overrides.

Resolution order:

1. Server owner: everything granted, overrides ignored.
2. Base grants: OR of every assigned role's permissions.
3. Administrator on any role: everything granted, overrides ignored.
4. Role overrides for the user's own roles, least senior role first, so the
   most senior role's override decides conflicts between the user's roles.
5. User overrides for this user, last, so they beat any role override.

Within one override ``allow`` is applied before ``deny``; a key listed in both
ends up denied. Overrides never grant or revoke ``administrator``; it only
ever comes from a role.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rampart.core.hierarchy import calculate_role_hierarchy
from rampart.models.override import ChannelPermissionOverride
from rampart.models.permission import ALL_PERMISSIONS_MASK, EffectivePermissions, Permission
from rampart.models.role import Role

logger = logging.getLogger(__name__)

_OVERRIDABLE_MASK = ALL_PERMISSIONS_MASK & ~Permission.ADMINISTRATOR.bit


def _apply_override(mask: int, override: ChannelPermissionOverride) -> int:
    allow = override.allow_mask & _OVERRIDABLE_MASK
    deny = override.deny_mask & _OVERRIDABLE_MASK
    return (mask | allow) & ~deny & ALL_PERMISSIONS_MASK


def _applicable_overrides(
    roles: Sequence[Role],
    overrides: Iterable[ChannelPermissionOverride],
    user_id: str | None,
) -> tuple[list[ChannelPermissionOverride], list[ChannelPermissionOverride]]:
    """Split overrides into (role overrides in application order, user overrides)."""
    # Position in ascending seniority, for ordering role overrides.
    ascending = list(reversed(calculate_role_hierarchy(roles)))
    seniority = {role.id: index for index, role in enumerate(ascending) if role.id}

    role_scoped: list[tuple[int, int, ChannelPermissionOverride]] = []
    user_scoped: list[ChannelPermissionOverride] = []
    for order, override in enumerate(overrides):
        target = override.target
        if target is None:
            logger.debug("Ignoring untargeted override %s on channel %s", override.id, override.channel_id)
            continue
        kind, target_id = target
        if kind == "role" and target_id in seniority:
            role_scoped.append((seniority[target_id], order, override))
        elif kind == "user" and user_id and target_id == user_id:
            user_scoped.append(override)

    role_scoped.sort(key=lambda item: (item[0], item[1]))
    return [item[2] for item in role_scoped], user_scoped


def get_effective_permissions(
    roles: Iterable[Role],
    overrides: Iterable[ChannelPermissionOverride] = (),
    is_owner: bool = False,
    *,
    user_id: str | None = None,
) -> EffectivePermissions:
    """Resolve a user's permissions in a channel.

    Args:
        roles: Roles assigned to the user (possibly empty).
        overrides: Every override on the channel; ones that do not concern
            this user are skipped.
        is_owner: Whether the user owns the server.
        user_id: The user being evaluated, used to match user overrides.

    Returns:
        An EffectivePermissions with every key set.
    """
    if is_owner:
        return EffectivePermissions.everything()

    roles = list(roles)
    mask = 0
    for role in roles:
        mask |= role.permission_mask

    if mask & Permission.ADMINISTRATOR.bit:
        return EffectivePermissions.everything()

    role_overrides, user_overrides = _applicable_overrides(roles, overrides, user_id)
    for override in role_overrides:
        mask = _apply_override(mask, override)
    for override in user_overrides:
        mask = _apply_override(mask, override)

    return EffectivePermissions.from_mask(mask)
