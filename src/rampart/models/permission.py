"""Permission keys and the effective permission map."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_snake


class Permission(str, Enum):
    """The closed set of capabilities a role or override can grant."""

    READ_MESSAGES = "readMessages"
    SEND_MESSAGES = "sendMessages"
    MANAGE_MESSAGES = "manageMessages"
    MANAGE_CHANNELS = "manageChannels"
    MANAGE_ROLES = "manageRoles"
    MANAGE_SERVER = "manageServer"
    MENTION_EVERYONE = "mentionEveryone"
    ADMINISTRATOR = "administrator"

    @property
    def bit(self) -> int:
        return _BITS[self]

    @property
    def field_name(self) -> str:
        """Attribute name on Role and EffectivePermissions."""
        return to_snake(self.value)


_BITS = {permission: 1 << index for index, permission in enumerate(Permission)}

ALL_PERMISSIONS_MASK = (1 << len(Permission)) - 1


def parse_permission(value: Any) -> Permission | None:
    """Return the Permission named by value, or None if it names nothing."""
    if isinstance(value, Permission):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Permission(value)
    except ValueError:
        return None


def mask_of(keys: Iterable[Any]) -> int:
    """Fold permission names into a bitmask, skipping unrecognized names."""
    mask = 0
    for key in keys:
        permission = parse_permission(key)
        if permission is not None:
            mask |= permission.bit
    return mask


class EffectivePermissions(BaseModel):
    """Resolved permissions for one user in one server or channel."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    read_messages: bool = False
    send_messages: bool = False
    manage_messages: bool = False
    manage_channels: bool = False
    manage_roles: bool = False
    manage_server: bool = False
    mention_everyone: bool = False
    administrator: bool = False

    @classmethod
    def from_mask(cls, mask: int) -> EffectivePermissions:
        return cls(**{p.field_name: bool(mask & p.bit) for p in Permission})

    @classmethod
    def none(cls) -> EffectivePermissions:
        return cls.from_mask(0)

    @classmethod
    def everything(cls) -> EffectivePermissions:
        return cls.from_mask(ALL_PERMISSIONS_MASK)

    @property
    def mask(self) -> int:
        return sum(p.bit for p in Permission if getattr(self, p.field_name))

    def get(self, permission: Permission | str) -> bool:
        """Look up one key; unknown names resolve to False."""
        parsed = parse_permission(permission)
        if parsed is None:
            return False
        return bool(getattr(self, parsed.field_name))

    def granted(self) -> list[Permission]:
        return [p for p in Permission if getattr(self, p.field_name)]

    def to_dict(self) -> dict[str, bool]:
        return {p.value: bool(getattr(self, p.field_name)) for p in Permission}

    def to_response(self) -> dict[str, Any]:
        return {"_v": "1.0", **self.to_dict()}
