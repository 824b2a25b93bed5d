"""Channel permission override model."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from rampart.models.permission import Permission, mask_of, parse_permission

TargetKind = Literal["role", "user"]


class InvalidOverrideError(ValueError):
    """Raised when an override is rejected at write time."""


class ChannelPermissionOverride(BaseModel):
    """A per-channel allow/deny adjustment for exactly one role or one user.

    Records read back from a store are accepted as-is: an override that
    targets both a role and a user, or neither, is simply inert, and
    unrecognized names in ``allow``/``deny`` are ignored. Use :meth:`create`
    (or :meth:`validate_for_write`) on the write path to reject such records.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4())[:8],
        validation_alias=AliasChoices("id", "$id"),
    )
    channel_id: str = ""
    role_id: str | None = None
    user_id: str | None = None
    allow: list[str] = Field(default_factory=list)
    deny: list[str] = Field(default_factory=list)

    @field_validator("role_id", "user_id", mode="before")
    @classmethod
    def _coerce_target(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("allow", "deny", mode="before")
    @classmethod
    def _coerce_keys(cls, value: Any) -> list[str]:
        if not isinstance(value, list | tuple | set | frozenset):
            return []
        return [
            key.value if isinstance(key, Permission) else key for key in value if isinstance(key, str)
        ]

    @classmethod
    def create(
        cls,
        *,
        channel_id: str,
        role_id: str | None = None,
        user_id: str | None = None,
        allow: Iterable[Permission | str] = (),
        deny: Iterable[Permission | str] = (),
    ) -> ChannelPermissionOverride:
        """Build an override for the write path, rejecting malformed input.

        Raises:
            InvalidOverrideError: If the target is not exactly one of
                role/user, a key is unrecognized, a key is both allowed
                and denied, or administrator is listed at all.
        """
        override = cls(
            channel_id=channel_id,
            role_id=role_id,
            user_id=user_id,
            allow=list(allow),
            deny=list(deny),
        )
        override.validate_for_write()
        return override

    @property
    def target(self) -> tuple[TargetKind, str] | None:
        """The single role or user this override applies to, if well-targeted."""
        has_role = bool(self.role_id)
        has_user = bool(self.user_id)
        if has_role and not has_user:
            return ("role", self.role_id)  # type: ignore[return-value]
        if has_user and not has_role:
            return ("user", self.user_id)  # type: ignore[return-value]
        return None

    @property
    def allow_mask(self) -> int:
        return mask_of(self.allow)

    @property
    def deny_mask(self) -> int:
        return mask_of(self.deny)

    def unknown_keys(self) -> list[str]:
        return [key for key in [*self.allow, *self.deny] if parse_permission(key) is None]

    def conflicting_keys(self) -> list[Permission]:
        both = self.allow_mask & self.deny_mask
        return [p for p in Permission if both & p.bit]

    def problems(self) -> list[str]:
        """Describe every write-time rule this override breaks."""
        issues = []
        if self.target is None:
            issues.append("override must target exactly one of roleId or userId")
        unknown = self.unknown_keys()
        if unknown:
            issues.append(f"unknown permission(s): {', '.join(sorted(set(unknown)))}")
        conflicts = self.conflicting_keys()
        if conflicts:
            names = ", ".join(p.value for p in conflicts)
            issues.append(f"permission(s) both allowed and denied: {names}")
        if Permission.ADMINISTRATOR.bit & (self.allow_mask | self.deny_mask):
            issues.append("administrator cannot be set by a channel override")
        return issues

    def validate_for_write(self) -> None:
        issues = self.problems()
        if issues:
            raise InvalidOverrideError(f"Invalid override {self.id}: {'; '.join(issues)}")

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_response(self) -> dict[str, Any]:
        return {
            "_v": "1.0",
            "id": self.id,
            "channelId": self.channel_id,
            "roleId": self.role_id,
            "userId": self.user_id,
            "allow": list(self.allow),
            "deny": list(self.deny),
        }
