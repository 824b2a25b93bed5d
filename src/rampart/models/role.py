"""Role model as supplied by the role registry."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from rampart.models.permission import Permission

DEFAULT_ROLE_COLOR = "#6B7280"


class Role(BaseModel):
    """A named, ranked bundle of permission grants within one server."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4())[:8],
        validation_alias=AliasChoices("id", "$id"),
    )
    server_id: str = ""
    name: str = ""
    color: str = DEFAULT_ROLE_COLOR
    position: int | None = None

    read_messages: bool = False
    send_messages: bool = False
    manage_messages: bool = False
    manage_channels: bool = False
    manage_roles: bool = False
    manage_server: bool = False
    mention_everyone: bool = False
    administrator: bool = False

    mentionable: bool = False
    member_count: int | None = None

    @field_validator("position", mode="before")
    @classmethod
    def _coerce_position(cls, value: Any) -> int | None:
        # Stores occasionally hand back null, strings or floats here.
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return None

    @property
    def rank(self) -> tuple[bool, int]:
        """Comparable seniority; roles without a position sit below every positioned role."""
        if self.position is None:
            return (False, 0)
        return (True, self.position)

    @property
    def permission_mask(self) -> int:
        mask = 0
        for permission in Permission:
            if getattr(self, permission.field_name):
                mask |= permission.bit
        return mask

    def has(self, permission: Permission) -> bool:
        return bool(self.permission_mask & permission.bit)

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_response(self, *, detail: str = "summary") -> dict[str, Any]:
        data: dict[str, Any] = {
            "_v": "1.0",
            "id": self.id,
            "name": self.name,
            "position": self.position,
        }
        if detail != "summary":
            data.update(
                {
                    "serverId": self.server_id,
                    "color": self.color,
                    "mentionable": self.mentionable,
                    "memberCount": self.member_count,
                    "permissions": [p.value for p in Permission if self.has(p)],
                }
            )
        return data
