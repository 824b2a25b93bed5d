"""Point-in-time view of one server's roles, members and channel overrides."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from rampart.models.override import ChannelPermissionOverride
from rampart.models.role import Role


class ServerSnapshot(BaseModel):
    """Roles, role assignments and overrides of a server, as fetched by a caller."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    server_id: str
    owner_id: str = ""
    roles: list[Role] = Field(default_factory=list)
    members: dict[str, list[str]] = Field(default_factory=dict)
    channels: list[str] = Field(default_factory=list)
    overrides: list[ChannelPermissionOverride] = Field(default_factory=list)

    @model_validator(mode="after")
    def _adopt_unowned_roles(self) -> ServerSnapshot:
        # Copies, so Role records shared with other snapshots stay untouched.
        self.roles = [
            role if role.server_id else role.model_copy(update={"server_id": self.server_id})
            for role in self.roles
        ]
        return self

    def is_member(self, user_id: str) -> bool:
        if not user_id:
            return False
        return user_id == self.owner_id or user_id in self.members

    @property
    def server_roles(self) -> list[Role]:
        return [r for r in self.roles if r.server_id == self.server_id]

    def get_role(self, role_id: str) -> Role | None:
        for role in self.server_roles:
            if role.id == role_id:
                return role
        return None

    def roles_for(self, user_id: str) -> list[Role]:
        """Roles assigned to a user, restricted to this server."""
        assigned = set(self.members.get(user_id, []))
        return [r for r in self.server_roles if r.id in assigned]

    def overrides_for(self, channel_id: str) -> list[ChannelPermissionOverride]:
        return [o for o in self.overrides if o.channel_id == channel_id]

    def to_storage(self) -> dict[str, Any]:
        return {
            "serverId": self.server_id,
            "ownerId": self.owner_id,
            "roles": [r.to_storage() for r in self.roles],
            "members": {user: list(role_ids) for user, role_ids in self.members.items()},
            "channels": list(self.channels),
            "overrides": [o.to_storage() for o in self.overrides],
        }
