"""Server and channel access checks over a ServerSnapshot."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from rampart.core.guard import can_manage_role
from rampart.core.resolver import get_effective_permissions
from rampart.models.permission import EffectivePermissions
from rampart.models.snapshot import ServerSnapshot

logger = logging.getLogger(__name__)


class ServerAccess(BaseModel):
    """Server-level standing of one user."""

    server_id: str
    user_id: str
    is_server_owner: bool
    is_member: bool
    permissions: EffectivePermissions

    def to_response(self) -> dict[str, Any]:
        return {
            "_v": "1.0",
            "serverId": self.server_id,
            "userId": self.user_id,
            "isServerOwner": self.is_server_owner,
            "isMember": self.is_member,
            "permissions": self.permissions.to_dict(),
        }


class ChannelAccess(ServerAccess):
    """Channel-level standing of one user, overrides included."""

    channel_id: str

    @property
    def can_read(self) -> bool:
        return self.permissions.read_messages

    @property
    def can_send(self) -> bool:
        return self.permissions.send_messages

    def to_response(self) -> dict[str, Any]:
        data = super().to_response()
        data.update({"channelId": self.channel_id, "canRead": self.can_read, "canSend": self.can_send})
        return data


def get_server_access(snapshot: ServerSnapshot, user_id: str) -> ServerAccess:
    """Resolve server-wide permissions for a user, without channel overrides."""
    is_owner = bool(user_id) and user_id == snapshot.owner_id
    is_member = snapshot.is_member(user_id)
    if is_member:
        permissions = get_effective_permissions(snapshot.roles_for(user_id), is_owner=is_owner, user_id=user_id)
    else:
        permissions = EffectivePermissions.none()
    return ServerAccess(
        server_id=snapshot.server_id,
        user_id=user_id,
        is_server_owner=is_owner,
        is_member=is_member,
        permissions=permissions,
    )


def get_channel_access(snapshot: ServerSnapshot, channel_id: str, user_id: str) -> ChannelAccess:
    """Resolve a user's permissions in one channel of the snapshot's server.

    A channel missing from a non-empty ``channels`` list does not belong to
    this server, so nobody, the owner included, gets anything in it.
    """
    server = get_server_access(snapshot, user_id)
    if not server.is_member:
        permissions = server.permissions
    elif snapshot.channels and channel_id not in snapshot.channels:
        logger.debug("Channel %s is not listed for server %s", channel_id, snapshot.server_id)
        permissions = EffectivePermissions.none()
    else:
        permissions = get_effective_permissions(
            snapshot.roles_for(user_id),
            snapshot.overrides_for(channel_id),
            server.is_server_owner,
            user_id=user_id,
        )
    return ChannelAccess(
        server_id=server.server_id,
        user_id=user_id,
        channel_id=channel_id,
        is_server_owner=server.is_server_owner,
        is_member=server.is_member,
        permissions=permissions,
    )


def check_role_management(snapshot: ServerSnapshot, actor_id: str, target_role_id: str) -> bool:
    """Check if actor_id may manage the role target_role_id on this server."""
    target = snapshot.get_role(target_role_id)
    if target is None:
        return False
    if not snapshot.is_member(actor_id):
        return False
    is_owner = actor_id == snapshot.owner_id
    return can_manage_role(snapshot.roles_for(actor_id), target, is_owner)
