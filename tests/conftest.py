"""Shared test fixtures for Rampart."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from rampart.config import Config
from rampart.models.override import ChannelPermissionOverride
from rampart.models.role import Role
from rampart.models.snapshot import ServerSnapshot
from rampart.storage.snapshot import dump_snapshot


@pytest.fixture
def make_role() -> Callable[..., Role]:
    def _make(role_id: str, position: int | None = 0, **grants: Any) -> Role:
        return Role(id=role_id, server_id="srv", name=role_id.title(), position=position, **grants)

    return _make


@pytest.fixture
def make_override() -> Callable[..., ChannelPermissionOverride]:
    def _make(
        *,
        role_id: str | None = None,
        user_id: str | None = None,
        allow: list[str] | None = None,
        deny: list[str] | None = None,
        channel_id: str = "general",
    ) -> ChannelPermissionOverride:
        return ChannelPermissionOverride(
            channel_id=channel_id,
            role_id=role_id,
            user_id=user_id,
            allow=allow or [],
            deny=deny or [],
        )

    return _make


@pytest.fixture
def snapshot() -> ServerSnapshot:
    return ServerSnapshot.model_validate(
        {
            "serverId": "srv",
            "ownerId": "owner",
            "roles": [
                {"$id": "everyone", "name": "Everyone", "position": 0, "readMessages": True, "sendMessages": True},
                {"$id": "mod", "name": "Moderator", "position": 5, "manageMessages": True, "manageRoles": True},
                {"$id": "admin", "name": "Admin", "position": 10, "administrator": True},
                {"$id": "elsewhere", "serverId": "other", "name": "Foreign", "position": 99, "administrator": True},
            ],
            "members": {
                "alice": ["everyone", "mod"],
                "bob": ["everyone"],
                "carol": ["everyone", "admin"],
                "mallory": ["everyone", "elsewhere"],
            },
            "channels": ["general", "announcements"],
            "overrides": [
                {"$id": "o1", "channelId": "announcements", "roleId": "everyone", "deny": ["sendMessages"]},
                {"$id": "o2", "channelId": "announcements", "roleId": "mod", "allow": ["sendMessages"]},
                {"$id": "o3", "channelId": "general", "userId": "bob", "deny": ["readMessages"]},
            ],
        }
    )


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot: ServerSnapshot) -> Path:
    path = tmp_path / "server.yaml"
    dump_snapshot(snapshot, path)
    return path


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(home=tmp_path)
