"""Read and write ServerSnapshot files (YAML or JSON)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from rampart.models.snapshot import ServerSnapshot

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read or does not describe a server."""


def load_snapshot(path: Path) -> ServerSnapshot:
    """Load a snapshot from a YAML file. JSON files work too, being valid YAML."""
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"Snapshot not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Unparseable snapshot %s: %s", path, e)
        raise SnapshotError(f"Snapshot {path} is not valid YAML") from e

    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot {path} must contain a mapping")

    try:
        return ServerSnapshot.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid snapshot %s: %s", path, e)
        raise SnapshotError(f"Snapshot {path} is invalid: {e.error_count()} error(s)") from e


def dump_snapshot(snapshot: ServerSnapshot, path: Path) -> None:
    """Write a snapshot as YAML, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(snapshot.to_storage(), f, default_flow_style=False, sort_keys=False)
