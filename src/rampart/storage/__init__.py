"""Rampart snapshot files."""

from rampart.storage.snapshot import SnapshotError, dump_snapshot, load_snapshot

__all__ = ["SnapshotError", "dump_snapshot", "load_snapshot"]
