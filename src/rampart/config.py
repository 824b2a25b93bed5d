"""Rampart configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class Config:
    """Rampart configuration."""

    home: Path = field(default_factory=lambda: Path.home() / ".rampart")
    log_level: str = "WARNING"
    snapshot_file: str = "snapshot.yaml"

    # Upper bound for PermissionCache instances built from this config
    cache_max_entries: int = 1024

    @classmethod
    def load(cls, home: Path | None = None) -> Config:
        """Load config from env vars, then YAML file, then defaults."""
        config = cls()

        if home:
            config.home = home

        env_home = os.environ.get("RAMPART_HOME")
        if env_home:
            config.home = Path(env_home)

        # Load YAML config if exists
        config_file = config.home / "config.yaml"
        if config_file.exists():
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
            for key, value in data.items():
                if key != "home" and hasattr(config, key):
                    expected_type = type(getattr(config, key))
                    setattr(config, key, expected_type(value))

        env_log = os.environ.get("RAMPART_LOG_LEVEL")
        if env_log:
            config.log_level = env_log

        env_snapshot = os.environ.get("RAMPART_SNAPSHOT")
        if env_snapshot:
            config.snapshot_file = env_snapshot

        return config

    @property
    def snapshot_path(self) -> Path:
        path = Path(self.snapshot_file).expanduser()
        return path if path.is_absolute() else self.home / path

    def save(self) -> None:
        """Save current config to YAML."""
        self.home.mkdir(parents=True, exist_ok=True)
        config_file = self.home / "config.yaml"
        data = {
            "log_level": self.log_level,
            "snapshot_file": self.snapshot_file,
            "cache_max_entries": self.cache_max_entries,
        }
        with open(config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
