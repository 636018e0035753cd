"""
Configuration management for Runtime Fingerprint.

Supports configuration via YAML files, environment variables, and programmatic access.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from runtime_fingerprint.overrides import NETCORE_COMPONENT, NETCORE_MARKER

DEFAULT_CONFIG_PATHS = [
    Path("/etc/runtime-fingerprint/config.yaml"),
    Path.home() / ".config" / "runtime-fingerprint" / "config.yaml",
    Path("runtime-fingerprint.yaml"),
]

# Nested YAML sections and the field prefix their keys map to
SECTION_PREFIXES = {
    "host": "host_",
    "overrides": "",
    "logging": "log_",
}


@dataclass
class Config:
    """
    Configuration container for Runtime Fingerprint.

    Priority (highest to lowest):
    1. Programmatic values passed to __init__
    2. Environment variables (prefixed with FINGERPRINT_)
    3. Config file values
    4. Default values
    """

    # Host description (unset = the running Python interpreter)
    host_description: str | None = None
    host_target: str | None = None
    host_version_major: int | None = None

    # Override strategies
    netcore_marker: str = NETCORE_MARKER
    netcore_component: str = NETCORE_COMPONENT
    component_origins: dict[str, str] = field(default_factory=dict)
    installed_releases: list[dict[str, Any]] = field(default_factory=list)

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        # Keys left blank in YAML load as None
        self.netcore_marker = self.netcore_marker or NETCORE_MARKER
        self.netcore_component = self.netcore_component or NETCORE_COMPONENT
        self.component_origins = self.component_origins or {}
        self.installed_releases = self.installed_releases or []
        self.log_level = self.log_level or "INFO"

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create config from a dictionary."""
        # Flatten known sections, e.g. host.description -> host_description
        flat = {}
        for key, value in data.items():
            prefix = SECTION_PREFIXES.get(key)
            if prefix is not None and isinstance(value, dict):
                for subkey, subvalue in value.items():
                    flat[f"{prefix}{subkey}"] = subvalue
            else:
                flat[key] = value

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in flat.items() if k in known_fields}

        return cls(**filtered)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """
        Load configuration with full resolution order.

        Args:
            config_path: Explicit path to config file. If None, searches
                        default locations.

        Returns:
            Fully resolved Config instance.
        """
        if config_path:
            config = cls.from_file(config_path)
        else:
            config = cls()
            for path in DEFAULT_CONFIG_PATHS:
                if path.exists():
                    config = cls.from_file(path)
                    break

        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "FINGERPRINT_HOST_DESCRIPTION": ("host_description", str),
            "FINGERPRINT_HOST_TARGET": ("host_target", str),
            "FINGERPRINT_HOST_VERSION_MAJOR": ("host_version_major", int),
            "FINGERPRINT_NETCORE_MARKER": ("netcore_marker", str),
            "FINGERPRINT_NETCORE_COMPONENT": ("netcore_component", str),
            "FINGERPRINT_LOG_LEVEL": ("log_level", str),
            "FINGERPRINT_LOG_FILE": ("log_file", str),
        }

        for env_var, (attr, convert) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                setattr(self, attr, convert(value))

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "host": {
                "description": self.host_description,
                "target": self.host_target,
                "version_major": self.host_version_major,
            },
            "overrides": {
                "netcore_marker": self.netcore_marker,
                "netcore_component": self.netcore_component,
                "component_origins": self.component_origins,
                "installed_releases": self.installed_releases,
            },
            "logging": {
                "level": self.log_level,
                "file": self.log_file,
            },
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
