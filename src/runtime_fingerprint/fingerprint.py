"""
Platform fingerprint.

Bundles the runtime identity with operating system facts into a single
serializable report.
"""

from __future__ import annotations

import json
import platform
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import distro

from runtime_fingerprint.core import RuntimeDetector
from runtime_fingerprint.runtime import Runtime


@dataclass
class PlatformFingerprint:
    """Runtime and OS identity of a host at a point in time."""

    runtime: Runtime | None
    timestamp: str
    fingerprint_version: str
    os: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert fingerprint to dictionary for serialization."""
        return {
            "meta": {
                "timestamp": self.timestamp,
                "fingerprint_version": self.fingerprint_version,
            },
            "runtime": self.runtime.to_dict() if self.runtime else None,
            "os": self.os,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize fingerprint to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


def get_os_info() -> dict[str, Any]:
    """Get operating system information."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "architecture": platform.machine(),
        "distro_id": distro.id(),
        "distro_name": distro.name(pretty=True),
        "distro_version": distro.version(),
    }


def collect_fingerprint(detector: RuntimeDetector | None = None) -> PlatformFingerprint:
    """
    Collect the platform fingerprint of the host.

    Args:
        detector: Runtime detector to use. Describes the running Python
            interpreter when not provided.
    """
    from runtime_fingerprint import __version__

    detector = detector or RuntimeDetector()

    return PlatformFingerprint(
        runtime=detector.detect(),
        timestamp=datetime.now(timezone.utc).isoformat(),
        fingerprint_version=__version__,
        os=get_os_info(),
    )
