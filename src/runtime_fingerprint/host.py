"""
Host environment description.

By default the host is the running Python interpreter. Configuration can
describe another host instead, e.g. a sidecar agent reporting for the
.NET process it monitors.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from runtime_fingerprint.parser import parse
from runtime_fingerprint.runtime import RuntimeFamily, classify_family, parse_family

if TYPE_CHECKING:
    from runtime_fingerprint.config import Config


def leading_major(version: str | None) -> int | None:
    """Return the leading integer of a version string ("4.7.2633.0" -> 4)."""
    if not version:
        return None
    head = version.split(".", 1)[0]
    return int(head) if head.isdigit() else None


@dataclass
class HostEnvironment:
    """What the host reports about itself."""

    # Raw runtime descriptor, e.g. ".NET Framework 4.7.2633.0"
    description: str | None = None
    # Family the host was built for; selects the override strategy
    target: RuntimeFamily | None = None
    # Major version of the host runtime itself (e.g. CLR 4)
    version_major: int | None = None

    @classmethod
    def current(cls) -> HostEnvironment:
        """Describe the running Python interpreter."""
        implementation = platform.python_implementation()
        return cls(
            description=f"{implementation} {platform.python_version()}",
            target=classify_family(implementation),
            version_major=sys.version_info.major,
        )

    @classmethod
    def from_config(cls, config: Config) -> HostEnvironment:
        """
        Build the host description from configuration.

        Without a configured description the current interpreter is used.
        A configured description without an explicit target is classified
        from the descriptor's own name, and without an explicit major
        version takes the leading number of the descriptor's version.

        Raises:
            ValueError: If the configured target is not a known family.
        """
        if config.host_description is None:
            host = cls.current()
        else:
            parsed = parse(config.host_description)
            host = cls(
                description=config.host_description,
                target=parsed.family if parsed else None,
                version_major=leading_major(parsed.version if parsed else None),
            )

        if config.host_target:
            host.target = parse_family(config.host_target)
        if config.host_version_major is not None:
            host.version_major = int(config.host_version_major)

        return host
