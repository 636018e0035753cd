"""
Runtime detection orchestration.

Obtains the host's runtime descriptor, parses it, and applies the
override strategy matching the host build.
"""

from __future__ import annotations

import logging

from runtime_fingerprint.config import Config
from runtime_fingerprint.host import HostEnvironment
from runtime_fingerprint.overrides import (
    NETCORE_COMPONENT,
    NETCORE_MARKER,
    ModuleOriginResolver,
    OriginResolver,
    OverrideResolver,
    ReleaseLookup,
    StaticReleaseLookup,
)
from runtime_fingerprint.parser import parse
from runtime_fingerprint.runtime import Runtime

logger = logging.getLogger(__name__)


class RuntimeDetector:
    """
    Detects the runtime of a host.

    Stateless between calls: every detect() builds a new Runtime.
    """

    def __init__(
        self,
        host: HostEnvironment | None = None,
        release_lookup: ReleaseLookup | None = None,
        origin_resolver: OriginResolver | None = None,
        netcore_marker: str = NETCORE_MARKER,
        netcore_component: str = NETCORE_COMPONENT,
    ):
        self.host = host or HostEnvironment.current()
        self.resolver = OverrideResolver(
            host_target=self.host.target,
            host_version_major=self.host.version_major,
            release_lookup=release_lookup,
            origin_resolver=origin_resolver,
            netcore_marker=netcore_marker,
            netcore_component=netcore_component,
        )

    @classmethod
    def from_config(cls, config: Config) -> RuntimeDetector:
        """Create a detector with host and collaborators taken from config."""
        return cls(
            host=HostEnvironment.from_config(config),
            release_lookup=StaticReleaseLookup.from_config(config.installed_releases),
            origin_resolver=ModuleOriginResolver(config.component_origins),
            netcore_marker=config.netcore_marker,
            netcore_component=config.netcore_component,
        )

    def detect(self) -> Runtime | None:
        """
        Detect the host runtime.

        Returns:
            The runtime identity, or None if the host reports nothing.
        """
        runtime = parse(self.host.description)
        if runtime is None:
            logger.debug("Host reported no runtime description")
            return None

        self.resolver.apply(runtime)
        logger.debug(f"Detected runtime: name={runtime.name} version={runtime.version}")
        return runtime


def get_current_runtime(config: Config | None = None) -> Runtime | None:
    """
    Convenience function to detect the current runtime.

    Args:
        config: Optional configuration. Describes the running Python
            interpreter when not provided.

    Returns:
        The runtime identity, or None if no identifying information exists.
    """
    detector = RuntimeDetector.from_config(config) if config else RuntimeDetector()
    return detector.detect()
