"""
Platform-specific version overrides.

The descriptor reported by a runtime is not always precise enough:
".NET Framework" only reports the CLR build, and ".NET Core" releases
before 3.0 report a framework build number instead of the product
version. When the detected runtime belongs to the same family as the
host build, a more authoritative source is consulted:

- NETFX: the installation registry, for the latest installed release
  matching the host's major version.
- NETCORE: the installation directory of a core library, which by
  convention sits at ``.../Microsoft.NETCore.App/<version>/<library>``.
"""

from __future__ import annotations

import importlib.util
import logging
import re
import sys
from abc import ABC, abstractmethod
from typing import Any, Iterable

from runtime_fingerprint.runtime import FrameworkInstallation, Runtime, RuntimeFamily

logger = logging.getLogger(__name__)

NETCORE_MARKER = "Microsoft.NETCore.App"
NETCORE_COMPONENT = "System.Runtime"

_PATH_SEPARATORS = re.compile(r"[/\\]")


class ReleaseLookup(ABC):
    """Source of installed framework releases."""

    @abstractmethod
    def lookup_installed_release(self, major: int) -> FrameworkInstallation | None:
        """
        Find the most specific installed release for a major version.

        Args:
            major: Major version of the host runtime.

        Returns:
            The installation record, or None if nothing is installed.
        """
        pass


class OriginResolver(ABC):
    """Source of the on-disk location a loaded component came from."""

    @abstractmethod
    def origin_path_of(self, component: str) -> str | None:
        """Return the origin path of `component`, or None if unknown."""
        pass


class StaticReleaseLookup(ReleaseLookup):
    """Release lookup over a fixed set of installation records."""

    def __init__(self, installations: Iterable[FrameworkInstallation] = ()):
        self.installations = list(installations)

    @classmethod
    def from_config(cls, records: list[dict[str, Any]]) -> StaticReleaseLookup:
        return cls(FrameworkInstallation.from_dict(record) for record in records)

    def lookup_installed_release(self, major: int) -> FrameworkInstallation | None:
        matching = [i for i in self.installations if i.major == major]
        if not matching:
            return None
        return max(matching, key=lambda i: (i.version or (), i.service_pack or 0))


class ModuleOriginResolver(OriginResolver):
    """
    Resolve component origins from known paths, then from Python's
    import system.
    """

    def __init__(self, known_origins: dict[str, str] | None = None):
        self.known_origins = dict(known_origins or {})

    def origin_path_of(self, component: str) -> str | None:
        if component in self.known_origins:
            return self.known_origins[component]

        module = sys.modules.get(component)
        origin = getattr(module, "__file__", None) if module is not None else None
        if origin:
            return origin

        try:
            spec = importlib.util.find_spec(component)
        except (ImportError, ValueError) as e:
            logger.debug(f"Could not locate component {component}: {e}")
            return None
        return spec.origin if spec is not None else None


def version_from_origin_path(path: str | None, marker: str = NETCORE_MARKER) -> str | None:
    """
    Extract the version directory that follows `marker` in a path.

    The marker must not be the first segment and must be followed by at
    least two segments (the version directory and the file itself);
    otherwise None is returned.

    >>> version_from_origin_path("/usr/share/dotnet/shared/Microsoft.NETCore.App/2.1.4/System.Runtime.dll")
    '2.1.4'
    """
    if not path:
        return None

    segments = [s for s in _PATH_SEPARATORS.split(path) if s]
    try:
        index = segments.index(marker)
    except ValueError:
        return None

    if 0 < index < len(segments) - 2:
        return segments[index + 1]
    return None


def format_framework_version(installation: FrameworkInstallation) -> str | None:
    """
    Format an installed release the way the product is usually named.

    Releases before 4 are always two components (1.0, 1.1, 2.0, 3.0, 3.5),
    with the service pack appended when present.
    """
    major = installation.major
    if major is not None and major < 4:
        version = f"{major}.{installation.minor}"
        if installation.service_pack is not None:
            version = f"{version} SP {installation.service_pack}"
        return version
    return installation.version_string


class OverrideResolver:
    """
    Applies the override strategy matching the host build.

    A strategy only runs when the runtime's family is also the family the
    host was built for; every other runtime keeps its parsed version.
    """

    def __init__(
        self,
        host_target: RuntimeFamily | None = None,
        host_version_major: int | None = None,
        release_lookup: ReleaseLookup | None = None,
        origin_resolver: OriginResolver | None = None,
        netcore_marker: str = NETCORE_MARKER,
        netcore_component: str = NETCORE_COMPONENT,
    ):
        self.host_target = host_target
        self.host_version_major = host_version_major
        self.release_lookup = release_lookup or StaticReleaseLookup()
        self.origin_resolver = origin_resolver or ModuleOriginResolver()
        self.netcore_marker = netcore_marker
        self.netcore_component = netcore_component

    def apply(self, runtime: Runtime | None) -> Runtime | None:
        """Apply the matching override to `runtime` in place and return it."""
        if runtime is None:
            return None

        family = runtime.family
        if self.host_target is None or family is not self.host_target:
            logger.debug(f"No override for {family.value} runtime on {self._target_label()} host")
            return runtime

        try:
            if family is RuntimeFamily.NETFX:
                self.set_netfx_release(runtime)
            elif family is RuntimeFamily.NETCORE:
                self.set_netcore_version(runtime)
        except Exception as e:
            logger.warning(f"Version override for {family.value} failed, keeping parsed version: {e}")

        return runtime

    def set_netfx_release(self, runtime: Runtime) -> None:
        """Replace the version with the latest installed framework release."""
        if self.host_version_major is None:
            logger.debug("Host major version unknown, skipping framework release lookup")
            return

        latest = self.release_lookup.lookup_installed_release(self.host_version_major)
        if latest is None:
            logger.debug(f"No installed framework release for major {self.host_version_major}")
            return

        runtime.framework_installation = latest
        runtime.version = format_framework_version(latest)
        logger.debug(f"Framework release resolved to {runtime.version}")

    def set_netcore_version(self, runtime: Runtime) -> None:
        """Replace the version with the one in the core library's install path."""
        path = self.origin_resolver.origin_path_of(self.netcore_component)
        version = version_from_origin_path(path, self.netcore_marker)
        if version is None:
            logger.debug(f"No {self.netcore_marker} version in origin path: {path}")
            return

        runtime.version = version
        logger.debug(f"Core runtime version resolved to {version} from {path}")

    def _target_label(self) -> str:
        return self.host_target.value if self.host_target else "unknown"
