"""
Runtime identity data model.

A Runtime is built once per detection request: the parser fills in the
name, version and raw descriptor, and an override strategy may later
replace the version and attach installation details.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RuntimeFamily(str, Enum):
    """Runtime families known to the override resolver."""

    NETFX = "netfx"
    NETCORE = "netcore"
    NET_NATIVE = "netnative"
    MONO = "mono"
    CPYTHON = "cpython"
    PYPY = "pypy"
    UNKNOWN = "unknown"


# Order matters: more specific aliases must come before their prefixes.
FAMILY_ALIASES: tuple[tuple[str, RuntimeFamily], ...] = (
    (".NET Framework", RuntimeFamily.NETFX),
    (".NET Native", RuntimeFamily.NET_NATIVE),
    (".NET Core", RuntimeFamily.NETCORE),
    (".NET", RuntimeFamily.NETCORE),
    ("Mono", RuntimeFamily.MONO),
    ("CPython", RuntimeFamily.CPYTHON),
    ("PyPy", RuntimeFamily.PYPY),
)


def classify_family(name: str | None) -> RuntimeFamily:
    """
    Classify a runtime name into its family.

    An alias matches when the name equals it or continues with a space,
    so ".NET 6" is NETCORE while ".NETX" is not.
    """
    if not name:
        return RuntimeFamily.UNKNOWN

    for alias, family in FAMILY_ALIASES:
        if name == alias or name.startswith(f"{alias} "):
            return family

    return RuntimeFamily.UNKNOWN


def parse_family(value: str) -> RuntimeFamily:
    """Convert a configured family name (e.g. "netfx") into a RuntimeFamily."""
    try:
        return RuntimeFamily(value.strip().lower())
    except ValueError:
        known = ", ".join(f.value for f in RuntimeFamily)
        raise ValueError(f"Unknown runtime family: {value!r} (expected one of: {known})") from None


def parse_version_tuple(value: str | list[int] | tuple[int, ...] | None) -> tuple[int, ...] | None:
    """Parse "4.8.4084" or [4, 8, 4084] into (4, 8, 4084)."""
    if value is None:
        return None
    if isinstance(value, str):
        parts = [p for p in value.strip().split(".") if p]
        return tuple(int(p) for p in parts) or None
    return tuple(int(p) for p in value) or None


@dataclass(frozen=True)
class FrameworkInstallation:
    """An installed framework release as reported by an installation registry."""

    version: tuple[int, ...] | None = None
    service_pack: int | None = None
    short_name: str | None = None
    profile: str | None = None
    release: int | None = None

    @property
    def major(self) -> int | None:
        return self.version[0] if self.version else None

    @property
    def minor(self) -> int:
        return self.version[1] if self.version and len(self.version) > 1 else 0

    @property
    def version_string(self) -> str | None:
        if not self.version:
            return None
        return ".".join(str(part) for part in self.version)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FrameworkInstallation:
        """Create an installation record from a configuration mapping."""
        service_pack = data.get("service_pack")
        release = data.get("release")
        return cls(
            version=parse_version_tuple(data.get("version")),
            service_pack=int(service_pack) if service_pack is not None else None,
            short_name=data.get("short_name"),
            profile=data.get("profile"),
            release=int(release) if release is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version_string,
            "service_pack": self.service_pack,
            "short_name": self.short_name,
            "profile": self.profile,
            "release": self.release,
        }


@dataclass
class Runtime:
    """
    Identity of a language runtime.

    Only `name`, `version` and `framework_installation` may change after
    construction; `raw` keeps the descriptor exactly as the host reported it.
    """

    name: str | None = None
    version: str | None = None
    raw: str | None = None
    framework_installation: FrameworkInstallation | None = field(default=None, compare=False)

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "raw" and "raw" in self.__dict__:
            raise AttributeError("Runtime.raw is read-only once constructed")
        super().__setattr__(key, value)

    @property
    def family(self) -> RuntimeFamily:
        return classify_family(self.name)

    def is_netfx(self) -> bool:
        return self.family is RuntimeFamily.NETFX

    def is_netcore(self) -> bool:
        return self.family is RuntimeFamily.NETCORE

    def to_dict(self) -> dict[str, Any]:
        """Convert the runtime identity to a dictionary for serialization."""
        return {
            "name": self.name,
            "version": self.version,
            "raw": self.raw,
            "family": self.family.value,
            "framework_installation": (
                self.framework_installation.to_dict() if self.framework_installation else None
            ),
        }
