"""
Pytest fixtures and configuration for Runtime Fingerprint tests.

Provides reusable runtime descriptors, installation records and origin
paths for the parser, override and detector tests.
"""

from __future__ import annotations

import pytest

from runtime_fingerprint.config import Config
from runtime_fingerprint.host import HostEnvironment
from runtime_fingerprint.overrides import OriginResolver, StaticReleaseLookup
from runtime_fingerprint.runtime import FrameworkInstallation, RuntimeFamily


class FixedOriginResolver(OriginResolver):
    """Origin resolver returning a fixed path and recording lookups."""

    def __init__(self, path: str | None):
        self.path = path
        self.requested: list[str] = []

    def origin_path_of(self, component: str) -> str | None:
        self.requested.append(component)
        return self.path


@pytest.fixture
def netfx_host():
    """A host built for .NET Framework on CLR 4."""
    return HostEnvironment(
        description=".NET Framework 4.7.2633.0",
        target=RuntimeFamily.NETFX,
        version_major=4,
    )


@pytest.fixture
def netcore_host():
    """A host built for .NET Core reporting a framework build number."""
    return HostEnvironment(
        description=".NET Core 4.6.26614.01",
        target=RuntimeFamily.NETCORE,
        version_major=4,
    )


@pytest.fixture
def netcore_origin_path():
    """Install location of System.Runtime in a shared framework layout."""
    return "/usr/share/dotnet/shared/Microsoft.NETCore.App/2.1.4/System.Runtime.dll"


@pytest.fixture
def windows_origin_path():
    """Windows code base URI of System.Private.CoreLib."""
    return (
        "file:///C:/Program Files/dotnet/shared/Microsoft.NETCore.App/2.0.9/"
        "System.Private.CoreLib.dll"
    )


@pytest.fixture
def installed_releases():
    """Installed framework releases as they appear in configuration."""
    return [
        {"version": "2.0.50727", "service_pack": 2},
        {"version": "3.5.30729", "service_pack": 1},
        {"version": "4.7.02558", "release": 461308},
        {"version": "4.8.4084", "release": 528372},
    ]


@pytest.fixture
def release_lookup(installed_releases):
    """Release lookup over the sample installed releases."""
    return StaticReleaseLookup.from_config(installed_releases)


@pytest.fixture
def netfx48():
    """The .NET Framework 4.8 installation record."""
    return FrameworkInstallation(version=(4, 8, 4084), release=528372)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove FINGERPRINT_* variables so tests see file/default values."""
    for var in (
        "FINGERPRINT_HOST_DESCRIPTION",
        "FINGERPRINT_HOST_TARGET",
        "FINGERPRINT_HOST_VERSION_MAJOR",
        "FINGERPRINT_NETCORE_MARKER",
        "FINGERPRINT_NETCORE_COMPONENT",
        "FINGERPRINT_LOG_LEVEL",
        "FINGERPRINT_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def netfx_config(installed_releases):
    """Configuration describing a .NET Framework host."""
    return Config(
        host_description=".NET Framework 4.7.2633.0",
        host_target="netfx",
        host_version_major=4,
        installed_releases=installed_releases,
    )


@pytest.fixture
def fixed_origin_resolver():
    """Factory for origin resolvers that return a fixed path."""
    return FixedOriginResolver
