"""
Runtime Fingerprint - Runtime identification for diagnostics and telemetry.

Turns the free-form description a language runtime reports about itself
into a structured name and version, correcting the version from
platform-specific sources when the standard description under-reports it.
"""

from runtime_fingerprint.core import RuntimeDetector, get_current_runtime
from runtime_fingerprint.parser import parse
from runtime_fingerprint.runtime import FrameworkInstallation, Runtime, RuntimeFamily

__version__ = "0.2.0"
__author__ = "Sluggisty"

__all__ = [
    "__version__",
    "FrameworkInstallation",
    "Runtime",
    "RuntimeDetector",
    "RuntimeFamily",
    "get_current_runtime",
    "parse",
]
