"""
Runtime descriptor parser.

Handles descriptors such as:
- ".NET Framework 4.7.2633.0"
- ".NET Core 4.6.26614.01"
- ".NET 6.0.0-preview.3.21201.4"
- ".NET Native" / "WebAssembly" (no version token)
- "CPython 3.12.1"
"""

from __future__ import annotations

import re

from runtime_fingerprint.runtime import Runtime

# Name: everything before the first digit. Version: dotted digit groups plus
# any trailing non-whitespace (pre-release tags, build metadata).
RUNTIME_PATTERN = re.compile(r"^(?P<name>[^\d]*)(?P<version>(?:\d+\.)+[^\s]+)")


def parse(raw: str | None, name: str | None = None) -> Runtime | None:
    """
    Parse a raw runtime descriptor.

    Args:
        raw: The descriptor as reported by the host, or None.
        name: Forced runtime name. Wins over any name found in `raw`.

    Returns:
        The parsed Runtime, or None when neither a descriptor nor a name
        is available.
    """
    if raw is None:
        return Runtime(name) if name is not None else None

    match = RUNTIME_PATTERN.match(raw)
    if match:
        if name is None:
            name = match.group("name").strip() or None
        return Runtime(name, match.group("version"), raw=raw)

    # No version token: the whole descriptor names the runtime.
    if name is None:
        name = raw.strip() or None
    return Runtime(name, raw=raw)
