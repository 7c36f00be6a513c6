"""Interpreter version guard.

Versions compare as dotted numbers, not strings: ``"4.10.0"`` sorts
after ``"4.9.0"``.  Each dot-separated component contributes its leading
digits only, so pre-release suffixes (``"3.13.0rc1"``) are ignored.

The package itself needs Python 3.10 to import, which packaging already
enforces; the guard matters when a script declares a
``ScriptDefinition.minimum_version`` above that floor.
"""

from __future__ import annotations

import platform
import re

from script_scaffold.exceptions import VersionTooOldError

_LEADING_DIGITS = re.compile(r"\d+")


def parse_version(text: str) -> tuple[int, ...]:
    """Convert a dotted version string to a tuple of integers.

    Components without leading digits count as ``0``.
    """
    parts: list[int] = []
    for component in text.strip().split("."):
        match = _LEADING_DIGITS.match(component)
        parts.append(int(match.group()) if match else 0)
    return tuple(parts)


def version_at_least(current: str, minimum: str) -> bool:
    """Return ``True`` when *current* is equal to or newer than *minimum*."""
    left = parse_version(current)
    right = parse_version(minimum)
    width = max(len(left), len(right))
    left += (0,) * (width - len(left))
    right += (0,) * (width - len(right))
    return left >= right


def check_runtime_version(minimum: str, current: str | None = None) -> str:
    """Ensure the running interpreter satisfies *minimum*.

    Returns the detected version.

    Raises
    ------
    VersionTooOldError
        When the interpreter sorts below *minimum*.
    """
    detected = current if current is not None else platform.python_version()
    if not version_at_least(detected, minimum):
        raise VersionTooOldError(
            f"This script depends on Python {minimum} or better "
            f"(found {detected}).",
        )
    return detected
