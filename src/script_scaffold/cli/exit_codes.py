"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  A
failing strictly-executed command exits with its own status instead.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — script completed, or the manual page was shown."""

GENERAL_ERROR: int = 1
"""Default abort status.  A user-facing message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped the script's own logic."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
