"""Protocols (interfaces) shared across layers.

Core and CLI code depend only on these structural contracts — never on
concrete sink implementations.
"""

from __future__ import annotations

from typing import Protocol


class TextSink(Protocol):
    """Contract for a log destination.

    Any object with ``write``, ``flush`` and ``close`` satisfies this
    protocol structurally; text file objects do.
    """

    def write(self, text: str) -> object:
        """Write *text* verbatim.  No newline is added."""
        ...  # pragma: no cover

    def flush(self) -> None:
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover
