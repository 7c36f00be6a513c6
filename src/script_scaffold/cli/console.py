"""Rich console factory for the interactive log channel.

The colour decision is made once by the caller and passed in
explicitly; the console never second-guesses it from the environment.
The logger writes pre-rendered lines to :attr:`Console.file`, which
follows the live ``sys.stderr`` when no stream is given, so control
characters in a message reach the terminal unchanged.
"""

from __future__ import annotations

from typing import IO

from rich.console import Console


def make_console(stream: IO[str] | None, *, color: bool) -> Console:
    """Create a Rich console for *stream* (``None`` means the live stderr).

    With *color* off no escape sequence is ever emitted, whatever the
    stream or environment.
    """
    return Console(
        file=stream,
        stderr=stream is None,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        highlight=False,
        markup=False,
        emoji=False,
    )
