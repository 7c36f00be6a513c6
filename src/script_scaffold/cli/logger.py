"""Dual-channel script logger.

Every message goes to two places:

* the **interactive** channel — a Rich console on stderr, coloured when
  the colour decision allows it;
* the **secondary** channel — plain text with every ANSI style sequence
  removed; a :class:`~script_scaffold.infra.log_sinks.NullSink` unless
  log saving is enabled.

Both renderings are built before either write, so a formatting failure
leaves both sinks untouched.  Sink failures propagate to the caller.

Control characters (``\r``, ``\t``) reach both channels unchanged; with
colour off the interactive text is byte-for-byte the secondary text.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import IO

from rich.color import ColorSystem
from rich.style import Style

from script_scaffold.cli.console import make_console
from script_scaffold.config import ScriptSettings
from script_scaffold.core.protocols import TextSink
from script_scaffold.infra.log_sinks import NullSink

_ANSI_STYLE = re.compile(r"(?:\x1b\[|\x9b)([0-9;]*)m")


_LEVEL_STYLES: dict[str, Style] = {
    "error": Style(color="red"),
    "warning": Style(color="yellow"),
    "info": Style(color="green"),
    "trace": Style(color="cyan"),
}


def strip_ansi(text: str) -> str:
    """Remove every SGR escape sequence (``ESC [ <params> m``) from *text*."""
    return _ANSI_STYLE.sub("", text)


@dataclass(frozen=True, slots=True)
class LogChannelConfig:
    """Where log output goes, decided once at start-up."""

    color_enabled: bool
    interactive: IO[str] | None = None
    """Interactive stream; ``None`` follows the live ``sys.stderr``."""

    secondary: TextSink = field(default_factory=NullSink)


class ScriptLogger:
    """Leveled writer for the interactive and secondary channels."""

    ERROR_PREFIX = "Error: "
    WARNING_PREFIX = "Warning: "
    INFO_PREFIX = "Info: "
    TRACE_PREFIX = "+ "

    def __init__(self, config: LogChannelConfig) -> None:
        self._config: LogChannelConfig = config
        self._console = make_console(config.interactive, color=config.color_enabled)
        self._color_system: ColorSystem | None = (
            ColorSystem.STANDARD if config.color_enabled else None
        )
        self._secondary: TextSink = config.secondary

    @classmethod
    def for_settings(
        cls,
        settings: ScriptSettings,
        *,
        interactive: IO[str] | None = None,
        secondary: TextSink | None = None,
    ) -> ScriptLogger:
        """Build a logger whose colour decision follows *settings*."""
        stream = interactive if interactive is not None else sys.stderr
        return cls(
            LogChannelConfig(
                color_enabled=settings.color_enabled(stream),
                interactive=interactive,
                secondary=secondary if secondary is not None else NullSink(),
            )
        )

    @property
    def color_enabled(self) -> bool:
        return self._config.color_enabled

    @property
    def secondary(self) -> TextSink:
        return self._secondary

    def attach_secondary(self, sink: TextSink) -> None:
        """Replace the secondary sink, closing the previous one."""
        previous = self._secondary
        self._secondary = sink
        previous.close()

    def close(self) -> None:
        self._secondary.flush()
        self._secondary.close()
        self._secondary = NullSink()

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------

    def error(self, message: str) -> None:
        self._emit(self.ERROR_PREFIX, _LEVEL_STYLES["error"], message)

    def warning(self, message: str) -> None:
        self._emit(self.WARNING_PREFIX, _LEVEL_STYLES["warning"], message)

    def info(self, message: str) -> None:
        self._emit(self.INFO_PREFIX, _LEVEL_STYLES["info"], message)

    def plain(self, message: str = "") -> None:
        self._emit("", None, message)

    def trace(self, message: str) -> None:
        """Log a traced command invocation."""
        self._emit(self.TRACE_PREFIX, _LEVEL_STYLES["trace"], message)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _emit(self, prefix: str, style: Style | None, message: str) -> None:
        line = prefix + message
        plain_line = strip_ansi(line) + "\n"
        interactive_line = self._render_interactive(line, style) + "\n"

        stream = self._console.file
        stream.write(interactive_line)
        stream.flush()
        self._secondary.write(plain_line)
        self._secondary.flush()

    def _render_interactive(self, line: str, style: Style | None) -> str:
        """Apply the level style to *line*, leaving its control characters alone.

        Embedded SGR sequences are kept when colour is on; the level style
        only covers text outside them.  With colour off every sequence is
        dropped.
        """
        if self._color_system is None:
            return strip_ansi(line)

        parts: list[str] = []
        embedded = False
        position = 0
        for match in _ANSI_STYLE.finditer(line):
            parts.append(self._paint(line[position:match.start()], None if embedded else style))
            parts.append(match.group())
            # Only an explicit reset hands the text back to the level style.
            embedded = not set(match.group(1).split(";")) <= {"", "0"}
            position = match.end()
        parts.append(self._paint(line[position:], None if embedded else style))
        return "".join(parts)

    def _paint(self, text: str, style: Style | None) -> str:
        if not text or style is None:
            return text
        return style.render(text, color_system=self._color_system)
