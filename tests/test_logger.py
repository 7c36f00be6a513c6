"""Tests for the dual-channel logger (cli/logger.py, infra/log_sinks.py).

Coverage:
* Generic ANSI stripping.
* Level prefixes on both channels.
* Colour on the interactive channel only, and only when enabled.
* Carriage returns and tabs reach both channels unchanged.
* Secondary sink swapping and closing.
* Sink failures propagate.
* File sink and log-file opening.
"""

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path

import pytest

from script_scaffold.cli.logger import LogChannelConfig, ScriptLogger, strip_ansi
from script_scaffold.config import ScriptSettings
from script_scaffold.exceptions import ResourceError
from script_scaffold.infra.log_sinks import FileSink, NullSink, open_log_file

from conftest import RecordingSink

RED = "\x1b[0;31m"
OFF = "\x1b[0m"


class _FailingSink(RecordingSink):
    def write(self, text: str) -> int:
        raise OSError("disk full")


# ---------------------------------------------------------------------------
# strip_ansi
# ---------------------------------------------------------------------------

class TestStripAnsi:
    @pytest.mark.parametrize(
        "text",
        [
            f"{RED}red{OFF}",
            "\x1b[38;5;196mred\x1b[m",
            "\x1b[1;33;48;2;10;20;30mred\x1b[0m",
            "\x9b31mred\x9b0m",
        ],
    )
    def test_removes_any_style_sequence(self, text: str) -> None:
        assert strip_ansi(text) == "red"

    def test_leaves_plain_text_alone(self) -> None:
        assert strip_ansi("a [31m b; m") == "a [31m b; m"


# ---------------------------------------------------------------------------
# Levels
# ---------------------------------------------------------------------------

class TestLevels:
    @pytest.mark.parametrize(
        ("level", "prefix"),
        [("error", "Error: "), ("warning", "Warning: "), ("info", "Info: "), ("plain", ""), ("trace", "+ ")],
    )
    def test_prefix_on_both_channels(
        self,
        plain_logger: ScriptLogger,
        interactive: io.StringIO,
        secondary: RecordingSink,
        level: str,
        prefix: str,
    ) -> None:
        getattr(plain_logger, level)("hello")
        assert interactive.getvalue() == f"{prefix}hello\n"
        assert secondary.text == f"{prefix}hello\n"

    def test_messages_are_ordered(
        self, plain_logger: ScriptLogger, secondary: RecordingSink,
    ) -> None:
        plain_logger.info("one")
        plain_logger.warning("two")
        plain_logger.error("three")
        assert secondary.text.splitlines() == ["Info: one", "Warning: two", "Error: three"]

    def test_markup_is_not_interpreted(
        self, plain_logger: ScriptLogger, interactive: io.StringIO,
    ) -> None:
        plain_logger.plain("[bold]literal[/bold]")
        assert interactive.getvalue() == "[bold]literal[/bold]\n"


# ---------------------------------------------------------------------------
# Colour
# ---------------------------------------------------------------------------

class TestColour:
    def test_level_colour_on_interactive_only(
        self,
        color_logger: ScriptLogger,
        interactive: io.StringIO,
        secondary: RecordingSink,
    ) -> None:
        color_logger.error("boom")
        assert "\x1b[" in interactive.getvalue()
        assert "Error: boom" in interactive.getvalue()
        assert secondary.text == "Error: boom\n"

    def test_embedded_colour_is_stripped_from_secondary(
        self,
        color_logger: ScriptLogger,
        interactive: io.StringIO,
        secondary: RecordingSink,
    ) -> None:
        color_logger.plain(f"taste the {RED}r{OFF}ainbow")
        assert "\x1b" in interactive.getvalue()
        assert strip_ansi(interactive.getvalue()) == "taste the rainbow\n"
        assert "\x1b" not in secondary.text
        assert secondary.text == "taste the rainbow\n"

    def test_colour_disabled_emits_no_escapes(
        self,
        plain_logger: ScriptLogger,
        interactive: io.StringIO,
    ) -> None:
        plain_logger.info(f"{RED}red{OFF}")
        assert "\x1b" not in interactive.getvalue()
        assert interactive.getvalue() == "Info: red\n"

    def test_for_settings_respects_no_color(self) -> None:
        logger = ScriptLogger.for_settings(
            ScriptSettings(no_color=True), interactive=io.StringIO(),
        )
        assert logger.color_enabled is False

    def test_for_settings_non_terminal_disables_colour(self) -> None:
        logger = ScriptLogger.for_settings(ScriptSettings(), interactive=io.StringIO())
        assert logger.color_enabled is False
        assert isinstance(logger.secondary, NullSink)


# ---------------------------------------------------------------------------
# Control characters
# ---------------------------------------------------------------------------

class TestControlCharacters:
    @pytest.mark.parametrize(
        ("level", "message"),
        [
            ("error", "copy failed:\r\nno space left on device\r\n"),
            ("info", "50%\r100%"),
            ("plain", "a\tb"),
            ("warning", "tab\there\rand\r\nthere"),
        ],
    )
    def test_channels_match_without_colour(
        self,
        plain_logger: ScriptLogger,
        interactive: io.StringIO,
        secondary: RecordingSink,
        level: str,
        message: str,
    ) -> None:
        getattr(plain_logger, level)(message)
        assert interactive.getvalue() == secondary.text
        assert message in interactive.getvalue()

    def test_prefix_survives_carriage_return(
        self, plain_logger: ScriptLogger, interactive: io.StringIO,
    ) -> None:
        plain_logger.info("50%\r100%")
        assert interactive.getvalue() == "Info: 50%\r100%\n"

    def test_colour_keeps_control_characters(
        self,
        color_logger: ScriptLogger,
        interactive: io.StringIO,
        secondary: RecordingSink,
    ) -> None:
        color_logger.error("copy failed:\r\n\tno space left")
        assert strip_ansi(interactive.getvalue()) == secondary.text
        assert secondary.text == "Error: copy failed:\r\n\tno space left\n"

    def test_level_colour_resumes_after_embedded_reset(
        self,
        color_logger: ScriptLogger,
        interactive: io.StringIO,
        secondary: RecordingSink,
    ) -> None:
        color_logger.info(f"a {RED}b{OFF} c")
        rendered = interactive.getvalue()
        assert strip_ansi(rendered) == secondary.text == "Info: a b c\n"
        assert f"{RED}b{OFF}" in rendered
        assert rendered.count("\x1b[32m") == 2


# ---------------------------------------------------------------------------
# Secondary sink management
# ---------------------------------------------------------------------------

class TestSecondary:
    def test_attach_closes_previous(
        self, plain_logger: ScriptLogger, secondary: RecordingSink,
    ) -> None:
        replacement = RecordingSink()
        plain_logger.attach_secondary(replacement)
        plain_logger.info("after")
        assert secondary.closed
        assert secondary.text == ""
        assert replacement.text == "Info: after\n"

    def test_close_reverts_to_null_sink(
        self, plain_logger: ScriptLogger, secondary: RecordingSink,
    ) -> None:
        plain_logger.close()
        assert secondary.closed
        assert isinstance(plain_logger.secondary, NullSink)
        plain_logger.info("dropped")
        assert secondary.text == ""

    def test_sink_failure_propagates(self, interactive: io.StringIO) -> None:
        logger = ScriptLogger(
            LogChannelConfig(color_enabled=False, interactive=interactive, secondary=_FailingSink()),
        )
        with pytest.raises(OSError, match="disk full"):
            logger.error("boom")


# ---------------------------------------------------------------------------
# File sinks
# ---------------------------------------------------------------------------

class TestFileSink:
    def test_open_log_file_creates_directory(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs" / "nested"
        sink = open_log_file(log_dir, datetime(2024, 1, 2, 3, 4, 5))
        try:
            sink.write("line\n")
            sink.flush()
        finally:
            sink.close()
        assert sink.path == log_dir / "log.2024-01-02-03-04-05"
        assert sink.path.read_text(encoding="utf-8") == "line\n"

    def test_appends(self, tmp_path: Path) -> None:
        path = tmp_path / "log"
        path.write_text("old\n", encoding="utf-8")
        sink = FileSink(path)
        sink.write("new\n")
        sink.close()
        assert path.read_text(encoding="utf-8") == "old\nnew\n"

    def test_write_after_close_raises(self, tmp_path: Path) -> None:
        sink = FileSink(tmp_path / "log")
        sink.close()
        sink.close()
        with pytest.raises(ValueError):
            sink.write("late\n")

    def test_unwritable_log_dir(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ResourceError, match="Could not open log file"):
            open_log_file(blocker / "logs", datetime(2024, 1, 2, 3, 4, 5))

    def test_null_sink_discards(self) -> None:
        sink = NullSink()
        assert sink.write("abc") == 3
        sink.flush()
        sink.close()
