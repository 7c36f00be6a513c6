"""Shared pytest fixtures and configuration for the script-scaffold test suite.

Guidelines
----------
* No network access in any test.
* Workspaces live under ``tmp_path`` — never ``/dev/shm``.
* Log channels are captured with ``io.StringIO`` and a recording sink.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from script_scaffold.cli.logger import LogChannelConfig, ScriptLogger
from script_scaffold.config import ScriptSettings


class RecordingSink:
    """Secondary sink that keeps everything written to it."""

    def __init__(self) -> None:
        self.chunks: list[str] = []
        self.closed: bool = False

    def write(self, text: str) -> int:
        self.chunks.append(text)
        return len(text)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    @property
    def text(self) -> str:
        return "".join(self.chunks)


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    return tmp_path / "shm"


@pytest.fixture
def settings(workspace_root: Path) -> ScriptSettings:
    return ScriptSettings(no_color=True, term="xterm", workspace_root=workspace_root)


@pytest.fixture
def interactive() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def secondary() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def color_logger(interactive: io.StringIO, secondary: RecordingSink) -> ScriptLogger:
    return ScriptLogger(
        LogChannelConfig(color_enabled=True, interactive=interactive, secondary=secondary),
    )


@pytest.fixture
def plain_logger(interactive: io.StringIO, secondary: RecordingSink) -> ScriptLogger:
    return ScriptLogger(
        LogChannelConfig(color_enabled=False, interactive=interactive, secondary=secondary),
    )
