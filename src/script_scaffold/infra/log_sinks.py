"""Infrastructure: secondary log sinks.

The secondary channel defaults to :class:`NullSink`.  Log saving swaps
in a :class:`FileSink` writing to ``<log_dir>/log.<timestamp>``; the
same file also receives the output of every command the script runs.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import IO

from script_scaffold.exceptions import ResourceError
from script_scaffold.infra.workspace import format_timestamp


class NullSink:
    """Discards everything written to it."""

    def write(self, text: str) -> int:
        return len(text)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class FileSink:
    """Appends plain text to a log file, opened on construction."""

    def __init__(self, path: Path) -> None:
        self.path: Path = path
        self._handle: IO[str] | None = path.open("a", encoding="utf-8")

    def write(self, text: str) -> int:
        if self._handle is None:
            raise ValueError(f"Log file {self.path} is closed.")
        return self._handle.write(text)

    def flush(self) -> None:
        if self._handle is not None:
            self._handle.flush()

    def fileno(self) -> int:
        """Descriptor of the open log file, for redirecting child processes."""
        if self._handle is None:
            raise ValueError(f"Log file {self.path} is closed.")
        return self._handle.fileno()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


def open_log_file(log_dir: Path, started_at: datetime) -> FileSink:
    """Create *log_dir* if needed and open ``log.<timestamp>`` inside it.

    Raises
    ------
    ResourceError
        When the directory or file cannot be created.
    """
    path = log_dir / f"log.{format_timestamp(started_at)}"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return FileSink(path)
    except OSError as exc:
        raise ResourceError(
            f"Could not open log file {path}: {exc.strerror or exc}",
        ) from exc
