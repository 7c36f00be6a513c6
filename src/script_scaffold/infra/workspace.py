"""Infrastructure: the per-invocation scoped temporary workspace.

The workspace is a private directory named from the program name and
the start time.  Its removal is registered against every way the
process can end (normal exit through ``atexit``, ``SIGINT``,
``SIGTERM``, and the context-manager exit that any raised exception
passes through).  All triggers share one :meth:`ScopedWorkspace.release`,
which is effective exactly once.

Rules
-----
* The parent defaults to ``/dev/shm`` so leftovers vanish at reboot
  even if release never runs.
* No user-facing output — callers handle logging.
"""

from __future__ import annotations

import atexit
import os
import shutil
import signal
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from types import FrameType, TracebackType
from typing import Any

from script_scaffold.exceptions import ResourceError

RAM_BACKED_ROOT: Path = Path("/dev/shm")

TIMESTAMP_FORMAT: str = "%Y-%m-%d-%H-%M-%S"

WORKSPACE_MODE: int = 0o700

_HANDLED_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


def default_root() -> Path:
    """Return ``/dev/shm`` when usable, else the platform temp directory."""
    if RAM_BACKED_ROOT.is_dir() and os.access(RAM_BACKED_ROOT, os.W_OK | os.X_OK):
        return RAM_BACKED_ROOT
    return Path(tempfile.gettempdir())


def program_stem(program_name: str) -> str:
    """Strip the last extension: ``"backup.sh"`` becomes ``"backup"``."""
    stem, _, _ = program_name.rpartition(".")
    return stem or program_name


def format_timestamp(started_at: datetime) -> str:
    return started_at.strftime(TIMESTAMP_FORMAT)


class ScopedWorkspace:
    """Owner-only temporary directory with guaranteed cleanup.

    Usage::

        with ScopedWorkspace("backup.sh", datetime.now()) as workspace:
            (workspace.path / "staging").mkdir()

    Parameters
    ----------
    program_name:
        Name of the running script; its stem becomes a path component.
    started_at:
        Invocation start time; formatted into the directory name.
    root:
        Parent directory.  ``None`` selects :func:`default_root`.
    """

    def __init__(
        self,
        program_name: str,
        started_at: datetime,
        root: Path | None = None,
    ) -> None:
        self._root: Path = root if root is not None else default_root()
        self._path: Path = (
            self._root
            / program_stem(program_name)
            / "tmp"
            / f"{format_timestamp(started_at)}-{os.getpid()}"
        ).absolute()
        self._acquired: bool = False
        self._released: bool = False
        self._previous_handlers: dict[signal.Signals, Any] = {}

    @property
    def path(self) -> Path:
        return self._path

    @property
    def active(self) -> bool:
        """``True`` between a successful :meth:`acquire` and :meth:`release`."""
        return self._acquired and not self._released

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def acquire(self) -> Path:
        """Create the directory and register the release triggers.

        Raises
        ------
        ResourceError
            When the filesystem rejects creation.
        """
        if self._acquired:
            return self._path

        self._register()
        self._acquired = True
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.mkdir(mode=WORKSPACE_MODE)
            # mkdir's mode is filtered through the umask.
            self._path.chmod(WORKSPACE_MODE)
        except OSError as exc:
            self.release()
            raise ResourceError(
                f"Could not create temporary directory {self._path}: {exc.strerror or exc}",
            ) from exc
        return self._path

    def release(self) -> None:
        """Unregister every trigger, then remove the directory tree.

        Safe to call any number of times, before or after
        :meth:`acquire`, and when the directory is already gone.
        """
        if self._released or not self._acquired:
            return
        self._released = True
        self._unregister()
        shutil.rmtree(self._path, ignore_errors=True)

    # ------------------------------------------------------------------
    # Trigger registration
    # ------------------------------------------------------------------

    def _register(self) -> None:
        atexit.register(self.release)
        # Signal handlers may only be installed from the main thread.
        if threading.current_thread() is not threading.main_thread():
            return
        for signum in _HANDLED_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self._on_signal)

    def _unregister(self) -> None:
        atexit.unregister(self.release)
        for signum, previous in self._previous_handlers.items():
            # None means the handler was not installed from Python.
            signal.signal(signum, signal.SIG_DFL if previous is None else previous)
        self._previous_handlers.clear()

    def _on_signal(self, signum: int, _frame: FrameType | None) -> None:
        self.release()
        raise SystemExit(128 + signum)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> ScopedWorkspace:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
