"""Infrastructure: strict command execution and per-command tracing.

:class:`CommandRunner` runs external commands under the strict policy:
a non-zero status raises :class:`UnhandledCommandError` unless the
caller passes ``check=False``.  :class:`Tracer` toggles whether the
runner echoes each invocation to the logger before executing it.

Wrap one command per ``on``/``off`` pair::

    with tracer.traced():
        runner.run(["pwd", "-P"])

Rules
-----
* No shell — commands are argument sequences.
* Turning tracing off never changes :attr:`CommandRunner.last_returncode`.
* With an *output* sink, uncaptured command stdout/stderr go to that
  sink instead of the inherited streams.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from script_scaffold.exceptions import UnhandledCommandError


class TraceLogger(Protocol):
    """The slice of the script logger that tracing needs."""

    def trace(self, message: str) -> None:
        ...  # pragma: no cover


class CommandOutput(Protocol):
    """A file-backed sink that child processes can write to."""

    def flush(self) -> None:
        ...  # pragma: no cover

    def fileno(self) -> int:
        ...  # pragma: no cover


class Tracer:
    """On/off switch for echoing command invocations."""

    def __init__(self, logger: TraceLogger) -> None:
        self._logger: TraceLogger = logger
        self.enabled: bool = False

    def on(self) -> None:
        self.enabled = True

    def off(self) -> None:
        self.enabled = False

    @contextmanager
    def traced(self) -> Iterator[Tracer]:
        """Enable tracing for the body of the ``with`` block."""
        self.on()
        try:
            yield self
        finally:
            self.off()

    def emit(self, command: Sequence[str]) -> None:
        """Log *command* when tracing is enabled."""
        if self.enabled:
            self._logger.trace(shlex.join(command))


class CommandRunner:
    """Run external commands, raising on unexpected failure.

    Parameters
    ----------
    tracer:
        Consulted before each command; may be ``None``.
    cwd:
        Default working directory for every command.
    output:
        Destination for uncaptured stdout and stderr (the saved log).
        ``None`` inherits the process streams.
    """

    def __init__(
        self,
        tracer: Tracer | None = None,
        cwd: Path | None = None,
        output: CommandOutput | None = None,
    ) -> None:
        self._tracer: Tracer | None = tracer
        self._cwd: Path | None = cwd
        self._output: CommandOutput | None = output
        self.last_returncode: int | None = None

    def run(
        self,
        command: Sequence[str],
        *,
        check: bool = True,
        capture: bool = False,
        cwd: Path | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Execute *command* and wait for it.

        Parameters
        ----------
        check:
            ``False`` exempts the command from the strict policy; the
            caller inspects ``returncode`` itself.
        capture:
            Capture stdout/stderr as text instead of inheriting them.

        Raises
        ------
        UnhandledCommandError
            When *check* is set and the command fails or cannot start.
        """
        argv = [str(part) for part in command]
        if self._tracer is not None:
            self._tracer.emit(argv)

        redirect: int | None = None
        if self._output is not None and not capture:
            # Earlier log lines must land before the child's output.
            self._output.flush()
            redirect = self._output.fileno()

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd or self._cwd,
                capture_output=capture,
                stdout=redirect,
                stderr=redirect,
                text=True,
                check=False,
            )
        except OSError as exc:
            # Shells report a missing command as status 127.
            self.last_returncode = 127
            if check:
                raise UnhandledCommandError(
                    f"Could not run '{shlex.join(argv)}': {exc.strerror or exc}",
                    returncode=127,
                    command=argv,
                ) from exc
            return subprocess.CompletedProcess(argv, 127, "", str(exc))

        self.last_returncode = completed.returncode
        if check and completed.returncode != 0:
            raise UnhandledCommandError(
                f"Command '{shlex.join(argv)}' failed with exit status "
                f"{completed.returncode}.",
                returncode=completed.returncode,
                command=argv,
            )
        return completed
