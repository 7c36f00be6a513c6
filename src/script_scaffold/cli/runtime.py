"""Script lifecycle runner and the abort path.

:func:`run_script` is the **sole error boundary** for a script.  It
drives the fixed start-up sequence

1. version guard,
2. scoped workspace acquisition,
3. logger wiring (log saving),
4. option/argument parsing,
5. manual page *or* the script's ``main``,

and turns every :class:`~script_scaffold.exceptions.ScriptScaffoldError`
into :func:`abort` with the error's exit code.  The workspace is released
by its own context-manager exit and ``atexit``/signal registration, so
:func:`abort` never has to release it directly.
"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import IO, NoReturn

from script_scaffold.cli import exit_codes
from script_scaffold.cli.logger import ScriptLogger
from script_scaffold.cli.manual_page import MANUAL_PAGE_TEMPLATE, show_manual_page
from script_scaffold.config import ScriptSettings
from script_scaffold.core.models import CommandLine, OptionSpec, OptionValue
from script_scaffold.core.options import CommandLineParser, expect_arguments
from script_scaffold.core.version_guard import check_runtime_version
from script_scaffold.exceptions import ScriptScaffoldError
from script_scaffold.infra.commands import CommandRunner, Tracer
from script_scaffold.infra.log_sinks import FileSink, open_log_file
from script_scaffold.infra.workspace import ScopedWorkspace, default_root, program_stem

MINIMUM_PYTHON: str = "3.10.0"
"""Same as the packaging floor; raise it per script to require a newer interpreter."""


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScriptDefinition:
    """Everything a script declares up front."""

    program_name: str
    options: tuple[OptionSpec, ...]
    manual_page: str = MANUAL_PAGE_TEMPLATE
    minimum_version: str = MINIMUM_PYTHON
    save_log: bool = False
    """Save a plain-text log under ``<workspace root>/<stem>/logs``."""

    min_arguments: int = 0
    max_arguments: int | None = None


@dataclass(frozen=True, slots=True)
class ScriptContext:
    """What a script's ``main`` receives: parsed input plus live helpers."""

    definition: ScriptDefinition
    command_line: CommandLine
    logger: ScriptLogger
    workspace: Path
    tracer: Tracer
    runner: CommandRunner
    started_at: datetime

    @property
    def program_name(self) -> str:
        return self.definition.program_name

    @property
    def options(self) -> Mapping[str, OptionValue]:
        return self.command_line.options

    @property
    def arguments(self) -> tuple[str, ...]:
        return self.command_line.arguments

    def abort(self, message: str, exit_code: int = exit_codes.GENERAL_ERROR) -> NoReturn:
        abort(self.logger, message, exit_code)


ScriptMain = Callable[[ScriptContext], int | None]


# ---------------------------------------------------------------------------
# Abort path
# ---------------------------------------------------------------------------

def abort(
    logger: ScriptLogger,
    message: str,
    exit_code: int = exit_codes.GENERAL_ERROR,
) -> NoReturn:
    """Log *message* at error severity and terminate with *exit_code*."""
    logger.error(message)
    raise SystemExit(exit_code)


def _describe(exc: ScriptScaffoldError) -> str:
    message = str(exc)
    if exc.hint:
        message = f"{message} {exc.hint}"
    return message


def _describe_unexpected(exc: BaseException) -> str:
    frames = traceback.extract_tb(exc.__traceback__)
    location = ""
    if frames:
        last = frames[-1]
        location = f" on line {last.lineno} of {Path(last.filename).name}"
    return f"Unhandled error{location}: {type(exc).__name__}: {exc}"


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

def _wire_log_saving(
    logger: ScriptLogger,
    definition: ScriptDefinition,
    settings: ScriptSettings,
    started_at: datetime,
) -> FileSink | None:
    """Attach the log file, if any; commands write their output to it too."""
    log_dir = settings.log_dir
    if log_dir is None and definition.save_log:
        root = settings.workspace_root or default_root()
        log_dir = root / program_stem(definition.program_name) / "logs"
    if log_dir is None:
        return None
    sink = open_log_file(log_dir, started_at)
    logger.attach_secondary(sink)
    return sink


def run_script(
    main: ScriptMain,
    definition: ScriptDefinition,
    argv: Sequence[str] | None = None,
    *,
    settings: ScriptSettings | None = None,
    interactive: IO[str] | None = None,
    started_at: datetime | None = None,
) -> int:
    """Run *main* inside the full script lifecycle.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    settings:
        Environment-derived settings; read from ``os.environ`` when ``None``.
    interactive:
        Interactive log stream; ``None`` follows ``sys.stderr``.

    Returns
    -------
    int
        Exit status on success (``main``'s return value, or
        :data:`exit_codes.SUCCESS` for ``None`` and for the manual page).

    Raises
    ------
    SystemExit
        Through :func:`abort` on every fatal error.
    """
    settings = settings if settings is not None else ScriptSettings.from_environ()
    started_at = started_at if started_at is not None else datetime.now()
    tokens = list(sys.argv[1:] if argv is None else argv)
    logger = ScriptLogger.for_settings(settings, interactive=interactive)

    try:
        try:
            check_runtime_version(definition.minimum_version)
            with ScopedWorkspace(
                definition.program_name,
                started_at,
                root=settings.workspace_root,
            ) as workspace:
                log_file = _wire_log_saving(logger, definition, settings, started_at)

                command_line = CommandLineParser(definition.options).parse(tokens)
                if command_line.help_requested:
                    show_manual_page(logger, definition.program_name, definition.manual_page)
                    return exit_codes.SUCCESS

                expect_arguments(
                    command_line,
                    minimum=definition.min_arguments,
                    maximum=definition.max_arguments,
                )

                tracer = Tracer(logger)
                context = ScriptContext(
                    definition=definition,
                    command_line=command_line,
                    logger=logger,
                    workspace=workspace.path,
                    tracer=tracer,
                    runner=CommandRunner(tracer, output=log_file),
                    started_at=started_at,
                )
                result = main(context)
                return exit_codes.SUCCESS if result is None else result
        except ScriptScaffoldError as exc:
            abort(logger, _describe(exc), exc.exit_code)
        except KeyboardInterrupt:
            abort(logger, "Aborted by user.", exit_codes.KEYBOARD_INTERRUPT)
        except Exception as exc:  # noqa: BLE001
            abort(logger, _describe_unexpected(exc), exit_codes.UNEXPECTED_ERROR)
    finally:
        logger.close()
