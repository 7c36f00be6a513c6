"""CLI application entry point for the demo script.

Copy this module when starting a new script: replace the option
declarations, the manual page, and :func:`demo_main`.  Everything else —
workspace, logging, parsing, abort handling — comes from
:func:`~script_scaffold.cli.runtime.run_script`.
"""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path

from rich.color import ColorSystem
from rich.style import Style

from script_scaffold.cli.runtime import ScriptContext, ScriptDefinition, run_script
from script_scaffold.core.models import OptionKind, OptionSpec

PROGRAM_NAME: str = "script-scaffold"
"""Fallback name when the invoked name says nothing (``python -m``, ``-c``)."""


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

DEMO_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("NEED_HELP", "-h", "--help", OptionKind.HELP),
    OptionSpec("DEMO_OPT_A", "-a", "--demo-opt-a", OptionKind.FLAG),
    OptionSpec("DEMO_OPT_B", "-b", "--demo-opt-b", OptionKind.PARAMETER),
)
"""Documented in the OPTIONS section of the manual page."""

DEMO_DEFINITION = ScriptDefinition(program_name=PROGRAM_NAME, options=DEMO_OPTIONS)

RAINBOW: tuple[str, ...] = ("red", "bright_red", "yellow", "green", "cyan", "blue", "magenta")


def rainbow(text: str) -> str:
    """Colour each character of *text* with ANSI escapes, cycling :data:`RAINBOW`."""
    return "".join(
        Style(color=RAINBOW[index % len(RAINBOW)]).render(char, color_system=ColorSystem.STANDARD)
        for index, char in enumerate(text)
    )


# ---------------------------------------------------------------------------
# Demo logic
# ---------------------------------------------------------------------------

def demo_main(context: ScriptContext) -> int | None:
    """Walk through each feature the framework provides."""
    log = context.logger
    run = context.runner.run
    workspace = context.workspace

    log.info(f"Hello from '{context.program_name}'. Below are some examples of script features.")

    log.plain("----")
    log.plain("Example: Manual page.")
    log.plain("Run this script with '-h' or '--help' to see the manual page you can modify.")

    log.plain("----")
    log.plain("Example: Logging with colours.")
    log.plain(f"Taste the {rainbow('rainbow')}!")
    log.warning("Warnings are yellow.")

    log.plain("----")
    log.plain("Example: Tracing commands.")
    with context.tracer.traced():
        run(["pwd", "-P"])

    log.plain("----")
    log.plain("Example: Using temporary storage.")
    (workspace / "my-file").touch()
    with context.tracer.traced():
        run(["ls", "-1", str(workspace)])
    log.plain(f"Run 'ls -1 {workspace}' after the script ends to verify the directory is gone.")

    log.plain("----")
    log.plain("Example: Options and arguments.")
    log.plain("Re-run the script with various options and arguments to see how the values below change.")
    log.plain(f"demo-opt-a: {'yes' if context.options['DEMO_OPT_A'] else 'no'}")
    log.plain(f"demo-opt-b: {context.options['DEMO_OPT_B']}")
    log.plain(f"argument count: {len(context.arguments)}")
    log.plain(f"argument list: {' '.join(context.arguments)}")
    log.plain("----")
    return None


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def invoked_name(argv0: str | None = None) -> str:
    """Basename the script was invoked as, e.g. ``backup`` for ``/usr/bin/backup``."""
    if argv0 is None:
        argv0 = sys.argv[0] if sys.argv else ""
    name = Path(argv0).name
    if not name or name in ("-c", "__main__.py"):
        return PROGRAM_NAME
    return name


def main(argv: list[str] | None = None, program_name: str = PROGRAM_NAME) -> int:
    """Run the demo script.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    program_name:
        Name shown in messages and the manual page.

    Returns
    -------
    int
        OS process exit code.
    """
    definition = dataclasses.replace(DEMO_DEFINITION, program_name=program_name)
    return run_script(demo_main, definition, argv)


def cli() -> None:
    """Console-script entry point; fatal errors exit through the abort path."""
    sys.exit(main(program_name=invoked_name()))
