"""Core layer — pure parsing, version ordering, and value objects.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from script_scaffold.core.models import (
    CommandLine,
    OptionKind,
    OptionSpec,
    OptionsRecord,
)
from script_scaffold.core.options import CommandLineParser, expect_arguments
from script_scaffold.core.protocols import TextSink
from script_scaffold.core.version_guard import check_runtime_version, version_at_least

__all__: list[str] = [
    "CommandLine",
    "CommandLineParser",
    "OptionKind",
    "OptionSpec",
    "OptionsRecord",
    "TextSink",
    "check_runtime_version",
    "expect_arguments",
    "version_at_least",
]
