"""Infrastructure layer — filesystem, signals, and subprocesses.

Rules
-----
* No imports from ``cli``.
* No user-facing output; errors surface as
  :class:`~script_scaffold.exceptions.ScriptScaffoldError` subclasses.
"""

from script_scaffold.infra.commands import CommandRunner, Tracer
from script_scaffold.infra.log_sinks import FileSink, NullSink, open_log_file
from script_scaffold.infra.workspace import ScopedWorkspace, default_root

__all__: list[str] = [
    "CommandRunner",
    "FileSink",
    "NullSink",
    "ScopedWorkspace",
    "Tracer",
    "default_root",
    "open_log_file",
]
