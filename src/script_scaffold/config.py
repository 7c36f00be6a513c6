"""Runtime settings read from the process environment.

Settings are resolved once at start-up into a frozen
:class:`ScriptSettings` and then passed around explicitly.  Nothing else
in the package reads ``os.environ`` directly except
:func:`require_env`, which implements the strict unset-variable policy.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

from script_scaffold.exceptions import UnsetVariableError

WORKSPACE_ROOT_ENV: str = "SCRIPT_SCAFFOLD_WORKSPACE_ROOT"
"""Overrides the parent directory of every scoped workspace."""

LOG_DIR_ENV: str = "SCRIPT_SCAFFOLD_LOG_DIR"
"""When set, enables log saving into this directory."""

_MISSING: Any = object()


@dataclass(frozen=True, slots=True)
class ScriptSettings:
    """Environment-derived configuration for one script invocation."""

    no_color: bool = False
    """``NO_COLOR`` was set to a non-empty value."""

    term: str = ""
    """Value of ``TERM``; ``"dumb"`` disables colour."""

    workspace_root: Path | None = None
    """Parent directory for the scoped workspace, or ``None`` for the default."""

    log_dir: Path | None = None
    """Directory for saved logs, or ``None`` when not forced on."""

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> ScriptSettings:
        env = os.environ if environ is None else environ
        workspace_root = env.get(WORKSPACE_ROOT_ENV) or None
        log_dir = env.get(LOG_DIR_ENV) or None
        return cls(
            no_color=bool(env.get("NO_COLOR")),
            term=env.get("TERM", ""),
            workspace_root=Path(workspace_root) if workspace_root else None,
            log_dir=Path(log_dir) if log_dir else None,
        )

    def color_enabled(self, stream: IO[str]) -> bool:
        """Return ``True`` when *stream* should receive colour escapes.

        Colour is off when ``NO_COLOR`` is set, ``TERM`` is ``dumb``, or
        *stream* is not a terminal.  A stream without ``isatty`` counts
        as a non-terminal.
        """
        if self.no_color or self.term == "dumb":
            return False
        isatty = getattr(stream, "isatty", None)
        if isatty is None:
            return False
        try:
            return bool(isatty())
        except (OSError, ValueError):
            return False


def require_env(
    name: str,
    default: str = _MISSING,
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return environment variable *name*, or raise if it is unset.

    Passing *default* is the explicit guard that exempts the lookup
    from the strict policy.

    Raises
    ------
    UnsetVariableError
        When *name* is unset and no *default* was given.
    """
    env = os.environ if environ is None else environ
    value = env.get(name)
    if value is not None:
        return value
    if default is _MISSING:
        raise UnsetVariableError(name)
    return default
