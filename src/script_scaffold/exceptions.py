"""Custom exception hierarchy for script-scaffold.

Every fatal condition inside a script maps to a subclass of
:class:`ScriptScaffoldError`.  Components raise; the lifecycle runner is
the single error boundary that turns the exception into an abort with
the exception's :attr:`~ScriptScaffoldError.exit_code`.

Hierarchy
---------
ScriptScaffoldError
├── VersionTooOldError
├── ResourceError
├── CommandLineError
│   ├── InvalidOptionError
│   ├── MissingParameterError
│   └── UnexpectedArgumentsError
└── UnhandledCommandError
    └── UnsetVariableError
"""

from __future__ import annotations

from collections.abc import Sequence


class ScriptScaffoldError(Exception):
    """Base exception for all script-scaffold errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the error boundary can render a clean message
    without leaking internal stack traces.
    """

    exit_code: int = 1
    """Process exit status used when this error aborts the script."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Start-up ---------------------------------------------------------------

class VersionTooOldError(ScriptScaffoldError):
    """Raised when the interpreter is older than the required minimum."""


class ResourceError(ScriptScaffoldError):
    """Raised when the scoped workspace cannot be created."""


# --- Command line -----------------------------------------------------------

class CommandLineError(ScriptScaffoldError):
    """Base class for user-input errors found while parsing the command line."""

    def __init__(self, message: str, *, hint: str | None = "Need --help?") -> None:
        super().__init__(message, hint=hint)


class InvalidOptionError(CommandLineError):
    """Raised for an unrecognised token that starts with the option prefix."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid option '{token}'.")
        self.token: str = token


class MissingParameterError(CommandLineError):
    """Raised when a named parameter is the last token on the command line."""

    def __init__(self, option: str) -> None:
        super().__init__(f"Option '{option}' requires a value.")
        self.option: str = option


class UnexpectedArgumentsError(CommandLineError):
    """Raised when positional arguments violate the script's cardinality policy."""


# --- Strict execution -------------------------------------------------------

class UnhandledCommandError(ScriptScaffoldError):
    """Raised when a strictly-executed command exits with a non-zero status.

    The script terminates with the command's own status.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int = 1,
        command: Sequence[str] = (),
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode: int = returncode
        self.command: tuple[str, ...] = tuple(command)

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        # Negative values mean "killed by signal N"; report them the shell way.
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode or 1


class UnsetVariableError(UnhandledCommandError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Environment variable '{name}' is not set.",
            hint="Export it or read it with an explicit default.",
        )
        self.name: str = name
