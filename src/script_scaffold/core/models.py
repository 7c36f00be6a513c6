"""Domain models for script-scaffold.

All models are frozen dataclasses or read-only mappings — value objects
with no I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

OptionValue = bool | str


# ---------------------------------------------------------------------------
# Option declarations
# ---------------------------------------------------------------------------

class OptionKind(enum.Enum):
    """How the parser treats an option token."""

    FLAG = "flag"
    """Boolean switch; presence sets the value to ``True``."""

    PARAMETER = "parameter"
    """Named parameter; consumes exactly one following token."""

    HELP = "help"
    """Help switch; sets the value to ``True`` and stops parsing."""


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Declaration of a single supported option."""

    name: str
    """Key in the options record (e.g. ``DEMO_OPT_A``)."""

    short: str | None
    """Short form including the prefix (e.g. ``-a``), or ``None``."""

    long: str | None
    """Long form including the prefix (e.g. ``--demo-opt-a``), or ``None``."""

    kind: OptionKind = OptionKind.FLAG

    default: OptionValue | None = None
    """Initial value; ``None`` picks ``False`` or ``""`` from :attr:`kind`."""

    def __post_init__(self) -> None:
        if self.short is None and self.long is None:
            raise ValueError(f"Option {self.name!r} needs a short or a long form.")
        for token in self.tokens:
            if not token.startswith("-") or token in ("-", "--"):
                raise ValueError(f"Option token {token!r} must start with '-'.")

    @property
    def tokens(self) -> tuple[str, ...]:
        """Every command-line spelling of this option."""
        return tuple(token for token in (self.short, self.long) if token is not None)

    @property
    def initial_value(self) -> OptionValue:
        if self.default is not None:
            return self.default
        return "" if self.kind is OptionKind.PARAMETER else False


# ---------------------------------------------------------------------------
# Parse results
# ---------------------------------------------------------------------------

class OptionsRecord(Mapping[str, OptionValue]):
    """Read-only mapping of option name to parsed value.

    The key set is fixed at construction; there is no way to add, remove
    or overwrite entries afterwards.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, OptionValue]) -> None:
        self._values: Mapping[str, OptionValue] = MappingProxyType(dict(values))

    def __getitem__(self, key: str) -> OptionValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"OptionsRecord({dict(self._values)!r})"


@dataclass(frozen=True, slots=True)
class CommandLine:
    """Result of a single parse pass over the raw command line."""

    options: OptionsRecord
    arguments: tuple[str, ...] = field(default=())
    """Positional tokens, in command-line order."""

    help_requested: bool = False
