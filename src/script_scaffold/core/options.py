"""Single-pass option/argument parser.

The parser walks the raw token sequence once, left to right:

* a flag sets its option to ``True`` and scanning continues;
* a named parameter consumes exactly one following token as its value;
* a help switch sets its option and stops parsing on the spot;
* ``--`` is consumed and every later token is positional;
* an unknown token starting with ``-`` is rejected;
* any other token ends option scanning — it and everything after it
  are positional arguments.

Guarantees
----------
* Pure — no I/O, no global state.
* The options record always holds exactly the declared keys.
* Cardinality of positional arguments is checked separately by
  :func:`expect_arguments`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from script_scaffold.core.models import (
    CommandLine,
    OptionKind,
    OptionSpec,
    OptionsRecord,
    OptionValue,
)
from script_scaffold.exceptions import (
    InvalidOptionError,
    MissingParameterError,
    UnexpectedArgumentsError,
)

END_OF_OPTIONS: str = "--"


def _looks_like_option(token: str) -> bool:
    # A lone "-" conventionally names stdin and is positional.
    return token.startswith("-") and len(token) > 1


class CommandLineParser:
    """Parser for a fixed set of declared options.

    Parameters
    ----------
    specs:
        The supported options.  Record keys and command-line spellings
        must be unique.
    """

    def __init__(self, specs: Iterable[OptionSpec]) -> None:
        self._specs: tuple[OptionSpec, ...] = tuple(specs)
        self._by_token: dict[str, OptionSpec] = {}

        names: set[str] = set()
        for spec in self._specs:
            if spec.name in names:
                raise ValueError(f"Duplicate option name {spec.name!r}.")
            names.add(spec.name)
            for token in spec.tokens:
                if token in self._by_token:
                    raise ValueError(f"Duplicate option token {token!r}.")
                self._by_token[token] = spec

    @property
    def specs(self) -> tuple[OptionSpec, ...]:
        return self._specs

    def defaults(self) -> dict[str, OptionValue]:
        """Return a fresh dict holding every declared option's default."""
        return {spec.name: spec.initial_value for spec in self._specs}

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, tokens: Sequence[str]) -> CommandLine:
        """Parse *tokens* (without the program name).

        Raises
        ------
        InvalidOptionError
            For an unrecognised option-looking token seen while scanning.
        MissingParameterError
            When a named parameter has no following token.
        """
        values = self.defaults()
        index = 0
        count = len(tokens)

        while index < count:
            token = tokens[index]

            if token == END_OF_OPTIONS:
                index += 1
                break

            spec = self._by_token.get(token)
            if spec is None:
                if _looks_like_option(token):
                    raise InvalidOptionError(token)
                break

            if spec.kind is OptionKind.HELP:
                values[spec.name] = True
                # Nothing after the help switch is inspected.
                return CommandLine(
                    options=OptionsRecord(values),
                    arguments=(),
                    help_requested=True,
                )

            if spec.kind is OptionKind.FLAG:
                values[spec.name] = True
                index += 1
                continue

            if index + 1 >= count:
                raise MissingParameterError(token)
            values[spec.name] = tokens[index + 1]
            index += 2

        return CommandLine(
            options=OptionsRecord(values),
            arguments=tuple(tokens[index:]),
        )


def expect_arguments(
    command_line: CommandLine,
    *,
    minimum: int = 0,
    maximum: int | None = None,
) -> tuple[str, ...]:
    """Enforce a positional-argument cardinality policy.

    Returns the arguments unchanged when ``minimum <= len <= maximum``.

    Raises
    ------
    UnexpectedArgumentsError
        When there are too few or too many positional arguments.
    """
    arguments = command_line.arguments
    if len(arguments) < minimum:
        raise UnexpectedArgumentsError(
            f"Expected at least {minimum} argument(s), got {len(arguments)}.",
        )
    if maximum is not None and len(arguments) > maximum:
        if maximum == 0:
            message = "Unexpected arguments detected."
        else:
            message = f"Expected at most {maximum} argument(s), got {len(arguments)}."
        raise UnexpectedArgumentsError(message)
    return arguments
