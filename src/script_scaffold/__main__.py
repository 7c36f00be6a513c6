"""Allow ``python -m script_scaffold`` invocation.

Delegates to the same entry point as the ``script-scaffold`` console
script.
"""

from __future__ import annotations

from script_scaffold.cli.app import cli

if __name__ == "__main__":
    cli()
