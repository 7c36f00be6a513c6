"""script-scaffold — a starter framework for command-line scripts.

Option parsing, dual-channel logging, a self-cleaning scoped workspace,
command tracing, and a manual-page renderer wired into one lifecycle.
"""

from script_scaffold.version import __version__

__all__: list[str] = ["__version__"]
