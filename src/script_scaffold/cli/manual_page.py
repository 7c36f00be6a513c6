"""Manual page template and renderer.

The template is indented by four spaces so it reads naturally in source;
rendering strips that indentation and fills in ``@{SCRIPT_NAME}``.
"""

from __future__ import annotations

import re

from script_scaffold.cli.logger import ScriptLogger

SCRIPT_NAME_PLACEHOLDER: str = "@{SCRIPT_NAME}"

TEMPLATE_INDENT: int = 4

_LEADING_INDENT = re.compile(rf"^[ \t]{{{TEMPLATE_INDENT}}}", re.MULTILINE)

MANUAL_PAGE_TEMPLATE: str = """\
    MANUAL_PAGE
        @{SCRIPT_NAME}

    USAGE
        @{SCRIPT_NAME} [options] [argument...]

    DESCRIPTION
        A starter script that can be copied and modified when you need a
        new command-line tool.  It includes the following features.

        - Strict execution: failing commands and unset variables abort.
        - Command line parsing of options and arguments.
        - Logging that supports colours and optional log saving.
        - Temporary storage for staging or intermediate files, removed
          on every exit path.
        - Command tracing.
        - Early termination via 'abort'.

    OPTIONS
        -h|--help
            Show this manual page.

        -a|--demo-opt-a
            A demo option that is just a flag.

        -b|--demo-opt-b <value>
            A demo option that accepts a parameter.

        --
            Treat every following token as an argument.

    ARGUMENTS
        [argument...]
            An optional list of arguments.

    ENVIRONMENT
        NO_COLOR
            Disable coloured output when set to any non-empty value.

        SCRIPT_SCAFFOLD_LOG_DIR
            Save a plain-text copy of the log in this directory.

        SCRIPT_SCAFFOLD_WORKSPACE_ROOT
            Parent directory of the temporary workspace.

    END
"""


def render_manual_page(template: str, program_name: str) -> str:
    """Strip the template indentation and substitute the program name."""
    unindented = _LEADING_INDENT.sub("", template)
    return unindented.replace(SCRIPT_NAME_PLACEHOLDER, program_name)


def show_manual_page(
    logger: ScriptLogger,
    program_name: str,
    template: str = MANUAL_PAGE_TEMPLATE,
) -> str:
    """Render the manual page and write it through *logger*.

    Returns the rendered text.
    """
    rendered = render_manual_page(template, program_name)
    logger.plain(rendered.rstrip("\n"))
    return rendered
