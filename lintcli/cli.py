"""
Command-line interface for lintcli.

Declares the supported flags, turns a command line into Options and
provides the console entry point.
"""

import os
import sys
from types import MappingProxyType
from typing import Dict, Sequence

import click

from lintcli import __version__
from lintcli.core.config import Config, LintSettings, Options, parse_properties
from lintcli.core.exceptions import ArgumentParsingError
from lintcli.utils.logging_config import setup_logging
from lintcli.utils.system import System


@click.command(name="lintcli", add_help_option=False)
@click.option(
    "-h", "--help", "help_",
    is_flag=True,
    help="Display help information"
)
@click.option(
    "-v", "--version",
    is_flag=True,
    help="Display version information"
)
@click.option(
    "-X", "--debug", "verbose",
    is_flag=True,
    help="Produce execution debug output"
)
@click.option(
    "-e", "--errors", "show_stack",
    is_flag=True,
    help="Produce execution error messages with full stack traces"
)
@click.option(
    "-i", "--interactive",
    is_flag=True,
    help="Run interactively: analyze again each time a line is entered"
)
@click.option(
    "-D", "--define", "properties",
    multiple=True,
    metavar="KEY=VALUE",
    help="Define a property"
)
@click.option(
    "--charset",
    metavar="NAME",
    help="Character encoding of the source files and reports"
)
@click.option(
    "--src",
    metavar="GLOB",
    help="Glob pattern of the source files (default: all files)"
)
@click.option(
    "--tests",
    metavar="GLOB",
    help="Glob pattern of the test files"
)
@click.option(
    "--html-report",
    metavar="PATH",
    help="Location of the HTML report"
)
def command(help_, version, verbose, show_stack, interactive, properties, charset, src, tests, html_report):
    """
    Analyze the files of the current project with the installed
    plugins and write the results to an HTML report.
    """
    return Options(
        help=help_,
        version=version,
        verbose=verbose,
        show_stack=show_stack,
        interactive=interactive,
        charset=charset,
        src=src,
        tests=tests,
        html_report=html_report,
        properties=MappingProxyType(parse_properties(properties)),
    )


def _option_table() -> Dict[str, bool]:
    """Map every declared option name to whether it takes a value."""
    table = {}
    for param in command.params:
        if isinstance(param, click.Option):
            for name in param.opts + param.secondary_opts:
                table[name] = not param.is_flag
    return table


def _check_options(args: Sequence[str]) -> None:
    """
    Reject flags that are not declared, naming them verbatim.

    Raises:
        ArgumentParsingError: On the first unknown flag.
    """
    table = _option_table()
    expects_value = False

    for arg in args:
        if expects_value:
            expects_value = False
            continue
        if arg == "--":
            return
        if not arg.startswith("-") or arg == "-":
            continue

        if arg.startswith("--"):
            name, sep, _ = arg.partition("=")
        else:
            name, sep = arg, ""

        if name in table:
            expects_value = table[name] and not sep
        elif not arg.startswith("--"):
            expects_value = _check_short_cluster(arg, table)
        else:
            raise ArgumentParsingError(f"Unrecognized option: {arg}")


def _check_short_cluster(arg: str, table: Dict[str, bool]) -> bool:
    """
    Check a group of short options such as -Xe or -XDkey=value.

    Every letter must be a declared flag until one that takes a value;
    the rest of the token is then that value.

    Returns:
        True if the last option still expects its value in the next
        argument.

    Raises:
        ArgumentParsingError: If a letter is not a declared option.
    """
    for index, letter in enumerate(arg[1:], start=1):
        name = f"-{letter}"
        if name not in table:
            raise ArgumentParsingError(f"Unrecognized option: {arg}")
        if table[name]:
            return index == len(arg) - 1
    return False


def parse_options(args: Sequence[str]) -> Options:
    """
    Parse a command line.

    Args:
        args: Arguments, without the program name.

    Returns:
        The invocation Options.

    Raises:
        ArgumentParsingError: If the command line is invalid.
    """
    args = list(args)
    _check_options(args)
    try:
        return command.main(args=args, prog_name="lintcli", standalone_mode=False)
    except click.UsageError as e:
        raise ArgumentParsingError(e.format_message())


def usage_text() -> str:
    """Help text listing the supported flags."""
    with click.Context(command, info_name="lintcli") as ctx:
        return command.get_help(ctx)


def version_text() -> str:
    return f"lintcli {__version__}"


def main():
    """Entry point for the CLI."""
    from lintcli.orchestrator import Orchestrator

    Config.load_env()
    os.environ.setdefault(LintSettings.PROJECT_HOME, os.getcwd())

    log_context = setup_logging(level="INFO")
    Orchestrator.execute(sys.argv[1:], System(), log_context)


if __name__ == "__main__":
    main()
