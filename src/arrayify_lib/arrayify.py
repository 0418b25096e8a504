# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys

import click
from click_help_colors import HelpColorsGroup

from arrayify_lib.check.cli import check
from arrayify_lib.submit.cli import sub

__version__ = "0.3.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=HelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of arrayify and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Submit and check job arrays built from a CSV file or a directory.

    Every row of the CSV file (or every pair of files in the directory) becomes
    one job of an array submitted to the batch system in a single submission.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(sub)
cli.add_command(check)
