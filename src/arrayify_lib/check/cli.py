# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click
from rich.console import Console

from arrayify_lib.batch import BatchMeta
from arrayify_lib.check.checker import Checker
from arrayify_lib.check.presenter import StatusPresenter
from arrayify_lib.core.click_format import GNUHelpColorsCommand
from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import ArrayifyError
from arrayify_lib.core.logger import get_logger

logger = get_logger(__name__)


@click.command(
    name="check",
    short_help="Check the status of a submitted job array.",
    help=f"""
Check the status of a job array by providing its job ID.

{click.style("JOB_ID", fg="green")}   ID of the job array as reported by `{CFG.binary_name} sub`.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument("job_id", type=str, metavar=click.style("JOB_ID", fg="green"))
@click.option(
    "--batch-system",
    type=str,
    default=None,
    help=f"Name of the batch system the job was submitted to. If not specified, the system will use the environment variable '{CFG.env_vars.batch_system}' or attempt to auto-detect it.",
)
@click.option("--yaml", is_flag=True, help="Output the status in YAML format.")
def check(job_id: str, batch_system: str | None, yaml: bool) -> NoReturn:
    """
    Check the status of a submitted job array.
    """
    try:
        checker = Checker(BatchMeta.obtain(batch_system), job_id)
        presenter = StatusPresenter(checker.check())

        if yaml:
            presenter.dumpYaml()
        else:
            console = Console(record=False, markup=False)
            console.print(presenter.createStatusPanel(console))

        sys.exit(0)
    except ArrayifyError as e:
        logger.error(f"{e.kind}: {e}")
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
