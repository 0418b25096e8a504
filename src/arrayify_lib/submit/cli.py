# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click
from click_option_group import RequiredMutuallyExclusiveOptionGroup, optgroup

from arrayify_lib.core.click_format import GNUHelpColorsCommand
from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import ArrayifyError
from arrayify_lib.core.logger import get_logger
from arrayify_lib.submit.factory import SubmitterFactory

logger = get_logger(__name__)


class BatchSizeType(click.ParamType):
    """Click parameter accepting an integer or 'auto'."""

    name = "batch"

    def convert(self, value, param, ctx) -> int | None:
        if value is None or isinstance(value, int):
            return value

        if str(value).strip().lower() == "auto":
            return None

        try:
            return int(value)
        except ValueError:
            self.fail(f"'{value}' is not an integer or 'auto'.", param, ctx)


@click.command(
    name="sub",
    short_help="Submit a job array from a CSV file or a directory.",
    help=f"""
Submit a job array built from a CSV file or a directory of paired files.

Each row of the CSV file (or each pair of files in the directory) becomes one job.
The command template is expanded for every job by replacing placeholders
enclosed in braces with the values of the job, e.g. {click.style("'echo {ID} {R1} {R2}'", fg="green")}.

CSV headers name the placeholders. Jobs read from a directory always have the
placeholders {{ID}}, {{R1}} and {{R2}}, where R1 and R2 are the files marked
`_1`/`_R1` and `_2`/`_R2` and ID is the part of the file name before the marker.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@optgroup.group(
    f"{click.style('Job source', fg='yellow')}",
    cls=RequiredMutuallyExclusiveOptionGroup,
)
@optgroup.option(
    "--csv",
    "-s",
    type=str,
    default=None,
    help="Path to the CSV file containing one job per row. Headers can be used as placeholders.",
)
@optgroup.option(
    "--dir",
    "-d",
    type=str,
    default=None,
    help="Path to the directory containing paired input files.",
)
@optgroup.group(f"{click.style('General settings', fg='yellow')}")
@optgroup.option(
    "--command",
    "-c",
    type=str,
    required=True,
    help="Command template with placeholders, e.g. 'echo {ID} {R1} {R2}'. Quote it to prevent shell expansion.",
)
@optgroup.option(
    "--job-prefix",
    "--job_prefix",
    "-p",
    type=str,
    default=CFG.submission.job_prefix,
    show_default=True,
    help="Prefix of the job array name, i.e. <prefix>_job_array.",
)
@optgroup.option(
    "--log",
    "-l",
    type=str,
    default=CFG.submission.log_dir,
    show_default=True,
    help="Directory to store scheduler logs and the list of submitted commands.",
)
@optgroup.option(
    "--batch",
    "-b",
    type=BatchSizeType(),
    default="auto",
    show_default=True,
    help=f"Number of jobs running concurrently. 'auto' allows {CFG.batch.default_percent}% of the array, rounded up.",
)
@optgroup.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Abort on the first malformed CSV row instead of skipping it.",
)
@optgroup.option(
    "--batch-system",
    type=str,
    default=None,
    help=f"Name of the batch system to submit the job array to. If not specified, the system will use the environment variable '{CFG.env_vars.batch_system}' or attempt to auto-detect it.",
)
@optgroup.group(f"{click.style('Requested resources', fg='yellow')}")
@optgroup.option(
    "--queue",
    "-q",
    type=str,
    default=None,
    help=f"Queue (LSF) or partition (Slurm) to submit to. LSF defaults to '{CFG.lsf_options.default_queue}'.",
)
@optgroup.option(
    "--threads",
    "-t",
    type=int,
    default=CFG.submission.threads,
    show_default=True,
    help="Number of threads per job.",
)
@optgroup.option(
    "--memory",
    "-m",
    type=int,
    default=None,
    help="Memory per job, passed unchanged to the batch system (megabytes on LSF and Slurm by default).",
)
def sub(**kwargs) -> NoReturn:
    """
    Submit a job array from a CSV file or a directory.
    """
    try:
        submitter = SubmitterFactory(**kwargs).makeSubmitter()
        spec = submitter.prepare()

        if (record_set := submitter.getRecordSet()) and record_set.skipped:
            logger.warning(
                f"{len(record_set.skipped)} malformed row(s) were skipped and will not be submitted."
            )

        result = submitter.submit()

        logger.info(
            f"Job array '{spec.name}' submitted successfully to {submitter.getBatchSystem()}."
        )
        logger.info(f"Job ID: {result.job_id}")
        logger.info(f"Jobs submitted: {spec.size} (at most {spec.limit} running at once)")
        logger.info(f"Job commands logged in: {spec.commands_file}")
        logger.info(f"Logs can be found in: {spec.log_dir}")
        logger.info(f"Track with: {CFG.binary_name} check {result.job_id}")

        # job id on stdout so that it can be captured by scripts
        click.echo(result.job_id)
        sys.exit(0)
    except ArrayifyError as e:
        logger.error(f"{e.kind}: {e}")
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
