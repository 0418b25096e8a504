# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shlex
import shutil
import subprocess

from arrayify_lib.batch.interface import BatchInterface, BatchMeta, batch_system
from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import (
    ArrayifyError,
    JobNotFoundError,
    SubmissionFailedError,
)
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.array import JobArraySpec
from arrayify_lib.properties.status import JobStatus
from arrayify_lib.properties.submission import SubmissionResult

from .common import (
    NOT_FOUND_PATTERN,
    SACCT_FIELDS,
    parse_job_id,
    parse_sacct_output,
)

logger = get_logger(__name__)


@batch_system
class Slurm(BatchInterface, metaclass=BatchMeta):
    """
    Implementation of BatchInterface for Slurm.
    """

    def envName() -> str:
        return "Slurm"

    def isAvailable() -> bool:
        return shutil.which("sbatch") is not None

    def translateSubmit(spec: JobArraySpec) -> tuple[list[str], str]:
        res = spec.resources
        command = [
            "sbatch",
            f"--job-name={spec.name}",
            f"--array=1-{spec.size}%{spec.limit}",
            f"--cpus-per-task={res.threads}",
        ]

        if res.queue:
            command.append(f"--partition={res.queue}")

        if res.memory:
            command.append(f"--mem={res.memory}")

        command += [
            f"--output={spec.log_dir / CFG.slurm_options.stdout_pattern}",
            f"--error={spec.log_dir / CFG.slurm_options.stderr_pattern}",
            "--parsable",
        ]

        return command, Slurm._createDispatchScript(
            spec, CFG.env_vars.slurm_array_index
        )

    def jobSubmit(spec: JobArraySpec) -> SubmissionResult:
        command, script = Slurm.translateSubmit(spec)
        logger.debug(shlex.join(command))

        try:
            result = subprocess.run(
                command,
                input=script,
                text=True,
                check=False,
                capture_output=True,
                errors="replace",
            )
        except OSError as e:
            raise SubmissionFailedError(f"Could not run '{command[0]}': {e}.") from e

        if result.returncode != 0:
            raise SubmissionFailedError(
                f"Failed to submit job array '{spec.name}' (exit code {result.returncode}).",
                result.stdout,
                result.stderr,
            )

        if not (job_id := parse_job_id(result.stdout)):
            raise SubmissionFailedError(
                f"Could not find a job identifier in the output of '{command[0]}'.",
                result.stdout,
                result.stderr,
            )

        return SubmissionResult(job_id, result.stdout, result.stderr)

    def getArrayStatus(job_id: str) -> JobStatus:
        command = [
            "sacct",
            "-j",
            job_id,
            "--noheader",
            "--parsable2",
            "--allocations",
            f"--format={SACCT_FIELDS}",
        ]
        logger.debug(shlex.join(command))

        try:
            result = subprocess.run(
                command,
                text=True,
                check=False,
                capture_output=True,
                errors="replace",
            )
        except OSError as e:
            raise ArrayifyError(f"Could not run '{command[0]}': {e}.") from e

        if NOT_FOUND_PATTERN.search(result.stdout + result.stderr):
            raise JobNotFoundError(job_id)

        if result.returncode != 0:
            raise ArrayifyError(
                f"Could not retrieve information about job '{job_id}': {result.stderr.strip()}."
            )

        # sacct prints nothing for jobs it does not know
        if not result.stdout.strip():
            raise JobNotFoundError(job_id)

        return JobStatus(job_id, parse_sacct_output(result.stdout), result.stdout)
