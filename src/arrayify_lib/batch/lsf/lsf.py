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
    BJOBS_FIELDS,
    NOT_FOUND_PATTERN,
    parse_bjobs_output,
    parse_job_id,
)

logger = get_logger(__name__)


@batch_system
class LSF(BatchInterface, metaclass=BatchMeta):
    """
    Implementation of BatchInterface for IBM Spectrum LSF.
    """

    def envName() -> str:
        return "LSF"

    def isAvailable() -> bool:
        return shutil.which("bsub") is not None

    def translateSubmit(spec: JobArraySpec) -> tuple[list[str], str]:
        res = spec.resources
        command = [
            "bsub",
            "-J",
            f"{spec.name}[1-{spec.size}]%{spec.limit}",
            "-q",
            res.queue or CFG.lsf_options.default_queue,
            "-n",
            str(res.threads),
        ]

        if res.memory:
            command += [
                "-M",
                str(res.memory),
                "-R",
                f"select[mem>{res.memory}] rusage[mem={res.memory}]",
            ]

        command += [
            "-o",
            str(spec.log_dir / CFG.lsf_options.stdout_pattern),
            "-e",
            str(spec.log_dir / CFG.lsf_options.stderr_pattern),
        ]

        return command, LSF._createDispatchScript(spec, CFG.env_vars.lsf_array_index)

    def jobSubmit(spec: JobArraySpec) -> SubmissionResult:
        command, script = LSF.translateSubmit(spec)
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
        command = ["bjobs", "-noheader", "-o", BJOBS_FIELDS, job_id]
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

        elements = parse_bjobs_output(result.stdout)

        # bjobs reports unknown jobs on stderr (or stdout on some versions)
        if not elements and NOT_FOUND_PATTERN.search(result.stdout + result.stderr):
            raise JobNotFoundError(job_id)

        if result.returncode != 0 and not elements:
            raise ArrayifyError(
                f"Could not retrieve information about job '{job_id}': {result.stderr.strip()}."
            )

        return JobStatus(job_id, elements, result.stdout)
