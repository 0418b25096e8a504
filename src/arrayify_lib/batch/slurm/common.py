# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re

from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.states import JobState
from arrayify_lib.properties.status import ElementStatus

logger = get_logger(__name__)

# Fields requested from sacct, in output order.
SACCT_FIELDS = "JobID,State,ExitCode"

# sbatch --parsable prints '<job_id>' or '<job_id>;<cluster>'
JOB_ID_PATTERN = re.compile(r"^\s*(\d+)(?:;\S+)?\s*$", re.MULTILINE)

# Messages of sacct about job identifiers it does not accept.
NOT_FOUND_PATTERN = re.compile(r"invalid job id", re.IGNORECASE)

# Pending array elements are collapsed into one line, e.g. '123_[2-10%2]' or '123_[1,3,5-7:2]'.
ARRAY_RANGE_PATTERN = re.compile(r"^(?P<job>[^\[\]]+)_\[(?P<indices>[^\[\]%]+)(?:%\d+)?\]$")
INDEX_RANGE_PATTERN = re.compile(r"^(?P<start>\d+)(?:-(?P<end>\d+)(?::(?P<step>\d+))?)?$")

# Mapping of Slurm job states to normalized states.
SLURM_STATES: dict[str, JobState] = {
    "PENDING": JobState.PENDING,
    "REQUEUED": JobState.PENDING,
    "SUSPENDED": JobState.PENDING,
    "RUNNING": JobState.RUNNING,
    "COMPLETING": JobState.RUNNING,
    "CONFIGURING": JobState.RUNNING,
    "COMPLETED": JobState.DONE,
    "FAILED": JobState.FAILED,
    "CANCELLED": JobState.FAILED,
    "TIMEOUT": JobState.FAILED,
    "OUT_OF_MEMORY": JobState.FAILED,
    "NODE_FAIL": JobState.FAILED,
    "PREEMPTED": JobState.FAILED,
    "BOOT_FAIL": JobState.FAILED,
    "DEADLINE": JobState.FAILED,
}


def parse_job_id(output: str) -> str | None:
    """
    Extract the job identifier from the output of `sbatch --parsable`.

    Returns:
        str | None: The identifier or None if the output does not contain one.
    """
    if match := JOB_ID_PATTERN.search(output):
        return match.group(1)
    return None


def expand_array_name(name: str) -> list[str]:
    """
    Expand a collapsed sacct array identifier into the identifiers of its elements.

    `123_[2-4%2]` becomes `123_2`, `123_3` and `123_4`.
    Any other identifier, including one with a malformed range, is returned unchanged.
    """
    if not (match := ARRAY_RANGE_PATTERN.match(name)):
        return [name]

    indices = []
    for part in match["indices"].split(","):
        if not (index_range := INDEX_RANGE_PATTERN.match(part.strip())):
            logger.debug(f"Could not expand array identifier '{name}'.")
            return [name]

        start = int(index_range["start"])
        end = int(index_range["end"] or start)
        step = int(index_range["step"] or 1)
        if end < start or step < 1:
            logger.debug(f"Could not expand array identifier '{name}'.")
            return [name]

        indices.extend(range(start, end + 1, step))

    return [f"{match['job']}_{index}" for index in indices]


def parse_sacct_output(text: str) -> list[ElementStatus]:
    """
    Parse the output of `sacct --noheader --parsable2 --format=JobID,State,ExitCode`.

    Lines that do not have all fields are ignored. Collapsed lines of pending
    elements are expanded, producing one status per element.

    Returns:
        list[ElementStatus]: Status of each listed array element.
    """
    elements = []
    for line in text.splitlines():
        parts = line.split("|")
        if len(parts) < 3:
            if line.strip():
                logger.debug(f"Ignoring unparsable sacct line: '{line}'.")
            continue

        name, raw_state, raw_exit = parts[0], parts[1], parts[2]
        # states may look like 'CANCELLED by 1234' or be truncated as 'CANCELLED+'
        state_code = raw_state.split()[0].rstrip("+").upper() if raw_state.strip() else ""
        # exit code is reported as '<exit code>:<signal>'
        exit_code = raw_exit.split(":")[0]

        state = SLURM_STATES.get(state_code, JobState.UNKNOWN)
        elements.extend(
            ElementStatus(
                name=element,
                state=state,
                raw_state=raw_state,
                exit_code=int(exit_code) if exit_code.isdigit() else None,
            )
            for element in expand_array_name(name)
        )

    return elements
