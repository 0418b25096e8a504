# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re

from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.states import JobState
from arrayify_lib.properties.status import ElementStatus

logger = get_logger(__name__)

# Fields requested from bjobs, in output order.
BJOBS_FIELDS = "job_name stat exit_code"

# bsub reports 'Job <12345> is submitted to queue <normal>.'
JOB_ID_PATTERN = re.compile(r"Job <(\d+)>")

# Messages of bjobs about job identifiers it does not know.
NOT_FOUND_PATTERN = re.compile(r"is not found|illegal job id", re.IGNORECASE)

# Mapping of LSF job states to normalized states.
LSF_STATES: dict[str, JobState] = {
    "PEND": JobState.PENDING,
    "PSUSP": JobState.PENDING,
    "WAIT": JobState.PENDING,
    "RUN": JobState.RUNNING,
    "PROV": JobState.RUNNING,
    "USUSP": JobState.RUNNING,
    "SSUSP": JobState.RUNNING,
    "DONE": JobState.DONE,
    "EXIT": JobState.FAILED,
}


def parse_job_id(output: str) -> str | None:
    """
    Extract the job identifier from the output of bsub.

    Returns:
        str | None: The identifier or None if the output does not contain one.
    """
    if match := JOB_ID_PATTERN.search(output):
        return match.group(1)
    return None


def parse_bjobs_output(text: str) -> list[ElementStatus]:
    """
    Parse the output of `bjobs -noheader -o "job_name stat exit_code"`.

    Lines that do not have all fields are ignored.

    Returns:
        list[ElementStatus]: Status of each listed array element.
    """
    elements = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 3:
            if line.strip():
                logger.debug(f"Ignoring unparsable bjobs line: '{line}'.")
            continue

        # job names may contain spaces, state and exit code never do
        name, raw_state, raw_exit = " ".join(parts[:-2]), parts[-2], parts[-1]
        elements.append(
            ElementStatus(
                name=name,
                state=LSF_STATES.get(raw_state.upper(), JobState.UNKNOWN),
                raw_state=raw_state,
                exit_code=int(raw_exit) if raw_exit.isdigit() else None,
            )
        )

    return elements
