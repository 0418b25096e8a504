# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from typing import Any

from .states import JobState, exit_reason


@dataclass(frozen=True)
class ElementStatus:
    """State of a single element of a job array as reported by the batch system."""

    # Name or identifier of the element.
    name: str
    # Normalized state of the element.
    state: JobState
    # State exactly as reported by the batch system.
    raw_state: str
    # Exit code of the element, if the batch system reported one.
    exit_code: int | None = None

    @property
    def reason(self) -> str:
        """Explanation of the exit code of a failed element."""
        return exit_reason(self.exit_code)


@dataclass(frozen=True)
class JobStatus:
    """Point-in-time status of a job array."""

    job_id: str
    elements: list[ElementStatus] = field(default_factory=list)
    # Raw output of the status query.
    raw: str = ""

    @property
    def state(self) -> JobState:
        """Aggregated state of the whole array."""
        return JobState.aggregate(e.state for e in self.elements)

    def counts(self) -> dict[JobState, int]:
        """
        Count the elements in each state.

        Returns:
            dict[JobState, int]: Number of elements per state, including states with zero elements.
        """
        counts = {state: 0 for state in JobState}
        for element in self.elements:
            counts[element.state] += 1
        return counts

    def failed(self) -> list[ElementStatus]:
        """Return the elements that failed."""
        return [e for e in self.elements if e.state == JobState.FAILED]

    def toDict(self) -> dict[str, Any]:
        """
        Convert the status into a dictionary of plain types (e.g. for YAML output).
        """
        return {
            "job_id": self.job_id,
            "state": str(self.state),
            "counts": {str(k): v for k, v in self.counts().items()},
            "elements": [
                {
                    "name": e.name,
                    "state": str(e.state),
                    "raw_state": e.raw_state,
                    "exit_code": e.exit_code,
                }
                for e in self.elements
            ],
        }
