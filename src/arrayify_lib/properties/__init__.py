# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Value types shared by the submission and status-checking workflows.

- `Resources`: resources requested for every element of a job array.
- `JobArraySpec`: a fully resolved job array ready for submission.
- `SubmissionResult`: the job identifier and raw output of a submission.
- `JobState`, `ElementStatus`, `JobStatus`: normalized state of a job array.
"""

from .array import JobArraySpec
from .resources import Resources
from .states import JobState
from .status import ElementStatus, JobStatus
from .submission import SubmissionResult

__all__ = [
    "ElementStatus",
    "JobArraySpec",
    "JobState",
    "JobStatus",
    "Resources",
    "SubmissionResult",
]
