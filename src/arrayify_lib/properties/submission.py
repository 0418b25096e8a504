# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a successful job array submission."""

    # Identifier assigned to the job array by the batch system.
    job_id: str
    # Raw output of the submission command.
    stdout: str = ""
    stderr: str = ""
