# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout arrayify.

Every exception carries a `kind` label naming the class of failure and an
associated exit code used by arrayify commands to report failures consistently.
Input and template validation errors are raised before the batch system is contacted.
"""

from .config import CFG


class ArrayifyError(Exception):
    """Common exception type for all recoverable arrayify errors."""

    kind = "Error"
    exit_code = CFG.exit_codes.default


class InvalidInputError(ArrayifyError):
    """Raised when the job source is missing, unreadable, empty, or malformed."""

    kind = "InvalidInput"
    exit_code = CFG.exit_codes.invalid_input


class UnknownPlaceholderError(ArrayifyError):
    """Raised when the command template references fields not present in the records."""

    kind = "UnknownPlaceholder"
    exit_code = CFG.exit_codes.unknown_placeholder

    def __init__(self, names: list[str], available: tuple[str, ...] | list[str] = ()):
        self.names = list(names)
        self.available = tuple(available)

        quoted = ", ".join(f"'{{{n}}}'" for n in self.names)
        message = f"Command template references undefined placeholder(s): {quoted}."
        if self.available:
            message += f" Available fields: {', '.join(self.available)}."
        super().__init__(message)


class InvalidBatchSizeError(ArrayifyError):
    """Raised when an explicit batch size is not within [1, number of jobs]."""

    kind = "InvalidBatchSize"
    exit_code = CFG.exit_codes.invalid_batch_size


class SubmissionFailedError(ArrayifyError):
    """
    Raised when the batch system fails to submit the job array
    or returns output without a recognizable job identifier.
    """

    kind = "SubmissionFailed"
    exit_code = CFG.exit_codes.submission_failed

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        self.stdout = stdout
        self.stderr = stderr

        details = [
            f"{label}: {text.strip()}"
            for label, text in (("stdout", stdout), ("stderr", stderr))
            if text.strip()
        ]
        super().__init__("\n".join([message, *details]))


class JobNotFoundError(ArrayifyError):
    """Raised when the batch system does not know the requested job."""

    kind = "JobNotFound"
    exit_code = CFG.exit_codes.job_not_found

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job '{job_id}' was not found by the batch system.")
