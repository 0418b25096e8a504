# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import InvalidInputError


@dataclass(frozen=True)
class Resources:
    """
    Resources requested for each element of a job array.

    Values are passed through to the batch system, which is the authority
    on whether they can be satisfied.
    """

    # Number of threads (CPU cores) per element.
    threads: int = CFG.submission.threads
    # Memory per element, in the units the batch system expects.
    memory: int | None = None
    # Queue (LSF) or partition (Slurm) to submit to.
    queue: str | None = None

    def validate(self) -> None:
        """
        Check that the requested resources are positive integers.

        Raises:
            InvalidInputError: If threads or memory are not positive.
        """
        if self.threads is None or self.threads <= 0:
            raise InvalidInputError(
                f"Number of threads must be a positive integer, not '{self.threads}'."
            )

        if self.memory is not None and self.memory <= 0:
            raise InvalidInputError(
                f"Memory must be a positive integer, not '{self.memory}'."
            )
