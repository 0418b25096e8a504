# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from arrayify_lib.core.config import CFG, BatchSettings
from arrayify_lib.core.error import InvalidBatchSizeError, InvalidInputError
from arrayify_lib.core.logger import get_logger

logger = get_logger(__name__)


class BatchPlanner:
    """
    Computes how many elements of a job array may run at the same time.
    """

    def __init__(self, settings: BatchSettings | None = None):
        """
        Initialize the planner.

        Args:
            settings (BatchSettings | None): Planning settings. Defaults to the global configuration.
        """
        self._settings = settings or CFG.batch

    def plan(self, n_jobs: int, limit: int | None = None) -> int:
        """
        Determine the concurrency limit of a job array.

        Args:
            n_jobs (int): Number of elements in the array.
            limit (int | None): Explicitly requested limit. If None, the limit is
                the configured percentage of the array, rounded up, and at least 1.

        Returns:
            int: The concurrency limit, between 1 and `n_jobs`.

        Raises:
            InvalidInputError: If there are no jobs.
            InvalidBatchSizeError: If the requested limit is not between 1 and `n_jobs`.
        """
        if n_jobs < 1:
            raise InvalidInputError("Cannot plan a job array without jobs.")

        if limit is None:
            # integer ceiling, floats would turn e.g. 15 * 0.2 into 3.0000000000000004
            planned = -(-n_jobs * self._settings.default_percent // 100)
            planned = min(max(1, planned), n_jobs)
            logger.debug(f"Planned batch size {planned} for {n_jobs} jobs.")
            return planned

        if limit <= 0 or limit > n_jobs:
            raise InvalidBatchSizeError(
                f"Batch size must be between 1 and the number of jobs ({n_jobs}), not {limit}."
            )

        return limit
