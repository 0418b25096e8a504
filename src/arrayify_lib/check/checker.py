# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from arrayify_lib.batch.interface import BatchInterface
from arrayify_lib.core.error import InvalidInputError
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.status import JobStatus

logger = get_logger(__name__)


class Checker:
    """
    Class to query the state of a job array.
    """

    def __init__(self, batch_system: type[BatchInterface], job_id: str):
        """
        Initialize the checker.

        Args:
            batch_system (type[BatchInterface]): The batch system the job was submitted to.
            job_id (str): Identifier of the job array.

        Raises:
            InvalidInputError: If the job identifier is empty.
        """
        if not job_id or not job_id.strip():
            raise InvalidInputError("Job ID must not be empty.")

        self._batch_system = batch_system
        self._job_id = job_id.strip()

    def check(self) -> JobStatus:
        """
        Query the batch system for the current state of the job array.

        Returns:
            JobStatus: The state of the array and its elements.

        Raises:
            JobNotFoundError: If the batch system does not know the job.
            ArrayifyError: If the query fails for another reason.
        """
        status = self._batch_system.getArrayStatus(self._job_id)
        logger.debug(
            f"Job '{self._job_id}' is {status.state} ({len(status.elements)} elements)."
        )
        return status
