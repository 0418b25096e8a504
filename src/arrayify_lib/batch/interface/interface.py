# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import shlex
from abc import ABC

from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.array import JobArraySpec
from arrayify_lib.properties.status import JobStatus
from arrayify_lib.properties.submission import SubmissionResult

logger = get_logger(__name__)


class BatchInterface(ABC):
    """
    Abstract base class for batch system integrations.

    Concrete batch system classes must implement these methods to allow
    arrayify to interact with different batch systems uniformly.

    All functions should raise ArrayifyError (or its subclasses) when encountering an error.
    """

    @staticmethod
    def envName() -> str:
        """
        Return the name of the batch system environment.

        Returns:
            str: The batch system name.
        """
        raise NotImplementedError(
            "envName method is not implemented for this batch system implementation"
        )

    @staticmethod
    def isAvailable() -> bool:
        """
        Determine whether the batch system is available on the current host.

        Implementations typically verify this by checking for the presence
        of the submission command.

        Returns:
            bool: True if the batch system is available, False otherwise.
        """
        raise NotImplementedError(
            "isAvailable method is not implemented for this batch system implementation"
        )

    @staticmethod
    def translateSubmit(spec: JobArraySpec) -> tuple[list[str], str]:
        """
        Translate a job array into the submission command of the batch system.

        The array is submitted as a single job whose script selects the command
        to run from the commands file using the array index of the element.

        Args:
            spec (JobArraySpec): The job array to submit.

        Returns:
            tuple[list[str], str]: Arguments of the submission command
            and the dispatch script passed to it on standard input.
        """
        raise NotImplementedError(
            "translateSubmit method is not implemented for this batch system implementation"
        )

    @staticmethod
    def jobSubmit(spec: JobArraySpec) -> SubmissionResult:
        """
        Submit a job array to the batch system.

        A single attempt is made; failures are not retried.

        Args:
            spec (JobArraySpec): The job array to submit.

        Returns:
            SubmissionResult: Identifier of the submitted array and the raw output.

        Raises:
            SubmissionFailedError: If the submission command fails or its output
                does not contain a job identifier.
        """
        raise NotImplementedError(
            "jobSubmit method is not implemented for this batch system implementation"
        )

    @staticmethod
    def getArrayStatus(job_id: str) -> JobStatus:
        """
        Query the batch system for the current state of a job array.

        Args:
            job_id (str): Identifier of the job array.

        Returns:
            JobStatus: The state of the array and its elements.

        Raises:
            JobNotFoundError: If the batch system does not know the job.
            ArrayifyError: If the query fails for another reason.
        """
        raise NotImplementedError(
            "getArrayStatus method is not implemented for this batch system implementation"
        )

    @staticmethod
    def _createDispatchScript(spec: JobArraySpec, index_variable: str) -> str:
        """
        Create a script running the command selected by the array index.

        Line `i` of the commands file holds the command of array element `i`.

        Args:
            spec (JobArraySpec): The job array.
            index_variable (str): Environment variable holding the array index.

        Returns:
            str: The bash dispatch script.
        """
        commands_file = shlex.quote(str(spec.commands_file))
        return (
            "#!/bin/bash\n"
            "\n"
            f'COMMAND=$(sed -n "${{{index_variable}}}p" {commands_file})\n'
            'eval "$COMMAND"\n'
        )
