# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from arrayify_lib.batch.interface import BatchInterface
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.array import JobArraySpec
from arrayify_lib.properties.resources import Resources
from arrayify_lib.properties.submission import SubmissionResult
from arrayify_lib.records.interface import RecordSet, RecordSource

from .builder import ArrayBuilder
from .planner import BatchPlanner
from .template import CommandTemplate

logger = get_logger(__name__)


class Submitter:
    """
    Class to submit job arrays to a batch system.

    Responsibilities:
        - Read job records from the record source.
        - Expand the command template for every record.
        - Determine the number of concurrently running jobs.
        - Build the job array and hand it over to the batch system.

    Every validation happens before the batch system is contacted,
    so invalid input never results in a partial submission.
    """

    def __init__(
        self,
        batch_system: type[BatchInterface],
        source: RecordSource,
        template: CommandTemplate,
        resources: Resources,
        log_dir: Path,
        job_prefix: str | None = None,
        batch_size: int | None = None,
        planner: BatchPlanner | None = None,
    ):
        """
        Initialize a Submitter instance.

        Args:
            batch_system (type[BatchInterface]): The batch system to submit to.
            source (RecordSource): Source of the job records.
            template (CommandTemplate): Command template expanded for every record.
            resources (Resources): Resources requested for every job.
            log_dir (Path): Directory for the commands file and scheduler logs.
            job_prefix (str | None): Prefix of the job array name.
            batch_size (int | None): Explicit number of concurrently running jobs.
                If None, the planner decides.
            planner (BatchPlanner | None): Planner computing the number of concurrently
                running jobs. Defaults to a planner using the global configuration.
        """
        self._batch_system = batch_system
        self._source = source
        self._template = template
        self._resources = resources
        self._log_dir = log_dir
        self._job_prefix = job_prefix
        self._batch_size = batch_size
        self._planner = planner or BatchPlanner()

        self._record_set: RecordSet | None = None
        self._spec: JobArraySpec | None = None

    def prepare(self) -> JobArraySpec:
        """
        Read the records, expand the commands, and build the job array.

        Returns:
            JobArraySpec: The job array ready to be submitted.

        Raises:
            InvalidInputError: If the records or the resources are invalid.
            UnknownPlaceholderError: If the template references undefined fields.
            InvalidBatchSizeError: If the explicit batch size is out of range.
        """
        self._record_set = self._source.read()
        commands = self._template.expandAll(self._record_set)
        limit = self._planner.plan(len(commands), self._batch_size)

        self._spec = ArrayBuilder(
            commands, limit, self._resources, self._log_dir, self._job_prefix
        ).build()

        logger.debug(
            f"Prepared job array '{self._spec.name}' with {self._spec.size} jobs "
            f"and batch size {self._spec.limit}."
        )
        return self._spec

    def submit(self) -> SubmissionResult:
        """
        Submit the job array to the batch system.

        Prepares the job array first if `prepare` was not called.

        Returns:
            SubmissionResult: Identifier of the submitted array and the raw output.

        Raises:
            ArrayifyError: If the preparation or the submission fails.
        """
        spec = self._spec or self.prepare()
        return self._batch_system.jobSubmit(spec)

    def getRecordSet(self) -> RecordSet | None:
        """Return the records read by `prepare`, or None if not prepared yet."""
        return self._record_set

    def getSpec(self) -> JobArraySpec | None:
        """Return the job array built by `prepare`, or None if not prepared yet."""
        return self._spec

    def getBatchSystem(self) -> type[BatchInterface]:
        """Return the batch system the array is submitted to."""
        return self._batch_system
