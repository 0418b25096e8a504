# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from arrayify_lib.batch.interface import BatchInterface, BatchMeta
from arrayify_lib.core.config import CFG
from arrayify_lib.properties.resources import Resources
from arrayify_lib.records.factory import open_source

from .submitter import Submitter
from .template import CommandTemplate


class SubmitterFactory:
    """
    Factory class to construct a Submitter instance from command-line options.
    """

    def __init__(self, **kwargs):
        """
        Initialize the factory with the options specified on the command line.

        Args:
            **kwargs: Keyword arguments from the command line.
        """
        self._kwargs = kwargs

    def makeSubmitter(self) -> Submitter:
        """
        Construct and return a Submitter instance.

        Returns:
            Submitter: A fully initialized submitter ready to submit a job array.

        Raises:
            ArrayifyError: If the options are inconsistent or no batch system is available.
        """
        return Submitter(
            self._getBatchSystem(),
            open_source(
                csv=self._kwargs.get("csv"),
                directory=self._kwargs.get("dir"),
                strict=self._kwargs.get("strict") or None,
            ),
            CommandTemplate(self._kwargs.get("command") or ""),
            self._getResources(),
            Path(self._kwargs.get("log") or CFG.submission.log_dir),
            self._kwargs.get("job_prefix"),
            self._kwargs.get("batch"),
        )

    def _getBatchSystem(self) -> type[BatchInterface]:
        """
        Determine which batch system to submit the job array to.

        Priority:
            1. Command-line option
            2. Environment variable
            3. Guessed batch system

        Returns:
            type[BatchInterface]: The selected batch system class.
        """
        return BatchMeta.obtain(self._kwargs.get("batch_system"))

    def _getResources(self) -> Resources:
        """
        Collect the resources requested on the command line.

        Returns:
            Resources: Resources requested for every job of the array.
        """
        threads = self._kwargs.get("threads")
        return Resources(
            threads=CFG.submission.threads if threads is None else threads,
            memory=self._kwargs.get("memory"),
            queue=self._kwargs.get("queue"),
        )
