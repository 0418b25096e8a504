# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from datetime import datetime
from itertools import count
from pathlib import Path

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import InvalidBatchSizeError, InvalidInputError
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.array import JobArraySpec
from arrayify_lib.properties.resources import Resources

logger = get_logger(__name__)


class ArrayBuilder:
    """
    Assembles expanded commands into a job array ready for submission.

    The builder writes the commands into a commands file inside the log directory.
    Each element of the submitted array then runs the line of this file
    matching its array index.
    """

    def __init__(
        self,
        commands: list[str],
        limit: int,
        resources: Resources,
        log_dir: str | Path,
        job_prefix: str | None = None,
    ):
        """
        Initialize the builder.

        Args:
            commands (list[str]): Expanded commands in array order.
            limit (int): Maximal number of elements running at the same time.
            resources (Resources): Resources requested for every element.
            log_dir (str | Path): Directory for the commands file and the scheduler logs.
            job_prefix (str | None): Prefix of the job array name. Defaults to the configured prefix.
        """
        self._commands = list(commands)
        self._limit = limit
        self._resources = resources
        self._log_dir = Path(log_dir)
        self._job_prefix = job_prefix or CFG.submission.job_prefix

    def getName(self) -> str:
        """Return the name of the job array."""
        return f"{self._job_prefix}{CFG.submission.array_suffix}"

    def build(self) -> JobArraySpec:
        """
        Validate the inputs, write the commands file, and create the job array.

        Returns:
            JobArraySpec: The job array ready to be submitted.

        Raises:
            InvalidInputError: If there are no commands, a command spans multiple lines,
                requested resources are not positive, or the log directory cannot be prepared.
            InvalidBatchSizeError: If the limit is not between 1 and the number of commands.
        """
        self._validate()

        log_dir = self._log_dir.resolve()
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InvalidInputError(
                f"Could not create log directory '{self._log_dir}': {e}"
            ) from e

        commands_file = self._writeCommandsFile(log_dir)

        return JobArraySpec(
            name=self.getName(),
            commands=tuple(self._commands),
            limit=self._limit,
            resources=self._resources,
            log_dir=log_dir,
            commands_file=commands_file,
        )

    def _validate(self) -> None:
        if not self._commands:
            raise InvalidInputError("No commands to submit.")

        for i, command in enumerate(self._commands, start=1):
            # the dispatch script selects commands by line
            if "\n" in command or "\r" in command:
                raise InvalidInputError(
                    f"Command of job {i} spans multiple lines: '{command}'."
                )

        if not 1 <= self._limit <= len(self._commands):
            raise InvalidBatchSizeError(
                f"Batch size must be between 1 and the number of jobs ({len(self._commands)}), not {self._limit}."
            )

        self._resources.validate()

    def _writeCommandsFile(self, log_dir: Path) -> Path:
        """
        Write one command per line into a new timestamped file in the log directory.

        The file is created exclusively. If a file with the same timestamp
        already exists (e.g. from another submission in the same second),
        a numeric suffix is appended, so an existing commands file is never overwritten.

        Returns:
            Path: Absolute path to the commands file.
        """
        timestamp = datetime.now().strftime(CFG.date_formats.commands_file)
        stem = f"{CFG.submission.commands_file_prefix}{timestamp}"
        content = "\n".join(self._commands) + "\n"

        for attempt in count():
            name = stem if attempt == 0 else f"{stem}-{attempt}"
            commands_file = log_dir / f"{name}{CFG.submission.commands_file_suffix}"

            try:
                with commands_file.open("x", encoding="utf-8") as f:
                    f.write(content)
            except FileExistsError:
                logger.debug(f"Commands file '{commands_file}' already exists.")
                continue
            except OSError as e:
                raise InvalidInputError(
                    f"Could not write commands file '{commands_file}': {e}"
                ) from e

            logger.debug(
                f"Wrote {len(self._commands)} commands into '{commands_file}'."
            )
            return commands_file
