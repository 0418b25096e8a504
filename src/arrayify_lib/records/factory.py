# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from arrayify_lib.core.error import InvalidInputError
from arrayify_lib.core.logger import get_logger

from .directory import DirectorySource
from .interface import RecordSource
from .tabular import TabularSource

logger = get_logger(__name__)


def open_source(
    csv: str | Path | None = None,
    directory: str | Path | None = None,
    strict: bool | None = None,
) -> RecordSource:
    """
    Select the record source for the provided input.

    Exactly one of `csv` and `directory` must be specified.

    Args:
        csv (str | Path | None): Path to a CSV manifest.
        directory (str | Path | None): Path to a directory of paired files.
        strict (bool | None): Abort on the first malformed CSV row.
            If None, the configured policy is used.

    Returns:
        RecordSource: The tabular or directory record source.

    Raises:
        InvalidInputError: If both or neither of the inputs are specified.
    """
    if csv and directory:
        raise InvalidInputError(
            "Specify either a CSV file or a directory as the job source, not both."
        )

    if csv:
        logger.debug(f"Reading job records from CSV file '{csv}'.")
        return TabularSource(Path(csv), strict=strict)

    if directory:
        logger.debug(f"Reading job records from directory '{directory}'.")
        return DirectorySource(Path(directory))

    raise InvalidInputError("No job source specified. Use a CSV file or a directory.")
