# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias

# One job's parameters, keyed by field name in source order.
JobRecord: TypeAlias = dict[str, str]


@dataclass(frozen=True)
class SkippedRow:
    """A row of a tabular source that was excluded from the job set."""

    # Line number in the source file (1-based).
    line: int
    # Reason for skipping the row.
    reason: str


@dataclass
class RecordSet:
    """
    Job records read from a single source.

    All records share the same field names, stored in `fields` in source order.
    """

    fields: tuple[str, ...]
    records: list[JobRecord] = field(default_factory=list)
    # Rows of a tabular source that were skipped as malformed.
    skipped: list[SkippedRow] = field(default_factory=list)
    # Non-fatal problems found while reading the source.
    warnings: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


class RecordSource(ABC):
    """
    Abstract base class for sources of job records.

    Implementations must raise InvalidInputError when the source is
    unreadable, empty, or malformed.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        """Path to the file or directory the records are read from."""
        return self._path

    @abstractmethod
    def read(self) -> RecordSet:
        """
        Read all job records from the source.

        Returns:
            RecordSet: The records, in a deterministic order.

        Raises:
            InvalidInputError: If the source cannot produce any valid record.
        """
        raise NotImplementedError(
            "read method is not implemented for this record source"
        )
