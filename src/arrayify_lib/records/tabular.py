# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import csv
from pathlib import Path

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import InvalidInputError
from arrayify_lib.core.logger import get_logger

from .interface import RecordSet, RecordSource, SkippedRow

logger = get_logger(__name__)


class TabularSource(RecordSource):
    """
    Record source reading a CSV manifest.

    The first row is the header defining the field names, every following
    non-blank row is one job record. Rows whose number of columns does not
    match the header are skipped and reported, unless the source is strict,
    in which case the first such row aborts reading.
    """

    def __init__(self, path: Path, strict: bool | None = None):
        """
        Initialize the source.

        Args:
            path (Path): Path to the CSV file.
            strict (bool | None): Abort on the first malformed row.
                If None, the configured policy is used.
        """
        super().__init__(path)
        self._strict = (
            not CFG.records.skip_malformed_rows if strict is None else strict
        )

    def read(self) -> RecordSet:
        if not self._path.is_file():
            raise InvalidInputError(
                f"CSV file '{self._path}' does not exist or is not a file."
            )

        try:
            # utf-8-sig strips a byte order mark written by spreadsheet software
            with self._path.open(newline="", encoding="utf-8-sig") as f:
                return self._parse(csv.reader(f))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise InvalidInputError(f"Could not read CSV file '{self._path}': {e}") from e

    def _parse(self, reader) -> RecordSet:
        """
        Build a RecordSet from rows produced by a csv reader.

        Raises:
            InvalidInputError: If the header is missing or invalid, a row is malformed
                in strict mode, or no valid row remains.
        """
        header = next(reader, None)
        if header is None or not any(name.strip() for name in header):
            raise InvalidInputError(f"CSV file '{self._path}' has no header row.")

        fields = tuple(name.strip() for name in header)
        self._checkHeader(fields)

        record_set = RecordSet(fields)
        n_rows = 0
        for row in reader:
            # ignore blank lines; a row of empty values is still a record
            if not row:
                continue

            n_rows += 1
            if len(row) != len(fields):
                reason = f"expected {len(fields)} columns, found {len(row)}"
                if self._strict:
                    raise InvalidInputError(
                        f"Malformed row on line {reader.line_num} of '{self._path}': {reason}."
                    )

                logger.warning(
                    f"Skipping malformed row on line {reader.line_num} of '{self._path}': {reason}."
                )
                record_set.skipped.append(SkippedRow(reader.line_num, reason))
                continue

            record_set.records.append(dict(zip(fields, row)))

        if n_rows == 0:
            raise InvalidInputError(f"CSV file '{self._path}' contains no jobs.")

        if not record_set.records:
            raise InvalidInputError(
                f"All {n_rows} rows of CSV file '{self._path}' are malformed."
            )

        if record_set.skipped:
            record_set.warnings.append(
                f"Skipped {len(record_set.skipped)} malformed row(s) of '{self._path}'."
            )

        logger.debug(
            f"Read {len(record_set)} records with fields {fields} from '{self._path}'."
        )
        return record_set

    def _checkHeader(self, fields: tuple[str, ...]) -> None:
        """
        Check that every column has a unique, non-empty name.

        Raises:
            InvalidInputError: If a column name is empty or duplicated.
        """
        if "" in fields:
            raise InvalidInputError(
                f"CSV file '{self._path}' has an empty column name in its header."
            )

        duplicates = sorted({f for f in fields if fields.count(f) > 1})
        if duplicates:
            raise InvalidInputError(
                f"CSV file '{self._path}' has duplicated column name(s): {', '.join(duplicates)}."
            )
