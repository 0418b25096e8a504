# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from pathlib import Path

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import InvalidInputError
from arrayify_lib.core.logger import get_logger

from .interface import RecordSet, RecordSource

logger = get_logger(__name__)

# `<id>_1<rest>`, `<id>_R1<rest>` (and mate 2), where rest is an optional `_<digits>` chunk
# (as in `_R1_001.fastq.gz`) followed by an optional extension.
# Side files such as `s_1_fastqc.html` therefore carry no marker.
# The greedy id makes the last marker in the name the one that counts.
PAIR_MARKER = re.compile(r"^(?P<id>.+)_R?(?P<mate>[12])(?P<rest>(?:_\d+)?(?:\..*)?)$")


class DirectorySource(RecordSource):
    """
    Record source pairing read files found in a directory.

    Files are grouped by the sample identifier preceding their pair marker
    (`_1`/`_2` or `_R1`/`_R2`). Every complete pair becomes a record with
    the fields `ID`, `R1` and `R2`. Files without a mate are reported
    and left out of the job set.
    """

    def read(self) -> RecordSet:
        if not self._path.is_dir():
            raise InvalidInputError(
                f"Directory '{self._path}' does not exist or is not a directory."
            )

        try:
            files = sorted(
                p for p in self._path.iterdir() if p.is_file() and not p.name.startswith(".")
            )
        except OSError as e:
            raise InvalidInputError(f"Could not read directory '{self._path}': {e}") from e

        groups = self._groupFiles(files)

        id_field = CFG.records.id_field
        r1_field = CFG.records.read1_field
        r2_field = CFG.records.read2_field
        record_set = RecordSet((id_field, r1_field, r2_field))

        for sample_id in sorted(groups):
            mates = groups[sample_id]
            if "1" in mates and "2" in mates:
                record_set.records.append(
                    {
                        id_field: sample_id,
                        r1_field: str(mates["1"]),
                        r2_field: str(mates["2"]),
                    }
                )
                continue

            for unpaired in mates.values():
                message = f"File '{unpaired.name}' has no mate and will not be submitted."
                logger.warning(message)
                record_set.warnings.append(message)

        if not record_set.records:
            raise InvalidInputError(
                f"No pairable files found in directory '{self._path}'."
            )

        logger.debug(f"Found {len(record_set)} file pairs in '{self._path}'.")
        return record_set

    def _groupFiles(self, files: list[Path]) -> dict[str, dict[str, Path]]:
        """
        Group files by sample identifier and mate number.

        Args:
            files (list[Path]): Files to group.

        Returns:
            dict[str, dict[str, Path]]: Mapping of sample identifiers to a mapping
            of mate numbers ('1' or '2') to files.

        Raises:
            InvalidInputError: If two files claim the same mate of one sample.
        """
        groups: dict[str, dict[str, Path]] = {}
        for file in files:
            if not (match := PAIR_MARKER.match(file.name)):
                logger.debug(f"Ignoring file '{file.name}' without a pair marker.")
                continue

            sample_id, mate = match.group("id"), match.group("mate")
            mates = groups.setdefault(sample_id, {})
            if mate in mates:
                raise InvalidInputError(
                    f"Cannot pair files in '{self._path}': both '{mates[mate].name}' and "
                    f"'{file.name}' are read {mate} of sample '{sample_id}'."
                )
            mates[mate] = file

        return groups
