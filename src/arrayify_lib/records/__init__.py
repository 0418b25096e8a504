# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Sources of job records for arrayify.

A job record is an ordered mapping of field names to values describing one
element of a job array. Records are produced by one of two sources sharing
the `RecordSource` interface:

- `TabularSource` reads a CSV manifest whose header row names the fields.
- `DirectorySource` pairs read files in a directory into `ID`, `R1`, `R2` records.

Both return a `RecordSet`, so the rest of the submission pipeline does not
care where the records came from. `open_source` selects the right variant.
"""

from .directory import DirectorySource
from .factory import open_source
from .interface import JobRecord, RecordSet, RecordSource, SkippedRow
from .tabular import TabularSource

__all__ = [
    "DirectorySource",
    "JobRecord",
    "RecordSet",
    "RecordSource",
    "SkippedRow",
    "TabularSource",
    "open_source",
]
