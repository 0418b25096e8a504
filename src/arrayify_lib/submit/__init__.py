# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for submitting job arrays.

The submission pipeline is split into small components:

`CommandTemplate` validates the `{NAME}` placeholders of a command template
against the fields of the job records and expands it for every record.

`BatchPlanner` computes how many jobs of the array may run concurrently,
either from an explicit request or as a fraction of the array.

`ArrayBuilder` writes the expanded commands into a commands file and
assembles the immutable `JobArraySpec` handed over to the batch system.

`Submitter` runs the whole pipeline and submits the array, while
`SubmitterFactory` builds a `Submitter` from command-line options.
"""

from .builder import ArrayBuilder
from .factory import SubmitterFactory
from .planner import BatchPlanner
from .submitter import Submitter
from .template import CommandTemplate

__all__ = [
    "ArrayBuilder",
    "BatchPlanner",
    "CommandTemplate",
    "Submitter",
    "SubmitterFactory",
]
