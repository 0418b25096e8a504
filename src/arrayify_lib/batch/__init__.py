# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Batch system backends of arrayify.

Importing this package registers the supported batch systems in `BatchMeta`.
When guessing, LSF is probed first, then Slurm.
"""

from .interface import BatchInterface, BatchMeta
from .lsf import LSF
from .slurm import Slurm

__all__ = ["BatchInterface", "BatchMeta", "LSF", "Slurm"]
