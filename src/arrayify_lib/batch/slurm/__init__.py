# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from .slurm import Slurm

__all__ = ["Slurm"]
