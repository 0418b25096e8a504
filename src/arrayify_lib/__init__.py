# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the arrayify command-line tool.

arrayify turns a CSV manifest or a directory of paired files into a batch of
parameterized shell commands, submits them as a single job array to a batch
scheduler (LSF or Slurm), and reports on the state of submitted arrays.
"""

from .arrayify import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "batch",
    "check",
    "core",
    "properties",
    "records",
    "submit",
]
