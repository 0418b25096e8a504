# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for checking the state of submitted job arrays.

`Checker` queries the batch system once for the state of a job array and
returns a normalized `JobStatus`. `StatusPresenter` renders the status as a
rich panel summarizing the number of pending, running, finished, and failed
jobs, listing failed jobs together with the likely reason of their failure.
"""

from .checker import Checker
from .presenter import StatusPresenter

__all__ = ["Checker", "StatusPresenter"]
