# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Iterable
from enum import Enum
from typing import Self

from arrayify_lib.core.config import CFG
from arrayify_lib.core.logger import get_logger

logger = get_logger(__name__)


class JobState(Enum):
    """
    Normalized state of a job array element (or of a whole array).
    """

    PENDING = 1
    RUNNING = 2
    DONE = 3
    FAILED = 4
    UNKNOWN = 5

    def __str__(self) -> str:
        """
        Return the lowercase string representation of the enum variant.

        Returns:
            str: The name of the state in lowercase.
        """
        return self.name.lower()

    @classmethod
    def aggregate(cls, states: Iterable[Self]) -> Self:
        """
        Combine the states of individual array elements into one state of the array.

        Any running element makes the array running. Otherwise any pending
        element makes it pending, and otherwise any failed element makes it failed.
        The array is done only if every element is done.

        Args:
            states (Iterable[JobState]): States of the array elements.

        Returns:
            JobState: The aggregated state. UNKNOWN if there are no states
            or if some element is in an unknown state and nothing else applies.
        """
        states = list(states)
        logger.debug(f"Aggregating {len(states)} element states.")

        if not states:
            return cls.UNKNOWN

        for candidate in (cls.RUNNING, cls.PENDING, cls.FAILED):
            if candidate in states:
                return candidate

        if all(state == cls.DONE for state in states):
            return cls.DONE

        return cls.UNKNOWN

    @property
    def color(self) -> str:
        """
        Return the display color associated with this JobState.

        Returns:
            str: A string representing the color for presentation purposes.
        """
        return getattr(CFG.state_colors, self.name.lower())


def exit_reason(exit_code: int | None) -> str:
    """
    Return a human-readable explanation of the exit code of a failed element.

    Args:
        exit_code (int | None): Exit code reported by the batch system.

    Returns:
        str: The explanation, or the generic unknown-error text.
    """
    if exit_code is None:
        return CFG.exit_reasons.unknown

    reasons = CFG.exit_reasons.reasons
    # keys loaded from a TOML config file are strings
    return (
        reasons.get(exit_code)
        or reasons.get(str(exit_code))  # ty: ignore[invalid-argument-type]
        or CFG.exit_reasons.unknown
    )
