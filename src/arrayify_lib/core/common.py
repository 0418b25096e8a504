# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Small helpers shared by the arrayify presenters.
"""

from functools import lru_cache

import yaml
from rich.console import Console

from .logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """
    Select the YAML dumper used for machine-readable status output.

    The libyaml-backed CDumper is preferred; pure-Python PyYAML builds
    do not provide it.
    """
    dumper = getattr(yaml, "CDumper", yaml.Dumper)
    logger.debug(f"Using YAML dumper '{dumper.__name__}'.")
    return dumper


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Width of a rich panel as a fraction of the console width.

    Args:
        console (Console): Console the panel is printed to.
        factor (int): The console width is divided by this number.
        min_width (int | None): Lower bound of the width, if any.
        max_width (int | None): Upper bound of the width, if any.

    Returns:
        int: The bounded panel width.
    """
    width = console.size.width // factor
    lower = width if min_width is None else max(width, min_width)
    return lower if max_width is None else min(lower, max_width)
