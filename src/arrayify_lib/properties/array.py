# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from pathlib import Path

from .resources import Resources


@dataclass(frozen=True)
class JobArraySpec:
    """
    Fully resolved job array ready to be handed to a batch system.

    Element `i` of the array (1-based, as used by batch systems)
    runs `commands[i - 1]`, which is also line `i` of `commands_file`.
    """

    # Name of the job array.
    name: str
    # Expanded commands in array order.
    commands: tuple[str, ...]
    # Maximal number of elements running at the same time.
    limit: int
    # Resources requested for every element.
    resources: Resources
    # Directory for the scheduler logs of the elements.
    log_dir: Path
    # Absolute path to the file listing one command per line.
    commands_file: Path

    @property
    def size(self) -> int:
        """Number of elements in the array."""
        return len(self.commands)

    def getCommand(self, index: int) -> str:
        """
        Return the command run by the array element with the given 1-based index.

        Raises:
            IndexError: If the index is out of range.
        """
        if not 1 <= index <= self.size:
            raise IndexError(
                f"Array index {index} is out of range for an array of size {self.size}."
            )
        return self.commands[index - 1]
