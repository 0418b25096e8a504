# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from abc import ABCMeta

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import ArrayifyError
from arrayify_lib.core.logger import get_logger

from .interface import BatchInterface

logger = get_logger(__name__)


class BatchMeta(ABCMeta):
    """
    Metaclass for batch system classes.
    """

    # registry of supported batch systems
    _registry: dict[str, type[BatchInterface]] = {}

    def __str__(cls: type[BatchInterface]):
        """
        Get the string representation of the batch system class.
        """
        return cls.envName()

    @classmethod
    def register(mcs, batch_cls: type[BatchInterface]):
        """
        Register a batch system class in the metaclass registry.

        Args:
            batch_cls: Subclass of BatchInterface to register.
        """
        mcs._registry[batch_cls.envName()] = batch_cls

    @classmethod
    def registered(mcs) -> list[str]:
        """
        Return the names of all registered batch systems in registration order.
        """
        return list(mcs._registry)

    @classmethod
    def fromStr(mcs, name: str) -> type[BatchInterface]:
        """
        Return the batch system class registered with the given name.

        The lookup is case-insensitive.

        Raises:
            ArrayifyError: If no class is registered for the given name.
        """
        for registered_name, batch_cls in mcs._registry.items():
            if registered_name.lower() == name.strip().lower():
                return batch_cls

        raise ArrayifyError(
            f"No batch system registered as '{name}'. Available: {', '.join(mcs.registered())}."
        )

    @classmethod
    def guess(mcs) -> type[BatchInterface]:
        """
        Pick the batch system whose submission tool is installed on this machine.

        LSF is checked before Slurm, so a host providing both `bsub` and `sbatch`
        submits through LSF unless told otherwise.

        Raises:
            ArrayifyError: If neither submission tool is found.
        """
        detected = next((cls for cls in mcs._registry.values() if cls.isAvailable()), None)
        if detected is not None:
            logger.debug(f"Detected batch system: {detected}.")
            return detected

        raise ArrayifyError(
            f"Could not guess a batch system. None of {', '.join(mcs.registered())} "
            f"is available; set '{CFG.env_vars.batch_system}' or use '--batch-system'."
        )

    @classmethod
    def fromEnvVarOrGuess(mcs) -> type[BatchInterface]:
        """Batch system named by the ARRAYIFY_BATCH_SYSTEM variable, detected if the variable is empty."""
        if name := os.environ.get(CFG.env_vars.batch_system, "").strip():
            logger.debug(f"Batch system '{name}' requested by '{CFG.env_vars.batch_system}'.")
            return mcs.fromStr(name)

        return mcs.guess()

    @classmethod
    def obtain(mcs, name: str | None) -> type[BatchInterface]:
        """
        Resolve the batch system used by `arrayify sub` and `arrayify check`.

        An explicit `--batch-system` name takes precedence over the environment.
        """
        return mcs.fromStr(name) if name else mcs.fromEnvVarOrGuess()


def batch_system(cls: type[BatchInterface]) -> type[BatchInterface]:
    """
    Class decorator registering a batch system implementation in BatchMeta.
    """
    BatchMeta.register(cls)
    return cls
