# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from abc import ABCMeta

from vh_lib.core.config import CFG
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger

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
    def fromStr(mcs, name: str) -> type[BatchInterface]:
        """
        Return the batch system class registered with the given name.

        Raises:
            VHError: If no class is registered for the given name.
        """
        try:
            return mcs._registry[name]
        except KeyError as e:
            raise VHError(f"No batch system registered as '{name}'.") from e

    @classmethod
    def guess(mcs) -> type[BatchInterface]:
        """
        Select the first registered batch system whose submit command is available.

        Raises:
            VHError: If no available batch system is found among the registered ones.
        """
        for BatchSystem in mcs._registry.values():
            if BatchSystem.isAvailable():
                logger.debug(f"Guessed batch system: {str(BatchSystem)}.")
                return BatchSystem

        raise VHError(
            "Could not guess a batch system. No registered batch system available."
        )

    @classmethod
    def fromEnvVarOrGuess(mcs) -> type[BatchInterface]:
        """
        Select a batch system based on the environment variable or by guessing.

        Raises:
            VHError: If the environment variable names an unknown batch system,
                or if no available batch system can be guessed.
        """
        if name := os.environ.get(CFG.env_vars.batch_system):
            logger.debug(
                f"Using batch system name from an environment variable: {name}."
            )
            return mcs.fromStr(name)

        return mcs.guess()

    @classmethod
    def obtain(mcs, name: str | None) -> type[BatchInterface]:
        """
        Obtain a batch system class by name, environment variable, or guessing.

        Args:
            name (str | None): Optional name of the batch system to obtain.

        Raises:
            VHError: If the batch system cannot be determined.
        """
        if name:
            return mcs.fromStr(name)

        return mcs.fromEnvVarOrGuess()


def batch_system(cls: type[BatchInterface]) -> type[BatchInterface]:
    """Class decorator registering a batch system in `BatchMeta`."""
    BatchMeta.register(cls)
    return cls
