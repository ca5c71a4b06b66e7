# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from vh_lib.core.config import CFG

from .interface import BatchInterface
from .meta import BatchMeta, batch_system


@batch_system
class Slurm(BatchInterface, metaclass=BatchMeta):
    """
    Implementation of BatchInterface for Slurm.
    """

    @staticmethod
    def envName() -> str:
        return "Slurm"

    @classmethod
    def submitCommand(cls) -> str:
        return CFG.batch_commands.slurm
