# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumerations describing how a vh run behaves.

`Mode` and `Stage` select the calculation being prepared, `Workflow` the way
job directories are produced, `Selection` which source directories are
continued, and `SafetyLevel` how safety verdicts gate submission.
"""

from enum import Enum
from typing import Self

from vh_lib.core.error import VHError


class Mode(Enum):
    """Type of the VASP calculation."""

    RELAX = 1
    STATIC = 2

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding Mode enum variant.

        Args:
            s (str): String representation of the mode (case-insensitive).

        Returns:
            Mode variant.

        Raises:
            VHError if the string corresponds to no Mode.
        """
        try:
            return cls[s.upper()]
        except KeyError:
            raise VHError(f"Could not recognize a mode '{s}'.")


class Stage(Enum):
    """Stage of a relaxation."""

    INITIAL = 1
    FINAL = 2

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding Stage enum variant.

        Raises:
            VHError if the string corresponds to no Stage.
        """
        try:
            return cls[s.upper()]
        except KeyError:
            raise VHError(f"Could not recognize a stage '{s}'.")


class Workflow(Enum):
    """Way the job directories of a run are produced."""

    # charged variants are created from neutral reference directories
    CREATE_CHARGED = 1
    # existing job directories are continued
    CONTINUE = 2

    def __str__(self):
        return self.name.lower().replace("_", "-")


class Selection(Enum):
    """Source directories included when continuing existing jobs."""

    CHARGED = 1
    NEUTRAL = 2
    ALL = 3

    def __str__(self):
        return {
            Selection.CHARGED: "charged-only",
            Selection.NEUTRAL: "neutral-only",
            Selection.ALL: "all",
        }[self]

    def includes(self, charge: int) -> bool:
        """Check whether a directory with the given charge is selected."""
        match self:
            case Selection.CHARGED:
                return charge != 0
            case Selection.NEUTRAL:
                return charge == 0
            case Selection.ALL:
                return True


class SafetyLevel(Enum):
    """Strictness of the submission policy."""

    # ignore all safety checks and submit everything
    IGNORE = 0
    # submit only jobs that passed the safety checks
    SAFE_ONLY = 1
    # submit nothing if any job failed the safety checks
    ALL_OR_NOTHING = 2

    def __str__(self):
        return str(self.value)

    @classmethod
    def fromInt(cls, level: int) -> Self:
        """
        Convert a numeric level (0, 1 or 2) to the corresponding SafetyLevel.

        Raises:
            VHError if the level is not supported.
        """
        try:
            return cls(level)
        except ValueError:
            raise VHError(f"Safety level must be 0, 1 or 2, not '{level}'.")
