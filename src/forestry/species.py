"""
Tree species enumeration.

TreeSpecies inherits from (str, Enum) so members can be written to and read
from text records directly. UNKNOWN is the sentinel for any name the
simulation does not recognize; it is never produced by the random factory.

Usage:
    from forestry.species import TreeSpecies

    species = TreeSpecies.from_string("Maple")   # TreeSpecies.MAPLE
    species = TreeSpecies.from_string("Oak")     # TreeSpecies.UNKNOWN
"""

from enum import Enum
from typing import List, Optional


class TreeSpecies(str, Enum):
    """Species a tree in the simulation can belong to."""

    UNKNOWN = "UNKNOWN"
    MAPLE = "MAPLE"
    BIRCH = "BIRCH"
    FIR = "FIR"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, name: Optional[str]) -> "TreeSpecies":
        """Look up a species by name, case-insensitively.

        Args:
            name: Species name as found in input data (e.g. "Birch")

        Returns:
            Matching TreeSpecies, or TreeSpecies.UNKNOWN when the name is
            missing or not recognized.
        """
        if name is None:
            return cls.UNKNOWN
        try:
            return cls(name.strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def concrete(cls) -> List["TreeSpecies"]:
        """All species except the UNKNOWN sentinel, in declaration order."""
        return [species for species in cls if species is not cls.UNKNOWN]
