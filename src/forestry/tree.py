"""
Tree class representing an individual tree in a forest.
Implements the yearly percentage growth model and the random tree factory.
"""
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import InvalidDataError
from .species import TreeSpecies

__all__ = ['Tree', 'RandomTreeBounds', 'MIN_YEAR', 'MAX_YEAR', 'MIN_HEIGHT',
           'MAX_HEIGHT', 'MIN_GROWTH_RATE', 'MAX_GROWTH_RATE']

# Default ranges for randomly generated trees (lower bound inclusive,
# upper bound exclusive)
MIN_YEAR = 2000
MAX_YEAR = 2024
MIN_HEIGHT = 10.0
MAX_HEIGHT = 20.0
MIN_GROWTH_RATE = 10.0
MAX_GROWTH_RATE = 20.0

# Order of fields in a persisted tree record
RECORD_FIELDS = ('species', 'year_planting', 'height', 'growth_rate')


@dataclass(frozen=True)
class RandomTreeBounds:
    """Half-open ranges used by Tree.make_random_tree().

    Attributes:
        min_year: Earliest planting year (inclusive)
        max_year: Latest planting year (exclusive)
        min_height: Smallest height (inclusive)
        max_height: Largest height (exclusive)
        min_growth_rate: Smallest growth rate in percent (inclusive)
        max_growth_rate: Largest growth rate in percent (exclusive)
    """
    min_year: int = MIN_YEAR
    max_year: int = MAX_YEAR
    min_height: float = MIN_HEIGHT
    max_height: float = MAX_HEIGHT
    min_growth_rate: float = MIN_GROWTH_RATE
    max_growth_rate: float = MAX_GROWTH_RATE

    def __post_init__(self):
        for name in ('min_year', 'max_year'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDataError("random tree bounds",
                                       f"{name} must be an integer, got {value!r}")
        if self.max_year <= self.min_year:
            raise InvalidDataError("random tree bounds",
                                   f"max_year {self.max_year} must exceed min_year {self.min_year}")
        if self.max_height < self.min_height:
            raise InvalidDataError("random tree bounds",
                                   f"max_height {self.max_height} is below min_height {self.min_height}")
        if self.max_growth_rate < self.min_growth_rate:
            raise InvalidDataError("random tree bounds",
                                   f"max_growth_rate {self.max_growth_rate} is below "
                                   f"min_growth_rate {self.min_growth_rate}")


class Tree:
    def __init__(self, species: TreeSpecies = TreeSpecies.UNKNOWN, year_planting: int = 0,
                 height: float = 0.0, growth_rate: float = 0.0):
        """Initialize a tree with its measurements.

        Values are stored as given; negative heights or rates are not rejected.

        Args:
            species: Tree species or species name. Names are looked up with
                TreeSpecies.from_string(); None and unrecognized values are
                stored as TreeSpecies.UNKNOWN.
            year_planting: Year the tree was planted
            height: Current height (feet)
            growth_rate: Percentage of the current height added per growth step
        """
        if not isinstance(species, TreeSpecies):
            species = TreeSpecies.from_string(species if isinstance(species, str) else None)
        self.species = species
        self.year_planting = year_planting
        self.height = height
        self.growth_rate = growth_rate

    def grow(self) -> None:
        """Grow the tree by one year.

        The new height is height + height * growth_rate / 100. There is no
        upper bound, so repeated calls compound indefinitely.
        """
        self.height = self.height + (self.height * self.growth_rate) / 100

    @classmethod
    def make_random_tree(cls, rng: Optional[random.Random] = None,
                         bounds: Optional[RandomTreeBounds] = None) -> 'Tree':
        """Create a tree with random species, planting year, height and growth rate.

        Args:
            rng: Random number generator. Defaults to the module-level
                generator in ``random``.
            bounds: Ranges to draw from. Defaults to RandomTreeBounds().

        Returns:
            Tree whose species is never UNKNOWN and whose year, height and
            growth rate fall inside the half-open bounds.
        """
        rng = rng or random
        bounds = bounds or RandomTreeBounds()

        species = rng.choice(TreeSpecies.concrete())
        year_planting = rng.randrange(bounds.min_year, bounds.max_year)
        height = bounds.min_height + rng.random() * (bounds.max_height - bounds.min_height)
        growth_rate = bounds.min_growth_rate + rng.random() * (
            bounds.max_growth_rate - bounds.min_growth_rate
        )
        return cls(species, year_planting, height, growth_rate)

    def to_record(self) -> Dict[str, Any]:
        """Convert the tree to a plain record in RECORD_FIELDS order."""
        return {
            'species': self.species.value,
            'year_planting': self.year_planting,
            'height': self.height,
            'growth_rate': self.growth_rate,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Tree':
        """Rebuild a tree from a record produced by to_record().

        Raises:
            InvalidDataError: If a field is missing or has the wrong type
        """
        if not isinstance(record, dict):
            raise InvalidDataError("tree record", f"expected a mapping, got {type(record).__name__}")
        missing = [name for name in RECORD_FIELDS if name not in record]
        if missing:
            raise InvalidDataError("tree record", f"missing field(s) {', '.join(missing)}")

        year_planting = record['year_planting']
        height = record['height']
        growth_rate = record['growth_rate']
        if isinstance(year_planting, bool) or not isinstance(year_planting, int):
            raise InvalidDataError("tree record", f"year_planting must be an integer, got {year_planting!r}")
        for name, value in (('height', height), ('growth_rate', growth_rate)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidDataError("tree record", f"{name} must be a number, got {value!r}")

        species = record['species']
        return cls(
            species=TreeSpecies.from_string(species if isinstance(species, str) else None),
            year_planting=year_planting,
            height=float(height),
            growth_rate=float(growth_rate),
        )

    def __eq__(self, other):
        if not isinstance(other, Tree):
            return NotImplemented
        return (self.species, self.year_planting, self.height, self.growth_rate) == (
            other.species, other.year_planting, other.height, other.growth_rate
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Tree(species={self.species.name}, year_planting={self.year_planting}, "
                f"height={self.height!r}, growth_rate={self.growth_rate!r})")

    def __str__(self) -> str:
        return "%-5s %-5d %5.2f' %5.2f%%" % (
            self.species, self.year_planting, self.height, self.growth_rate
        )
