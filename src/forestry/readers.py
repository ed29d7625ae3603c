"""
CSV record reader for forests.

Input files have no header; each line describes one tree:

    species,year_planting,height,growth_rate
    Maple,2012,14.5,12.0

Species names are matched case-insensitively against TreeSpecies. Names that
do not match become TreeSpecies.UNKNOWN rather than rejecting the row.
"""
import csv
from pathlib import Path
from typing import List, Sequence, Union

from .exceptions import ForestFileNotFoundError, InvalidDataError
from .forest import Forest
from .logging_config import get_logger
from .species import TreeSpecies
from .tree import Tree

__all__ = ['parse_tree_row', 'read_forest', 'read_trees']

FIELD_COUNT = 4

logger = get_logger(__name__)


def parse_tree_row(row: Sequence[str]) -> Tree:
    """Parse one CSV row into a Tree.

    Args:
        row: Fields species, year_planting, height, growth_rate

    Returns:
        Parsed tree

    Raises:
        InvalidDataError: If the row has the wrong number of fields or a
            numeric field cannot be parsed
    """
    if len(row) != FIELD_COUNT:
        raise InvalidDataError("tree row", f"expected {FIELD_COUNT} fields, got {len(row)}")

    name, year, height, growth_rate = (field.strip() for field in row)
    try:
        return Tree(
            species=TreeSpecies.from_string(name),
            year_planting=int(year),
            height=float(height),
            growth_rate=float(growth_rate),
        )
    except ValueError as e:
        raise InvalidDataError("tree row", str(e)) from e


def read_trees(path: Union[str, Path]) -> List[Tree]:
    """Read every valid tree from a CSV file.

    Blank lines are ignored. Malformed rows are logged and skipped.

    Raises:
        ForestFileNotFoundError: If the file does not exist
        InvalidDataError: If the file is not UTF-8 text
    """
    path = Path(path)
    if not path.exists():
        raise ForestFileNotFoundError(str(path), "forest CSV file")

    trees = []
    try:
        # utf-8-sig drops a leading byte-order mark from the first species
        with open(path, 'r', newline='', encoding='utf-8-sig') as f:
            for line_number, row in enumerate(csv.reader(f), start=1):
                if not row or all(not field.strip() for field in row):
                    continue
                try:
                    trees.append(parse_tree_row(row))
                except InvalidDataError as e:
                    logger.warning(f"{path.name} line {line_number} skipped: {e.reason}")
    except UnicodeDecodeError as e:
        raise InvalidDataError("forest CSV file", f"{path.name} is not UTF-8 text: {e}") from e
    return trees


def read_forest(path: Union[str, Path], forest: Forest) -> int:
    """Add every tree in a CSV file to a forest, in file order.

    Returns:
        Number of trees added

    Raises:
        ForestFileNotFoundError: If the file does not exist
    """
    trees = read_trees(path)
    for tree in trees:
        forest.add_tree(tree)
    logger.info(f"Read {len(trees)} trees into forest {forest.name!r} from {path}")
    return len(trees)
