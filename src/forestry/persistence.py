"""
Name-keyed storage of whole forests.

A forest is written as one UTF-8 JSON document per file, named
``<name><suffix>`` inside the store directory:

    {
      "name": "Montane",
      "trees": [
        {"species": "MAPLE", "year_planting": 2010, "height": 12.5, "growth_rate": 15.0},
        ...
      ]
    }

Tree records keep the field order of Tree.to_record(). Tree order in the list
is the forest's tree order. Floats are written with their shortest exact
repr, so a save followed by a load restores identical values.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import InvalidDataError, PersistenceError
from .forest import Forest
from .logging_config import get_logger
from .tree import Tree

__all__ = ['ForestStore', 'DEFAULT_SUFFIX', 'forest_to_record', 'forest_from_record']

DEFAULT_SUFFIX = '.db'

logger = get_logger(__name__)


def forest_to_record(forest: Forest) -> Dict[str, Any]:
    """Convert a forest to its persisted record."""
    return {
        'name': forest.name,
        'trees': [tree.to_record() for tree in forest.trees],
    }


def forest_from_record(record: Dict[str, Any], **forest_kwargs) -> Forest:
    """Rebuild a forest from a persisted record.

    Args:
        record: Mapping produced by forest_to_record()
        **forest_kwargs: Extra Forest constructor arguments (rng, bounds,
            reap_policy) that are not part of the stored data

    Raises:
        InvalidDataError: If the record does not follow the layout
    """
    if not isinstance(record, dict):
        raise InvalidDataError("forest record", f"expected a mapping, got {type(record).__name__}")
    if 'name' not in record or 'trees' not in record:
        raise InvalidDataError("forest record", "requires 'name' and 'trees'")

    name = record['name']
    if name is not None and not isinstance(name, str):
        raise InvalidDataError("forest record", f"name must be a string, got {name!r}")
    if not isinstance(record['trees'], list):
        raise InvalidDataError("forest record", "'trees' must be a list")

    trees = [Tree.from_record(tree_record) for tree_record in record['trees']]
    return Forest(name, trees, **forest_kwargs)


class ForestStore:
    """Saves and loads forests as files keyed by forest name.

    Attributes:
        directory: Directory holding the forest files
        suffix: File name suffix appended to the forest name
    """

    def __init__(self, directory: Union[str, Path] = '.', suffix: str = DEFAULT_SUFFIX):
        self.directory = Path(directory)
        self.suffix = suffix

    def path_for(self, name: str) -> Path:
        """Path of the file a forest with this name is stored in."""
        return self.directory / f"{name}{self.suffix}"

    def write_record(self, forest: Forest) -> Path:
        """Write a forest, raising on failure.

        Raises:
            PersistenceError: If the forest has no name or the file cannot be written
        """
        if not forest.name:
            raise PersistenceError(str(forest.name), "an anonymous forest cannot be saved")

        path = self.path_for(forest.name)
        try:
            text = json.dumps(forest_to_record(forest), indent=2) + '\n'
        except (TypeError, ValueError, AttributeError) as e:
            raise PersistenceError(forest.name, f"forest cannot be encoded: {e}") from e

        # Write beside the target and swap it in, so a failed save keeps the old file
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=self.directory,
                                             prefix=f".{forest.name}.", suffix='.tmp',
                                             delete=False) as f:
                tmp_name = f.name
                f.write(text)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise PersistenceError(forest.name, str(e)) from e
        return path

    def read_record(self, name: str, **forest_kwargs) -> Forest:
        """Read a forest, raising on failure.

        Raises:
            PersistenceError: If the file is missing, unreadable or malformed
        """
        path = self.path_for(name)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                record = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(name, f"cannot read {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise PersistenceError(name, f"{path} is not valid JSON: {e}") from e

        try:
            return forest_from_record(record, **forest_kwargs)
        except InvalidDataError as e:
            raise PersistenceError(name, str(e)) from e

    def save(self, forest: Forest) -> bool:
        """Save the whole forest under its name.

        Returns:
            True on success. On failure the error is logged and False is
            returned; the forest itself is never modified.
        """
        try:
            path = self.write_record(forest)
        except PersistenceError as e:
            logger.error(f"Error saving: {e.reason}")
            return False
        logger.info(f"Saved forest {forest.name!r} ({len(forest.trees)} trees) to {path}")
        return True

    def load(self, name: str, **forest_kwargs) -> Optional[Forest]:
        """Load a forest by name.

        Returns:
            A new Forest, or None if the file is missing, unreadable or does
            not follow the record layout.
        """
        try:
            forest = self.read_record(name, **forest_kwargs)
        except PersistenceError as e:
            logger.error(f"Error opening/reading {self.path_for(name)}: {e.reason}")
            return None
        logger.info(f"Loaded forest {forest.name!r} ({len(forest.trees)} trees)")
        return forest
