"""
Forestry: a text-menu forest growth simulation

Forests are ordered collections of trees loaded from CSV files. Trees grow by
a fixed percentage each year, tall trees can be reaped and replaced with
random saplings, and whole forests can be saved and loaded by name.

Quick Start:
    >>> from forestry import Forest, Tree, TreeSpecies
    >>> forest = Forest("Montane")
    >>> forest.add_tree(Tree(TreeSpecies.MAPLE, 2010, 12.0, 15.0))
    >>> forest.simulate_yearly_growth()
    >>> forest.print()
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "1.0.0"
__author__ = "Forestry Development Team"

# =============================================================================
# Core Classes - Primary API
# =============================================================================
from .species import TreeSpecies
from .tree import Tree, RandomTreeBounds
from .forest import Forest, ReapEvent, ReapPolicy

# =============================================================================
# Persistence and Input
# =============================================================================
from .persistence import ForestStore
from .readers import read_forest, read_trees, parse_tree_row

# =============================================================================
# Configuration Loading
# =============================================================================
from .config_loader import (
    ConfigLoader,
    ForestrySettings,
    StorageSettings,
    get_config_loader,
    load_settings,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    ForestryError,
    ConfigurationError,
    DataError,
    ForestFileNotFoundError,
    InvalidDataError,
    PersistenceError,
)

# =============================================================================
# Entry Point
# =============================================================================
from .main import main

# =============================================================================
# Public API Definition
# =============================================================================
__all__ = [
    # Package Metadata
    "__version__",
    "__author__",
    # Core Classes
    "TreeSpecies",
    "Tree",
    "RandomTreeBounds",
    "Forest",
    "ReapEvent",
    "ReapPolicy",
    # Persistence and Input
    "ForestStore",
    "read_forest",
    "read_trees",
    "parse_tree_row",
    # Configuration
    "ConfigLoader",
    "ForestrySettings",
    "StorageSettings",
    "get_config_loader",
    "load_settings",
    # Exceptions
    "ForestryError",
    "ConfigurationError",
    "DataError",
    "ForestFileNotFoundError",
    "InvalidDataError",
    "PersistenceError",
    # Entry Point
    "main",
]
