"""
Shared pytest fixtures for forestry tests.

Provides trees, forests and file layouts used across the test modules.
"""
import random

import pytest

from forestry.config_loader import load_settings
from forestry.forest import Forest
from forestry.species import TreeSpecies
from forestry.tree import Tree


# =============================================================================
# Randomness
# =============================================================================

@pytest.fixture
def rng():
    """Seeded generator so random trees are reproducible within a test."""
    return random.Random(20240101)


# =============================================================================
# Tree Fixtures
# =============================================================================

@pytest.fixture
def maple():
    """A 12 ft maple planted in 2010, growing 10% a year."""
    return Tree(TreeSpecies.MAPLE, 2010, 12.0, 10.0)


@pytest.fixture
def birch():
    """A 25 ft birch planted in 2001, growing 15% a year."""
    return Tree(TreeSpecies.BIRCH, 2001, 25.0, 15.0)


@pytest.fixture
def fir():
    """A 30 ft fir planted in 2005, growing 12.5% a year."""
    return Tree(TreeSpecies.FIR, 2005, 30.0, 12.5)


# =============================================================================
# Forest Fixtures
# =============================================================================

@pytest.fixture
def empty_forest(rng):
    """A named forest with no trees."""
    return Forest("Empty", rng=rng)


@pytest.fixture
def small_forest(rng, maple, birch, fir):
    """Three trees with heights 12, 25 and 30 ft."""
    forest = Forest("Montane", rng=rng)
    for tree in (maple, birch, fir):
        forest.add_tree(tree)
    return forest


@pytest.fixture
def reap_forest(rng):
    """Heights [25, 5, 30]: two trees above a threshold of 20."""
    return Forest("Reapable", [
        Tree(TreeSpecies.MAPLE, 2003, 25.0, 11.0),
        Tree(TreeSpecies.BIRCH, 2004, 5.0, 12.0),
        Tree(TreeSpecies.FIR, 2005, 30.0, 13.0),
    ], rng=rng)


# =============================================================================
# Files and Settings
# =============================================================================

@pytest.fixture
def settings(tmp_path):
    """Default settings with data and save directories under tmp_path."""
    settings = load_settings()
    settings.storage.data_dir = tmp_path
    settings.storage.save_dir = tmp_path
    return settings


@pytest.fixture
def montane_csv(tmp_path):
    """A forest CSV file with one tree per species, plus an unknown species."""
    path = tmp_path / "Montane.csv"
    path.write_text(
        "Maple,2012,14.5,12.0\n"
        "Birch,2008,18.25,10.5\n"
        "Fir,2015,11.0,19.0\n"
        "Oak,2010,16.0,11.0\n"
    )
    return path
