"""
Tests for reading forests from CSV files.
"""
import logging

import pytest

from forestry.exceptions import ForestFileNotFoundError, InvalidDataError
from forestry.forest import Forest
from forestry.readers import parse_tree_row, read_forest, read_trees
from forestry.species import TreeSpecies
from forestry.tree import Tree


SPECIES_NAMES = [
    pytest.param("Maple", TreeSpecies.MAPLE, id="maple"),
    pytest.param("Birch", TreeSpecies.BIRCH, id="birch"),
    pytest.param("Fir", TreeSpecies.FIR, id="fir"),
    pytest.param("fir", TreeSpecies.FIR, id="lower_case"),
    pytest.param(" Maple ", TreeSpecies.MAPLE, id="padded"),
    pytest.param("Oak", TreeSpecies.UNKNOWN, id="unrecognized"),
    pytest.param("", TreeSpecies.UNKNOWN, id="empty"),
]


@pytest.mark.parametrize("name,expected", SPECIES_NAMES)
def test_parse_species(name, expected):
    tree = parse_tree_row([name, "2010", "12.5", "11.0"])
    assert tree.species is expected


def test_parse_row_fields():
    tree = parse_tree_row(["Birch", "2008", "18.25", "10.5"])
    assert tree == Tree(TreeSpecies.BIRCH, 2008, 18.25, 10.5)


@pytest.mark.parametrize("row", [
    pytest.param(["Maple", "2010", "12.5"], id="too_few_fields"),
    pytest.param(["Maple", "2010", "12.5", "11", "extra"], id="too_many_fields"),
    pytest.param(["Maple", "twenty", "12.5", "11"], id="bad_year"),
    pytest.param(["Maple", "2010.5", "12.5", "11"], id="fractional_year"),
    pytest.param(["Maple", "2010", "tall", "11"], id="bad_height"),
])
def test_parse_malformed_row(row):
    with pytest.raises(InvalidDataError):
        parse_tree_row(row)


def test_read_forest_in_file_order(montane_csv):
    forest = Forest("Montane")
    count = read_forest(montane_csv, forest)

    assert count == 4
    assert [tree.species for tree in forest] == [
        TreeSpecies.MAPLE, TreeSpecies.BIRCH, TreeSpecies.FIR, TreeSpecies.UNKNOWN
    ]
    assert forest.trees[1] == Tree(TreeSpecies.BIRCH, 2008, 18.25, 10.5)


def test_read_forest_appends_to_existing(montane_csv, maple):
    forest = Forest("Montane", [maple])
    read_forest(montane_csv, forest)
    assert forest.trees[0] is maple
    assert len(forest) == 5


def test_read_skips_blank_and_malformed_lines(tmp_path, caplog):
    path = tmp_path / "Messy.csv"
    path.write_text("Maple,2012,14.5,12.0\n\nBirch,abc,1,1\nFir,2015,11.0,19.0\n")

    with caplog.at_level(logging.WARNING, logger="forestry"):
        trees = read_trees(path)

    assert [tree.species for tree in trees] == [TreeSpecies.MAPLE, TreeSpecies.FIR]
    assert "line 3" in caplog.text


def test_read_missing_file(tmp_path):
    with pytest.raises(ForestFileNotFoundError):
        read_trees(tmp_path / "Nowhere.csv")


def test_read_empty_file(tmp_path):
    path = tmp_path / "Empty.csv"
    path.write_text("")
    forest = Forest("Empty")
    assert read_forest(path, forest) == 0
    assert len(forest) == 0


def test_read_strips_byte_order_mark(tmp_path):
    """Files saved by spreadsheet tools often start with a UTF-8 BOM."""
    path = tmp_path / "Excel.csv"
    path.write_bytes(b"\xef\xbb\xbfMaple,2012,14.5,12.0\nFir,2015,11.0,19.0\n")

    trees = read_trees(path)

    assert [tree.species for tree in trees] == [TreeSpecies.MAPLE, TreeSpecies.FIR]


def test_read_non_utf8_file(tmp_path):
    path = tmp_path / "Latin.csv"
    path.write_bytes("\xc9rable,2010,11.0,10.0\n".encode("latin-1"))

    with pytest.raises(InvalidDataError, match="Latin.csv"):
        read_trees(path)
    with pytest.raises(InvalidDataError):
        read_forest(path, Forest("Latin"))
