import logging

import pytest

from towerbalance.exceptions import CycleError, DuplicateParentError, RootError
from towerbalance.node import Node
from towerbalance.parents import build_parent_index
from towerbalance.parser import parse_tower
from towerbalance.registry import NodeRegistry
from towerbalance.rooting import find_root, find_tower_root


def test_parents_map(example_registry):
    index = build_parent_index(example_registry)

    assert index["ktlj"].name == "fwft"
    assert index["padx"].name == "tknk"
    assert "tknk" not in index
    assert len(index) == 12


def test_duplicate_parent_raises_in_strict_mode():
    registry = parse_tower("r (1) -> a, b\na (1) -> c\nb (1) -> c\nc (1)")

    with pytest.raises(DuplicateParentError) as excinfo:
        build_parent_index(registry)

    assert excinfo.value.name == "c"
    assert [p.name for p in excinfo.value.parents] == ["a", "b"]


def test_duplicate_parent_last_write_wins_when_lenient(caplog):
    registry = parse_tower("r (1) -> a, b\na (1) -> c\nb (1) -> c\nc (1)")

    with caplog.at_level(logging.WARNING, logger="towerbalance.parents"):
        index = build_parent_index(registry, strict=False)

    assert index["c"].name == "b"
    assert "held by both" in caplog.text


def test_find_root(example_registry):
    assert find_tower_root(example_registry).name == "tknk"


def test_root_reachable_from_every_node(example_registry):
    index = build_parent_index(example_registry)

    roots = {find_root(index, node).name for node in example_registry.values()}

    assert roots == {"tknk"}
    missing_from_index = [name for name in example_registry if name not in index]
    assert missing_from_index == ["tknk"]


def test_find_root_single_node():
    registry = parse_tower("solo (7)")

    assert find_tower_root(registry).name == "solo"


def test_find_root_detects_cycle():
    registry = parse_tower("a (1) -> b\nb (1) -> c\nc (1) -> a")

    with pytest.raises(CycleError):
        find_tower_root(registry)


def test_find_root_empty_registry():
    with pytest.raises(RootError, match="no root"):
        find_tower_root(NodeRegistry())


def test_child_listed_twice_by_same_parent_raises():
    registry = NodeRegistry.from_nodes([Node("p", 1, ("a", "a")), Node("a", 2)])

    with pytest.raises(DuplicateParentError, match="listed twice by 'p'") as excinfo:
        build_parent_index(registry)

    assert excinfo.value.name == "a"
