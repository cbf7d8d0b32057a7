import pytest

from towerbalance.exceptions import NodeNotFoundError
from towerbalance.node import Node
from towerbalance.registry import NodeRegistry


def test_lookup_returns_node(example_registry):
    node = example_registry.lookup("ugml")

    assert node.weight == 68
    assert node.children == ("gyxo", "ebii", "jptl")


def test_lookup_missing_name_raises(example_registry):
    with pytest.raises(NodeNotFoundError) as excinfo:
        example_registry.lookup("nope")

    assert excinfo.value.name == "nope"
    assert excinfo.value.stage == "lookup"


def test_registry_is_a_read_only_mapping():
    registry = NodeRegistry.from_nodes([Node("a", 1, ("b",)), Node("b", 2)])

    assert "a" in registry
    assert "c" not in registry
    assert registry["b"].weight == 2
    assert list(registry) == ["a", "b"]
    with pytest.raises(KeyError):
        registry["c"]
    with pytest.raises(TypeError):
        registry["c"] = Node("c", 3)


def test_node_children_are_stored_as_tuple():
    node = Node("a", 1, ["b", "c"])

    assert node.children == ("b", "c")
    assert node.to_dict() == {"name": "a", "weight": 1, "children": ["b", "c"]}
