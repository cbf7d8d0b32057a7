from typing import Optional, Set

from towerbalance.exceptions import CycleError, RootError
from towerbalance.node import Node
from towerbalance.parents import ParentIndex, build_parent_index
from towerbalance.registry import NodeRegistry


def find_root(index: ParentIndex, start: Node) -> Node:
    """
    Walk parent links upward from ``start`` until a node without a parent is reached.

    Args:
        index: Child name -> parent node mapping
        start: Any node of the tower

    Returns:
        The root node above ``start``

    Raises:
        CycleError: If the walk comes back to a node it already visited
    """
    seen: Set[str] = {start.name}
    current = start
    while True:
        parent = index.get(current.name)
        if parent is None:
            return current
        if parent.name in seen:
            raise CycleError(parent.name)
        seen.add(parent.name)
        current = parent


def find_tower_root(
    registry: NodeRegistry, index: Optional[ParentIndex] = None
) -> Node:
    """
    Find the root of the tower, starting the walk from the first registered node.

    Raises:
        RootError: If the registry is empty
    """
    if not registry:
        RootError.raise_for_candidates(())
    if index is None:
        index = build_parent_index(registry)
    start = next(iter(registry.values()))
    return find_root(index, start)
