from typing import List, Optional, Set

from towerbalance.exceptions import CycleError, RootError
from towerbalance.node import Node
from towerbalance.parents import ParentIndex, build_parent_index
from towerbalance.registry import NodeRegistry


def validate_tower(
    registry: NodeRegistry,
    index: Optional[ParentIndex] = None,
    strict_parents: bool = True,
) -> Node:
    """
    Check that the registry describes exactly one tree and return its root.

    Checks run in this order:
    1. every child name refers to a defined node
    2. no node is held by two parents
    3. exactly one node has no parent
    4. every node can be reached from that root; with checks 1-3 passed,
       an unreachable node always lies on a cycle

    Args:
        registry: All nodes of the tower
        index: Parent index to reuse; built after the child check when omitted
        strict_parents: Whether the index built here rejects duplicate parents

    Returns:
        The root node

    Raises:
        NodeNotFoundError: For a child name without a definition
        DuplicateParentError: For a node listed by two parents
        RootError: If there is no root or more than one
        CycleError: If some nodes are not reachable from the root
    """
    for node in registry.values():
        for child in node.children:
            registry.lookup(child)

    if index is None:
        index = build_parent_index(registry, strict=strict_parents)

    roots = [name for name in registry if name not in index]
    if len(roots) != 1:
        RootError.raise_for_candidates(roots)
    root = registry.lookup(roots[0])

    reached: Set[str] = set()
    stack: List[str] = [root.name]
    while stack:
        name = stack.pop()
        if name in reached:
            continue
        reached.add(name)
        stack.extend(registry.lookup(name).children)

    if len(reached) != len(registry):
        unreached = next(name for name in registry if name not in reached)
        raise CycleError(unreached)

    return root
