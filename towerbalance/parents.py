import logging
from typing import Dict

from towerbalance.exceptions import DuplicateParentError
from towerbalance.node import Node
from towerbalance.registry import NodeRegistry

logger = logging.getLogger(__name__)

ParentIndex = Dict[str, Node]


def build_parent_index(registry: NodeRegistry, strict: bool = True) -> ParentIndex:
    """
    Invert the children lists of the registry into a child -> parent index.

    Args:
        registry: Nodes to index
        strict: Raise when a name is listed by two parents, or twice by the
            same parent. When False the parent seen last is kept and a
            warning is logged.

    Returns:
        Dictionary mapping every child name to the node that holds it

    Raises:
        DuplicateParentError: In strict mode, if a child has two parents
    """
    index: ParentIndex = {}
    for parent in registry.values():
        for child in parent.children:
            previous = index.get(child)
            if previous is not None:
                if strict:
                    raise DuplicateParentError(child, previous, parent)
                logger.warning(
                    "Node %r held by both %r and %r; keeping %r",
                    child,
                    previous.name,
                    parent.name,
                    parent.name,
                )
            index[child] = parent

    logger.debug("Parent index built with %d entries", len(index))
    return index
