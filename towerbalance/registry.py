from __future__ import annotations
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator

from towerbalance.exceptions import DuplicateNodeError, NodeNotFoundError
from towerbalance.node import Node


class NodeRegistry(Mapping):
    """
    Read-only mapping from node name to Node.

    Iteration follows the order in which nodes were added, which is the
    order of the input lines.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Iterable[Node] = ()):
        self._nodes: Dict[str, Node] = {}
        for node in nodes:
            if node.name in self._nodes:
                raise DuplicateNodeError(node.name)
            self._nodes[node.name] = node

    @classmethod
    def from_nodes(cls, nodes: Iterable[Node]) -> NodeRegistry:
        return cls(nodes)

    def lookup(self, name: str) -> Node:
        """
        Return the node called ``name``.

        Raises:
            NodeNotFoundError: If no node has that name
        """
        try:
            return self._nodes[name]
        except KeyError:
            raise NodeNotFoundError(name) from None

    def __getitem__(self, name: str) -> Node:
        return self._nodes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"NodeRegistry({len(self._nodes)} nodes)"
