"""
Subtree weight evaluation.

The total weight of a node is its own weight plus the total weight of every
node it holds up. Results are memoized in a :class:`WeightCache` that the
caller owns and passes in, so one cache can serve every query of an analysis
pass without leaking between passes.
"""

import logging
from typing import Dict, Iterator, List, Optional, Set, Tuple

from towerbalance.exceptions import CycleError
from towerbalance.registry import NodeRegistry

logger = logging.getLogger(__name__)


class WeightCache:
    """Memoized subtree weights keyed by node name, with hit/miss counters."""

    __slots__ = ("_weights", "hits", "misses")

    def __init__(self):
        self._weights: Dict[str, int] = {}
        self.hits = 0
        self.misses = 0

    def lookup(self, name: str) -> Optional[int]:
        """Return the cached weight for ``name`` (counted as a hit or a miss)."""
        weight = self._weights.get(name)
        if weight is None:
            self.misses += 1
        else:
            self.hits += 1
        return weight

    def store(self, name: str, weight: int) -> None:
        self._weights[name] = weight

    def __contains__(self, name: object) -> bool:
        return name in self._weights

    def __getitem__(self, name: str) -> int:
        return self._weights[name]

    def __len__(self) -> int:
        return len(self._weights)

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)

    def __repr__(self) -> str:
        return (
            f"WeightCache({len(self._weights)} entries, "
            f"hits={self.hits}, misses={self.misses})"
        )


def subtree_weight(
    registry: NodeRegistry, name: str, cache: Optional[WeightCache] = None
) -> int:
    """
    Compute the total weight of the subtree rooted at ``name``.

    Uses an explicit post-order stack instead of recursion so that very deep
    towers do not run into the recursion limit.

    Args:
        registry: All nodes of the tower
        name: Node whose subtree weight is wanted
        cache: Memo shared across queries; a fresh one is used when omitted

    Returns:
        Own weight of ``name`` plus the weights of all its descendants

    Raises:
        NodeNotFoundError: If ``name`` or any descendant is not in the registry
        CycleError: If a node turns out to be its own descendant
    """
    if cache is None:
        cache = WeightCache()

    cached = cache.lookup(name)
    if cached is not None:
        return cached

    # (name, children_done) pairs; children_done marks the second visit
    stack: List[Tuple[str, bool]] = [(name, False)]
    in_progress: Set[str] = set()

    while stack:
        current, children_done = stack.pop()
        node = registry.lookup(current)

        if children_done:
            total = node.weight + sum(cache[child] for child in node.children)
            cache.store(current, total)
            in_progress.discard(current)
            continue

        if current in cache:
            continue
        if current in in_progress:
            raise CycleError(current)
        in_progress.add(current)

        stack.append((current, True))
        for child in reversed(node.children):
            if child in in_progress:
                raise CycleError(child)
            if child not in cache:
                stack.append((child, False))

    logger.debug("Subtree weight of %r is %d (%r)", name, cache[name], cache)
    return cache[name]
