import logging
from typing import List, Optional

from towerbalance.exceptions import InvalidCorrectionError
from towerbalance.imbalance import Imbalance, find_local_imbalance
from towerbalance.registry import NodeRegistry
from towerbalance.rooting import find_tower_root
from towerbalance.weights import WeightCache

logger = logging.getLogger(__name__)


def trace_imbalance(
    registry: NodeRegistry, root: str, cache: Optional[WeightCache] = None
) -> List[Imbalance]:
    """
    Follow the imbalance from ``root`` down to the node that causes it.

    Starting at the root, the walk moves into the outlier child whenever a
    node's children disagree, and into the only child of a node that holds
    up exactly one program. It stops at a leaf or at a node whose two or
    more children all agree: no single wrong weight can hide below those.
    The last imbalance recorded names the node whose own weight is wrong.

    Args:
        registry: All nodes of the tower
        root: Name of the node to start from
        cache: Weight memo shared across the whole descent

    Returns:
        Imbalances from the top of the tower downward; empty if balanced

    Raises:
        AmbiguousImbalanceError: If some node on the way has no single outlier
        InvalidCorrectionError: If the deepest outlier would need a negative weight
    """
    if cache is None:
        cache = WeightCache()

    path: List[Imbalance] = []
    current = root
    while True:
        imbalance = find_local_imbalance(
            registry, current, cache, allow_negative=True
        )
        if imbalance is not None:
            logger.debug(
                "Children of %r unbalanced: %r weighs %d, siblings weigh %d",
                imbalance.parent,
                imbalance.outlier,
                imbalance.subtree_weight,
                imbalance.majority_weight,
            )
            path.append(imbalance)
            current = imbalance.outlier
            continue

        children = registry.lookup(current).children
        if len(children) != 1:
            break
        # a single child has no siblings to compare against
        current = children[0]

    if path and path[-1].corrected_weight < 0:
        raise InvalidCorrectionError(path[-1].outlier, path[-1].corrected_weight)

    logger.debug("Descent finished after %d step(s), %r", len(path), cache)
    return path


def find_correction(
    registry: NodeRegistry,
    root: Optional[str] = None,
    cache: Optional[WeightCache] = None,
) -> Optional[Imbalance]:
    """
    Find the single node whose weight must change to balance the tower.

    Args:
        registry: All nodes of the tower
        root: Name to start from; the tower root is located when omitted
        cache: Weight memo to reuse

    Returns:
        The deepest Imbalance, or None if every node is already balanced
    """
    if root is None:
        root = find_tower_root(registry).name
    path = trace_imbalance(registry, root, cache)
    return path[-1] if path else None
