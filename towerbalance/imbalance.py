from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

import numpy as np

from towerbalance.exceptions import AmbiguousImbalanceError, InvalidCorrectionError
from towerbalance.registry import NodeRegistry
from towerbalance.weights import WeightCache, subtree_weight


@dataclass(frozen=True)
class Imbalance:
    """One child whose subtree weight disagrees with all of its siblings."""

    parent: str
    """Node whose children are unbalanced."""

    outlier: str
    """The single child whose subtree weight differs from the others."""

    own_weight: int
    """Current own weight of the outlier."""

    subtree_weight: int
    """Current subtree weight of the outlier."""

    majority_weight: int
    """Subtree weight shared by the other children."""

    corrected_weight: int
    """Own weight the outlier needs for its subtree to match the majority."""

    groups: Dict[int, FrozenSet[str]] = field(default_factory=dict, compare=False)
    """Child names grouped by subtree weight."""

    @property
    def delta(self) -> int:
        return self.majority_weight - self.subtree_weight


def group_children_by_weight(
    registry: NodeRegistry, name: str, cache: Optional[WeightCache] = None
) -> Dict[int, FrozenSet[str]]:
    """
    Group the direct children of ``name`` by their subtree weight.

    Returns:
        Mapping from subtree weight to the names of the children carrying it
    """
    if cache is None:
        cache = WeightCache()
    node = registry.lookup(name)
    if not node.children:
        return {}

    # object dtype keeps Python ints exact; weights may exceed the int64 range
    weights = np.array(
        [subtree_weight(registry, child, cache) for child in node.children],
        dtype=object,
    )
    values, inverse = np.unique(weights, return_inverse=True)
    inverse = inverse.reshape(-1)
    return {
        int(value): frozenset(
            node.children[i] for i in np.flatnonzero(inverse == position)
        )
        for position, value in enumerate(values)
    }


def find_local_imbalance(
    registry: NodeRegistry,
    name: str,
    cache: Optional[WeightCache] = None,
    allow_negative: bool = False,
) -> Optional[Imbalance]:
    """
    Check whether the children of ``name`` balance, and if not, which one is off.

    A weight shared by two or more children is the majority; a weight carried
    by exactly one child marks that child as the outlier.

    Args:
        registry: All nodes of the tower
        name: Node whose direct children are compared
        cache: Weight memo shared with other queries of the same pass
        allow_negative: Report a negative corrected weight instead of raising;
            used while descending, where the fault may lie further down

    Returns:
        None if the children all weigh the same (or there are fewer than two),
        otherwise the Imbalance describing the outlier and its corrected weight

    Raises:
        NodeNotFoundError: If ``name`` or one of its descendants is unknown
        AmbiguousImbalanceError: If the groups do not single out exactly one child
        InvalidCorrectionError: If the outlier would need a negative own weight
    """
    if cache is None:
        cache = WeightCache()

    groups = group_children_by_weight(registry, name, cache)
    if len(groups) <= 1:
        return None

    majority = [weight for weight, members in groups.items() if len(members) >= 2]
    minority = [weight for weight, members in groups.items() if len(members) == 1]
    if len(majority) != 1 or len(minority) != 1:
        raise AmbiguousImbalanceError(name, groups)

    majority_weight = majority[0]
    outlier_weight = minority[0]
    (outlier_name,) = groups[outlier_weight]
    outlier = registry.lookup(outlier_name)

    corrected = outlier.weight + (majority_weight - outlier_weight)
    if corrected < 0 and not allow_negative:
        raise InvalidCorrectionError(outlier_name, corrected)

    return Imbalance(
        parent=name,
        outlier=outlier_name,
        own_weight=outlier.weight,
        subtree_weight=outlier_weight,
        majority_weight=majority_weight,
        corrected_weight=corrected,
        groups=groups,
    )
