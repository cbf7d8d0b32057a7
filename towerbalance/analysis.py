"""Tower analysis - locate the root and the weight correction in one pass."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from towerbalance.balance import trace_imbalance
from towerbalance.imbalance import Imbalance
from towerbalance.node import Node
from towerbalance.parents import build_parent_index
from towerbalance.parser import parse_tower
from towerbalance.registry import NodeRegistry
from towerbalance.rooting import find_tower_root
from towerbalance.validation import validate_tower
from towerbalance.weights import WeightCache, subtree_weight


@dataclass
class TowerConfig:
    """Configuration for a tower analysis run."""

    validate: bool = True
    strict_parents: bool = True
    logger_name: str = __name__


@dataclass
class TowerReport:
    """Result of analysing one tower."""

    root: Node
    """The node nobody holds up."""

    total_weight: int
    """Subtree weight of the root, i.e. the weight of the whole tower."""

    correction: Optional[Imbalance] = None
    """Deepest imbalance, whose outlier needs ``corrected_weight``; None if balanced."""

    path: List[Imbalance] = field(default_factory=list)
    """Imbalances from the root down to ``correction``."""

    @property
    def balanced(self) -> bool:
        return self.correction is None


class TowerAnalysis:
    """Runs validation, root finding and the imbalance descent over a registry."""

    def __init__(
        self,
        config: Optional[TowerConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or TowerConfig()
        self.logger = logger or logging.getLogger(self.config.logger_name)

    def run(self, registry: NodeRegistry) -> TowerReport:
        self.logger.info("Analysing tower of %d nodes", len(registry))
        if self.config.validate:
            root = validate_tower(registry, strict_parents=self.config.strict_parents)
        else:
            index = build_parent_index(registry, strict=self.config.strict_parents)
            root = find_tower_root(registry, index)
        self.logger.info("Root is %r", root.name)

        cache = WeightCache()
        total = subtree_weight(registry, root.name, cache)
        path = trace_imbalance(registry, root.name, cache)
        correction = path[-1] if path else None

        if correction is None:
            self.logger.info("Tower is balanced (total weight %d)", total)
        else:
            self.logger.info(
                "Node %r must weigh %d instead of %d",
                correction.outlier,
                correction.corrected_weight,
                correction.own_weight,
            )
        self.logger.debug("Weight cache after analysis: %r", cache)
        return TowerReport(root=root, total_weight=total, correction=correction, path=path)


def analyze_tower(
    source: Union[str, Iterable[str], NodeRegistry],
    config: Optional[TowerConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> TowerReport:
    """
    Analyse a tower given as text, lines or an already built registry.

    Args:
        source: Tower description or NodeRegistry
        config: Analysis options
        logger: Optional logger for tracking the run

    Returns:
        TowerReport with the root and the weight correction
    """
    registry = source if isinstance(source, NodeRegistry) else parse_tower(source)
    return TowerAnalysis(config=config, logger=logger).run(registry)
