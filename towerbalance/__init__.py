"""Tower balance analysis package."""

__all__ = [
    "Node",
    "NodeRegistry",
    "WeightCache",
    "Imbalance",
    "TowerConfig",
    "TowerReport",
    "TowerAnalysis",
    "analyze_tower",
    "parse_tower",
]


def __getattr__(name):
    if name == "Node":
        from .node import Node

        return Node
    if name == "NodeRegistry":
        from .registry import NodeRegistry

        return NodeRegistry
    if name == "WeightCache":
        from .weights import WeightCache

        return WeightCache
    if name == "Imbalance":
        from .imbalance import Imbalance

        return Imbalance
    if name == "parse_tower":
        from .parser import parse_tower

        return parse_tower
    if name in {"TowerConfig", "TowerReport", "TowerAnalysis", "analyze_tower"}:
        from .analysis import (
            TowerConfig,
            TowerReport,
            TowerAnalysis,
            analyze_tower,
        )

        return locals()[name]
    raise AttributeError(name)
