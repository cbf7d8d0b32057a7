import json
from typing import IO, Any, Dict, List, Optional, Tuple

from towerbalance.analysis import TowerReport
from towerbalance.imbalance import Imbalance
from towerbalance.node import Node
from towerbalance.parser import parse_tower
from towerbalance.registry import NodeRegistry
from towerbalance.weights import WeightCache, subtree_weight


class TowerEncoder(json.JSONEncoder):
    def default(self, o: Any):
        if isinstance(o, Node):
            return o.to_dict()

        if isinstance(o, Imbalance):
            return {
                "parent": o.parent,
                "outlier": o.outlier,
                "own_weight": o.own_weight,
                "subtree_weight": o.subtree_weight,
                "majority_weight": o.majority_weight,
                "corrected_weight": o.corrected_weight,
                # JSON object keys must be strings
                "groups": {str(w): sorted(names) for w, names in o.groups.items()},
            }

        if isinstance(o, (set, frozenset)):
            return sorted(o)

        return super().default(o)


def read_tower(path: str) -> NodeRegistry:
    with open(path) as f:
        return parse_tower(f.read())


def tower_to_dict(
    registry: NodeRegistry, root: str, cache: Optional[WeightCache] = None
) -> Dict[str, Any]:
    """
    Build a nested dictionary of the tower below ``root``.

    Uses an explicit stack rather than recursion so deep towers can be
    serialized.
    """
    if cache is None:
        cache = WeightCache()

    root_dict: Dict[str, Any] = {}
    stack: List[Tuple[str, Dict[str, Any]]] = [(root, root_dict)]
    while stack:
        name, target = stack.pop()
        node = registry.lookup(name)
        target.update(
            name=node.name,
            weight=node.weight,
            total_weight=subtree_weight(registry, name, cache),
            children=[],
        )
        for child in node.children:
            child_dict: Dict[str, Any] = {}
            target["children"].append(child_dict)
            stack.append((child, child_dict))
    return root_dict


def report_to_dict(report: TowerReport, registry: NodeRegistry) -> Dict[str, Any]:
    return {
        "root": report.root.name,
        "total_weight": report.total_weight,
        "balanced": report.balanced,
        "correction": report.correction,
        "path": report.path,
        "tower": tower_to_dict(registry, report.root.name),
    }


def dump_json(report: TowerReport, registry: NodeRegistry, f: IO[str]):
    json.dump(report_to_dict(report, registry), f, cls=TowerEncoder, indent=2)


def write_json(report: TowerReport, registry: NodeRegistry, path: str):
    with open(path, mode="w") as f:
        dump_json(report, registry, f)
