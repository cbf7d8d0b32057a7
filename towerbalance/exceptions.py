"""
Custom exceptions for tower parsing and balance analysis.

Every error carries a ``stage`` label so callers can report which part of the
analysis failed (parsing, lookup, validation or imbalance detection).
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Mapping, NoReturn, Optional

if TYPE_CHECKING:
    from towerbalance.node import Node


class TowerError(Exception):
    """Base exception for tower analysis errors."""

    stage = "analysis"


class ParseError(TowerError):
    """Raised when an input line cannot be turned into a node."""

    stage = "parsing"

    def __init__(self, reason: str, line: str = "", line_number: Optional[int] = None):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        location = f"line {line_number}" if line_number is not None else "input"
        super().__init__(f"{location}: {reason} in {line!r}")


class NodeNotFoundError(TowerError):
    """Raised when a referenced node name is not in the registry."""

    stage = "lookup"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"node {name!r} is not defined")


class TowerValidationError(TowerError):
    """Raised when the input does not describe a single well-formed tree."""

    stage = "validation"


class DuplicateNodeError(TowerValidationError):
    """Raised when the same node name is defined more than once."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"node {name!r} is defined more than once")


class DuplicateParentError(TowerValidationError):
    """Raised when a node is listed as a child more than once."""

    def __init__(self, name: str, first: Node, second: Node):
        self.name = name
        self.parents = (first, second)
        if first is second:
            message = f"node {name!r} is listed twice by {first.name!r}"
        else:
            message = f"node {name!r} is held by both {first.name!r} and {second.name!r}"
        super().__init__(message)


class RootError(TowerValidationError):
    """Raised when the tower has no root or more than one root."""

    @staticmethod
    def raise_for_candidates(candidates: Iterable[str]) -> NoReturn:
        """
        Raise a RootError describing why the parentless nodes do not form one root.

        Args:
            candidates: Names of all nodes that have no parent

        Raises:
            RootError: Always
        """
        names = sorted(candidates)
        if not names:
            raise RootError("tower has no root node")
        raise RootError(f"tower has {len(names)} root nodes: {', '.join(names)}")


class CycleError(TowerValidationError):
    """Raised when following parent or child links revisits a node."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"cycle detected at node {name!r}")


class AmbiguousImbalanceError(TowerError):
    """Raised when a node's children cannot be reduced to a single outlier."""

    stage = "imbalance detection"

    def __init__(self, name: str, groups: Mapping[int, FrozenSet[str]]):
        self.name = name
        self.groups: Dict[int, FrozenSet[str]] = dict(groups)
        described = "; ".join(
            f"{weight}: {', '.join(sorted(members))}"
            for weight, members in sorted(self.groups.items())
        )
        super().__init__(
            f"children of {name!r} do not single out one unbalanced child ({described})"
        )


class InvalidCorrectionError(TowerError):
    """Raised when balancing a child would require a negative own weight."""

    stage = "imbalance detection"

    def __init__(self, name: str, corrected_weight: int):
        self.name = name
        self.corrected_weight = corrected_weight
        super().__init__(
            f"node {name!r} would need weight {corrected_weight} to balance its siblings"
        )
