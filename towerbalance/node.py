from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Node:
    """
    One program in the tower: its own weight and the names it directly holds up.

    Children are stored by name; the registry resolves them to nodes.
    """

    name: str
    weight: int
    children: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence of names but always store a tuple
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __repr__(self):
        return f"Node('{self.name}')"

    def to_line(self) -> str:
        """Render the node back into the ``name (weight) -> a, b`` input syntax."""
        line = f"{self.name} ({self.weight})"
        if self.children:
            line += " -> " + ", ".join(self.children)
        return line

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["children"] = list(self.children)
        return d
