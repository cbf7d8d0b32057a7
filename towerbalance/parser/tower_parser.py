"""
Parser for tower descriptions.

Each non-blank line describes one node::

    pbga (66)
    fwft (72) -> ktlj, cntj, xhth

The name comes first, the node's own weight follows in parentheses, and an
optional ``->`` introduces the comma separated names the node holds up.
"""

from typing import Iterable, List, Optional, Tuple, Union

from towerbalance.exceptions import ParseError
from towerbalance.node import Node
from towerbalance.registry import NodeRegistry

ARROW = "->"


def split_arrow(line: str) -> Tuple[str, Optional[str]]:
    """
    Split a line into its head (``name (weight)``) and its child list.

    Returns:
        Tuple of (head, children_text) where children_text is None when the
        line has no arrow
    """
    if ARROW not in line:
        return line.strip(), None
    head, children_text = line.split(ARROW, 1)
    return head.strip(), children_text.strip()


def parse_weight(token: str, line: str, line_number: Optional[int]) -> int:
    """Parse a ``(72)`` token into a non-negative integer."""
    if not (token.startswith("(") and token.endswith(")")):
        raise ParseError("weight must be written as '(N)'", line, line_number)
    digits = token[1:-1].strip()
    if not digits:
        raise ParseError("missing weight", line, line_number)
    try:
        weight = int(digits)
    except ValueError:
        raise ParseError(f"weight {digits!r} is not an integer", line, line_number) from None
    if weight < 0:
        raise ParseError(f"weight {weight} is negative", line, line_number)
    return weight


def parse_children(
    children_text: str, line: str, line_number: Optional[int]
) -> Tuple[str, ...]:
    """Split the text after the arrow into child names, keeping their order."""
    if not children_text:
        raise ParseError("'->' is not followed by any child", line, line_number)
    children = tuple(name.strip() for name in children_text.split(","))
    seen = set()
    for name in children:
        if not name:
            raise ParseError("empty child name", line, line_number)
        if " " in name:
            raise ParseError(f"child name {name!r} contains a space", line, line_number)
        if name in seen:
            raise ParseError(f"child {name!r} is listed twice", line, line_number)
        seen.add(name)
    return children


def parse_line(line: str, line_number: Optional[int] = None) -> Node:
    """
    Parse one line of a tower description into a Node.

    Args:
        line: Text of the form ``name (weight)`` or ``name (weight) -> a, b``
        line_number: Position of the line in its source, used in error messages

    Returns:
        The parsed node

    Raises:
        ParseError: If the line is malformed
    """
    head, children_text = split_arrow(line)
    tokens = head.split(None, 1)
    if not tokens or tokens[0].startswith("("):
        raise ParseError("missing node name", line, line_number)
    if len(tokens) == 1:
        raise ParseError("missing weight", line, line_number)

    name, weight_token = tokens[0], tokens[1].strip()
    weight = parse_weight(weight_token, line, line_number)

    children: Tuple[str, ...] = ()
    if children_text is not None:
        children = parse_children(children_text, line, line_number)
    return Node(name=name, weight=weight, children=children)


def parse_lines(lines: Iterable[str]) -> List[Node]:
    """
    Parse every non-blank line, numbering lines from 1 for error reporting.

    The first malformed line aborts parsing; no partial result is returned.
    """
    nodes: List[Node] = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        nodes.append(parse_line(line, line_number))
    return nodes


def parse_tower(source: Union[str, Iterable[str]]) -> NodeRegistry:
    """
    Parse a whole tower description into a NodeRegistry.

    Args:
        source: Either the full text or an iterable of lines

    Raises:
        ParseError: On the first malformed line
        DuplicateNodeError: If a name is defined twice
    """
    lines = source.splitlines() if isinstance(source, str) else source
    return NodeRegistry.from_nodes(parse_lines(lines))
