"""
Tower description parser.

This module turns ``name (weight) -> child, child`` lines into Node objects
and NodeRegistry instances.
"""

from .tower_parser import (
    parse_tower,
    parse_lines,
    parse_line,
    parse_weight,
    parse_children,
    split_arrow,
)

__all__ = [
    "parse_tower",
    "parse_lines",
    "parse_line",
    "parse_weight",
    "parse_children",
    "split_arrow",
]
