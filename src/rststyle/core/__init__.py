"""Core data model shared by every rule.

Positions, ranges, the offset index and the problem/edit records live here.
"""

from .positions import PositionIndex
from .problems import EditBuilder, EditKind, Problem, TextEdit
from .ranges import Position, Range, TextRange

__all__ = [
    "EditBuilder",
    "EditKind",
    "Position",
    "PositionIndex",
    "Problem",
    "Range",
    "TextEdit",
    "TextRange",
]
