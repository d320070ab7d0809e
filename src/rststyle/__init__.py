"""Style linter for reStructuredText documentation.

Five independent rules scan the raw text and report problems with
deterministic fixes::

    from rststyle import check_all

    for problem in check_all(text):
        print(problem.range.start, problem.rule_id, problem.message)
"""

from .core import Position, PositionIndex, Problem, Range, TextEdit
from .linter import check_all, check_in_range, fixable_in_range
from .rules import ALL_RULES, RuleRegistry, RuleToggles

__version__ = "0.1.0"

__all__ = [
    "ALL_RULES",
    "Position",
    "PositionIndex",
    "Problem",
    "Range",
    "RuleRegistry",
    "RuleToggles",
    "TextEdit",
    "__version__",
    "check_all",
    "check_in_range",
    "fixable_in_range",
]
