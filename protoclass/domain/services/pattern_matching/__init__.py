"""
Structural pattern matching package.
Typed tree-pattern templates and the helpers used to declare them.
"""

from protoclass.domain.services.pattern_matching.matcher import (
    Bindings,
    Matcher,
    extract,
    match,
    matches_ast,
    matches_length,
    node,
)
from protoclass.domain.services.pattern_matching.templates import (
    Capture,
    ExactSequence,
    LiteralPattern,
    NodePattern,
    Template,
)

__all__ = [
    "Bindings",
    "Matcher",
    "Template",
    "NodePattern",
    "LiteralPattern",
    "Capture",
    "ExactSequence",
    "node",
    "extract",
    "matches_length",
    "matches_ast",
    "match",
]
