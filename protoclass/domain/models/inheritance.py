"""
Domain models describing detected prototypal inheritance.

This module defines the evidence handed to a class rewrite stage:
    - RelatedExpression: a statement node together with its parent
    - InheritanceMatch: the result of processing one node
    - ClassInheritance: all evidence gathered for one class name
    - ScanMode / ConflictPolicy: knobs of the traversal and detector
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from protoclass.domain.models.ast import SyntaxNode, describe_expression


class ScanMode(str, Enum):
    """
    Traversal strategies for correlating constructor restorations.

    SINGLE_PASS relies on source order: a ``constructor`` restoration is
    only correlated with prototype assignments visited before it.
    TWO_PASS records every prototype assignment first, then resolves
    restorations against the complete table.
    """

    SINGLE_PASS = "single_pass"
    TWO_PASS = "two_pass"


class ConflictPolicy(str, Enum):
    """
    What the detector does when a class gets a different superclass.

    Invariants:
        - Re-assigning a structurally identical superclass is never a conflict
        - OVERWRITE and WARN both keep the last assignment
    """

    OVERWRITE = "overwrite"
    WARN = "warn"
    ERROR = "error"


@dataclass
class RelatedExpression:
    """Statement that constitutes evidence, paired with its parent node."""

    node: SyntaxNode
    parent: Optional[SyntaxNode]


@dataclass
class InheritanceMatch:
    """
    Evidence produced by a single ``process`` call.

    ``super_class`` aliases a node of the analyzed tree: either the one
    taken from the current statement or the one remembered from an earlier
    prototype assignment. It is never copied.

    Invariants:
        - related_expressions holds exactly one entry
    """

    class_name: str
    super_class: SyntaxNode
    related_expressions: List[RelatedExpression] = field(default_factory=list)

    @property
    def super_class_name(self) -> str:
        return describe_expression(self.super_class)


@dataclass
class ClassInheritance:
    """
    Aggregated evidence for one class across a whole traversal.

    Built by folding :class:`InheritanceMatch` values in source order. The
    last superclass seen wins; related expressions are concatenated.
    """

    class_name: str
    super_class: SyntaxNode
    related_expressions: List[RelatedExpression] = field(default_factory=list)

    @property
    def super_class_name(self) -> str:
        return describe_expression(self.super_class)
