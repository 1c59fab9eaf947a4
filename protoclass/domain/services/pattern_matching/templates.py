"""
Tree-pattern template variants.

A template is one of a closed set of shapes:
    - NodePattern: expected node kind plus templates for some of its fields
    - LiteralPattern: a plain value that must compare equal
    - Capture: a named slot bound to whatever sits at that position
    - ExactSequence: a list of templates matched against a list of the same length

Each variant matches a candidate value and records captures into a shared
bindings dict. A ``False`` result means the whole match is abandoned, so
bindings recorded along the way are discarded by the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from protoclass.domain.models.ast import SyntaxNode


class Template(ABC):
    """Abstract base for pattern template variants."""

    @abstractmethod
    def match(self, value: Any, bindings: Dict[str, Any]) -> bool:
        """
        Check ``value`` against this template, recording captures.
        """


@dataclass(frozen=True)
class LiteralPattern(Template):
    """Matches a value equal to ``expected`` and of the same type."""

    expected: Any

    def match(self, value: Any, bindings: Dict[str, Any]) -> bool:
        return type(value) is type(self.expected) and value == self.expected


@dataclass(frozen=True)
class Capture(Template):
    """
    Binds ``name`` to the value at this position.

    When the name is already bound by an earlier occurrence in the same
    pattern, the value must equal the bound one instead.
    """

    name: str

    def match(self, value: Any, bindings: Dict[str, Any]) -> bool:
        if self.name in bindings:
            return _same_binding(bindings[self.name], value)
        bindings[self.name] = value
        return True


@dataclass(frozen=True)
class NodePattern(Template):
    """Matches a node of ``kind`` whose listed fields match their templates."""

    kind: str
    fields: Tuple[Tuple[str, Template], ...] = ()

    def match(self, value: Any, bindings: Dict[str, Any]) -> bool:
        if not isinstance(value, SyntaxNode) or value.kind != self.kind:
            return False
        for name, template in self.fields:
            if name not in value:
                return False
            if not template.match(value[name], bindings):
                return False
        return True


@dataclass(frozen=True)
class ExactSequence(Template):
    """Matches a list with exactly ``len(items)`` elements, position by position."""

    items: Tuple[Template, ...] = ()

    def match(self, value: Any, bindings: Dict[str, Any]) -> bool:
        if not isinstance(value, (list, tuple)) or len(value) != len(self.items):
            return False
        return all(
            template.match(item, bindings) for template, item in zip(self.items, value)
        )


def _same_binding(bound: Any, value: Any) -> bool:
    if isinstance(bound, SyntaxNode):
        return bound.same_shape(value)
    return type(bound) is type(value) and bound == value
