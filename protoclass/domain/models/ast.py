"""
Syntax tree model for analyzed JavaScript sources.

Nodes follow the ESTree vocabulary: every node carries a ``kind`` tag
(``ExpressionStatement``, ``MemberExpression``, ``Identifier`` ...) and a
mapping of kind-specific fields. A field holds a child node, a list of child
nodes, or a plain value such as an identifier's name.

Nodes compare by identity. Two separately parsed ``Animal`` identifiers are
different nodes; use :meth:`SyntaxNode.same_shape` for structural
comparison.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional


@dataclass(eq=False)
class SyntaxNode:
    """
    Single node of an ESTree-shaped syntax tree.

    Example:
        >>> dog = SyntaxNode("Identifier", {"name": "Dog"})
        >>> dog.kind, dog["name"]
        ('Identifier', 'Dog')
    """

    kind: str
    fields: Dict[str, Any] = field(default_factory=dict)
    line: Optional[int] = None
    column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value, or ``default`` when the field is absent."""
        return self.fields.get(name, default)

    def set_position(
        self,
        line: int,
        column: int,
        end_line: Optional[int] = None,
        end_column: Optional[int] = None,
    ) -> None:
        """Attach source position metadata."""
        self.line = line
        self.column = column
        self.end_line = end_line if end_line is not None else line
        self.end_column = end_column if end_column is not None else column

    def children(self) -> Iterator["SyntaxNode"]:
        """Yield direct child nodes in field order, list elements in order."""
        for value in self.fields.values():
            if isinstance(value, SyntaxNode):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, SyntaxNode):
                        yield item

    def same_shape(self, other: Any) -> bool:
        """Structural equality ignoring identity and source positions."""
        return _same_value(self, other)

    def __repr__(self) -> str:
        scalars = ", ".join(
            f"{key}={value!r}"
            for key, value in self.fields.items()
            if not isinstance(value, (SyntaxNode, list))
        )
        position = f" @{self.line}:{self.column}" if self.line is not None else ""
        return f"<{self.kind}{' ' + scalars if scalars else ''}{position}>"


def _same_value(left: Any, right: Any) -> bool:
    pending = [(left, right)]
    while pending:
        a, b = pending.pop()
        if isinstance(a, SyntaxNode):
            if not isinstance(b, SyntaxNode):
                return False
            if a.kind != b.kind or a.fields.keys() != b.fields.keys():
                return False
            pending.extend((value, b.fields[key]) for key, value in a.fields.items())
        elif isinstance(a, list):
            if not isinstance(b, list) or len(a) != len(b):
                return False
            pending.extend(zip(a, b))
        elif a != b:
            return False
    return True


def describe_expression(node: Optional[SyntaxNode]) -> str:
    """
    Render a short source-like label for an expression node.

    Identifiers and non-computed member chains come back as dotted names
    (``lib.Base``); anything else falls back to its kind tag.
    """
    if node is None:
        return ""

    properties = []
    while node.kind == "MemberExpression" and not node.get("computed", False):
        properties.append(_describe_leaf(node.get("property")))
        node = node.get("object")
        if node is None:
            properties.append("")
            break
    else:
        properties.append(_describe_leaf(node))
    return ".".join(reversed(properties))


def _describe_leaf(node: Optional[SyntaxNode]) -> str:
    if node is None:
        return ""
    if node.kind == "Identifier":
        return str(node.get("name"))
    if node.kind == "ThisExpression":
        return "this"
    if node.kind == "Literal":
        return str(node.get("raw", node.get("value")))
    return node.kind
