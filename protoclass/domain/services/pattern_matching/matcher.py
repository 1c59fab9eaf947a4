"""
Declarative structural matching over syntax trees.

Patterns are written as nested :func:`node` calls whose field values are
either plain literals, further node patterns, :func:`extract` captures or
:func:`matches_length` sequences::

    matcher = matches_ast(
        node("MemberExpression",
             object=node("Identifier", name=extract("className")),
             property=node("Identifier", name="prototype"))
    )
    matcher(some_node)  # {"className": "Dog"} or None
"""

from typing import Any, Callable, Dict, Iterable, Optional

from protoclass.domain.services.pattern_matching.templates import (
    Capture,
    ExactSequence,
    LiteralPattern,
    NodePattern,
    Template,
)

Bindings = Dict[str, Any]
Matcher = Callable[[Any], Optional[Bindings]]


def as_template(value: Any) -> Template:
    """Wrap a pattern field value into a template variant."""
    if isinstance(value, Template):
        return value
    if isinstance(value, (list, tuple)):
        raise TypeError("sequence fields must be declared with matches_length()")
    return LiteralPattern(value)


def node(kind: str, **fields: Any) -> NodePattern:
    """Pattern for a node of ``kind``; unlisted fields are not constrained."""
    return NodePattern(
        kind=kind,
        fields=tuple((name, as_template(value)) for name, value in fields.items()),
    )


def extract(name: str) -> Capture:
    """Capture marker binding ``name`` to the matched value."""
    return Capture(name)


def matches_length(items: Iterable[Any]) -> ExactSequence:
    """Sequence pattern that only accepts lists of exactly this length."""
    return ExactSequence(tuple(as_template(item) for item in items))


def match(template: Template, value: Any) -> Optional[Bindings]:
    """
    Match ``value`` against ``template``.

    Returns:
        Dict of capture name to matched value on success (empty when the
        pattern has no captures), or None when anything fails to match.
    """
    bindings: Bindings = {}
    if template.match(value, bindings):
        return bindings
    return None


def matches_ast(template: Template) -> Matcher:
    """Build a reusable matcher function for ``template``."""

    def matcher(value: Any) -> Optional[Bindings]:
        return match(template, value)

    return matcher
