"""
Prototypal inheritance detector.

Detects:

    Class1.prototype = Object.create(Class2.prototype);

or:

    Class1.prototype = new Class2();

optionally followed by:

    Class1.prototype.constructor = Class1;
"""

import logging
from typing import Any, Dict, Optional

from protoclass.domain.models.ast import SyntaxNode, describe_expression
from protoclass.domain.models.inheritance import (
    ConflictPolicy,
    InheritanceMatch,
    RelatedExpression,
)
from protoclass.domain.services.pattern_detectors.base_detector import PatternDetector
from protoclass.domain.services.pattern_matching import (
    Bindings,
    Template,
    extract,
    matches_ast,
    matches_length,
    node,
)
from protoclass.shared.exceptions import InheritanceConflictError

logger = logging.getLogger(__name__)


def _identifier(name: Any) -> Template:
    return node("Identifier", name=name)


def _member(obj: Any, prop: str) -> Template:
    return node("MemberExpression", object=obj, property=_identifier(prop), computed=False)


def _assignment_statement(left: Template, right: Any) -> Template:
    return node(
        "ExpressionStatement",
        expression=node("AssignmentExpression", operator="=", left=left, right=right),
    )


# <className>.prototype = new <superClass>(...);
NEW_ASSIGNMENT = _assignment_statement(
    _member(_identifier(extract("className")), "prototype"),
    node("NewExpression", callee=extract("superClass")),
)

# <className>.prototype = Object.create(<superClass>.prototype);
OBJECT_CREATE_ASSIGNMENT = _assignment_statement(
    _member(_identifier(extract("className")), "prototype"),
    node(
        "CallExpression",
        callee=_member(_identifier("Object"), "create"),
        arguments=matches_length([_member(extract("superClass"), "prototype")]),
    ),
)

# <className>.prototype.constructor = <className>;
CONSTRUCTOR_ASSIGNMENT = _assignment_statement(
    _member(_member(_identifier(extract("className")), "prototype"), "constructor"),
    _identifier(extract("className")),
)

_match_new = matches_ast(NEW_ASSIGNMENT)
_match_object_create = matches_ast(OBJECT_CREATE_ASSIGNMENT)
_match_constructor = matches_ast(CONSTRUCTOR_ASSIGNMENT)


class PrototypalInheritanceDetector(PatternDetector):
    """
    Detects superclasses established through ``Class.prototype`` assignments.

    Superclasses are remembered per class name for the lifetime of the
    instance so that a later ``Class.prototype.constructor = Class;`` can be
    linked back to them. Create one detector per traversal.
    """

    def __init__(self, conflict_policy: ConflictPolicy = ConflictPolicy.OVERWRITE):
        self.conflict_policy = ConflictPolicy(conflict_policy)
        self._found_superclasses: Dict[str, SyntaxNode] = {}

    def process(
        self, node: SyntaxNode, parent: Optional[SyntaxNode] = None
    ) -> Optional[InheritanceMatch]:
        """
        Process a node and return inheritance details if found.

        Args:
            node: Statement node being visited
            parent: Node containing ``node``

        Returns:
            InheritanceMatch for a prototype assignment, or for a constructor
            restoration of a class whose superclass is already known;
            None otherwise.
        """
        found = self.record_superclass(node, parent)
        if found is not None:
            return found
        return self.correlate_constructor(node, parent)

    def record_superclass(
        self, node: SyntaxNode, parent: Optional[SyntaxNode] = None
    ) -> Optional[InheritanceMatch]:
        """Handle ``Class.prototype = ...`` statements, remembering the superclass."""
        m = self.match_new_assignment(node)
        if m is None:
            m = self.match_object_create_assignment(node)
        if m is None:
            return None

        class_name, super_class = m["className"], m["superClass"]
        self._remember(class_name, super_class)
        logger.debug(
            "Recorded superclass %s for %s", describe_expression(super_class), class_name
        )
        return self._build_match(class_name, super_class, node, parent)

    def correlate_constructor(
        self, node: SyntaxNode, parent: Optional[SyntaxNode] = None
    ) -> Optional[InheritanceMatch]:
        """Handle ``Class.prototype.constructor = Class;`` for known classes."""
        m = self.match_constructor_assignment(node)
        if m is None:
            return None

        class_name = m["className"]
        super_class = self._found_superclasses.get(class_name)
        if super_class is None:
            logger.debug("No known superclass for %s, ignoring constructor assignment", class_name)
            return None
        return self._build_match(class_name, super_class, node, parent)

    def known_classes(self) -> Dict[str, SyntaxNode]:
        """Snapshot of the class name to superclass table."""
        return dict(self._found_superclasses)

    def match_new_assignment(self, node: SyntaxNode) -> Optional[Bindings]:
        return _match_new(node)

    def match_object_create_assignment(self, node: SyntaxNode) -> Optional[Bindings]:
        return _match_object_create(node)

    def match_constructor_assignment(self, node: SyntaxNode) -> Optional[Bindings]:
        return _match_constructor(node)

    def _remember(self, class_name: str, super_class: SyntaxNode) -> None:
        previous = self._found_superclasses.get(class_name)
        if previous is not None and not previous.same_shape(super_class):
            old_name = describe_expression(previous)
            new_name = describe_expression(super_class)
            if self.conflict_policy is ConflictPolicy.ERROR:
                raise InheritanceConflictError(
                    f"Class {class_name} already extends {old_name}, got {new_name}",
                    details={
                        "class_name": class_name,
                        "previous": old_name,
                        "current": new_name,
                        "line": super_class.line,
                    },
                )
            if self.conflict_policy is ConflictPolicy.WARN:
                logger.warning(
                    "Superclass of %s redefined from %s to %s", class_name, old_name, new_name
                )
        self._found_superclasses[class_name] = super_class

    @staticmethod
    def _build_match(
        class_name: str,
        super_class: SyntaxNode,
        node: SyntaxNode,
        parent: Optional[SyntaxNode],
    ) -> InheritanceMatch:
        return InheritanceMatch(
            class_name=class_name,
            super_class=super_class,
            related_expressions=[RelatedExpression(node=node, parent=parent)],
        )
