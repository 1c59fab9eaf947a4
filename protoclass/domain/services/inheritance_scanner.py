"""
Traversal driver feeding syntax nodes to the prototypal inheritance detector.

Nodes are visited pre-order, in source order: a node before its children,
children in field order, list elements in list order. This is the order a
``Class.prototype.constructor = Class;`` restoration relies on to find the
prototype assignment written above it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from protoclass.domain.models.ast import SyntaxNode
from protoclass.domain.models.inheritance import (
    ClassInheritance,
    ConflictPolicy,
    InheritanceMatch,
    ScanMode,
)
from protoclass.domain.services.pattern_detectors import PrototypalInheritanceDetector

logger = logging.getLogger(__name__)

VisitedNode = Tuple[SyntaxNode, Optional[SyntaxNode]]


def iter_nodes(root: SyntaxNode, parent: Optional[SyntaxNode] = None) -> Iterator[VisitedNode]:
    """Yield ``(node, parent)`` pairs in pre-order source order."""
    stack: List[VisitedNode] = [(root, parent)]
    while stack:
        node, node_parent = stack.pop()
        yield node, node_parent
        children = list(node.children())
        stack.extend((child, node) for child in reversed(children))


def group_by_class(matches: Iterable[InheritanceMatch]) -> Dict[str, ClassInheritance]:
    """
    Fold matches into one entry per class name, in order of first appearance.

    The superclass of the latest match wins; related expressions are kept
    in the order they were found.
    """
    classes: Dict[str, ClassInheritance] = {}
    for match in matches:
        entry = classes.get(match.class_name)
        if entry is None:
            entry = ClassInheritance(class_name=match.class_name, super_class=match.super_class)
            classes[match.class_name] = entry
        else:
            entry.super_class = match.super_class
        entry.related_expressions.extend(match.related_expressions)
    return classes


@dataclass
class ScanResult:
    """Matches found in one traversal, in source order."""

    mode: ScanMode
    matches: List[InheritanceMatch] = field(default_factory=list)

    @property
    def classes(self) -> Dict[str, ClassInheritance]:
        return group_by_class(self.matches)


class InheritanceScanner:
    """
    Walks a syntax tree and collects prototypal inheritance evidence.

    Every call to :meth:`scan` uses a fresh detector, so a scanner can be
    reused across files without leaking superclasses between them.

    In ``TWO_PASS`` mode all prototype assignments are recorded first and
    constructor restorations are resolved afterwards, so a restoration
    written above its prototype assignment is still correlated, against the
    last assignment in the tree.
    """

    def __init__(
        self,
        mode: ScanMode = ScanMode.SINGLE_PASS,
        conflict_policy: ConflictPolicy = ConflictPolicy.OVERWRITE,
    ):
        self.mode = ScanMode(mode)
        self.conflict_policy = ConflictPolicy(conflict_policy)

    def scan(self, root: SyntaxNode) -> ScanResult:
        detector = PrototypalInheritanceDetector(self.conflict_policy)
        if self.mode is ScanMode.TWO_PASS:
            matches = self._scan_two_pass(detector, root)
        else:
            matches = self._scan_single_pass(detector, root)

        logger.info(
            "Scan (%s) found %d inheritance matches for %d classes",
            self.mode.value,
            len(matches),
            len(detector.known_classes()),
        )
        return ScanResult(mode=self.mode, matches=matches)

    def _scan_single_pass(
        self, detector: PrototypalInheritanceDetector, root: SyntaxNode
    ) -> List[InheritanceMatch]:
        matches: List[InheritanceMatch] = []
        for node, parent in iter_nodes(root):
            found = detector.process(node, parent)
            if found is not None:
                matches.append(found)
        return matches

    def _scan_two_pass(
        self, detector: PrototypalInheritanceDetector, root: SyntaxNode
    ) -> List[InheritanceMatch]:
        visited = list(iter_nodes(root))
        found: List[Tuple[int, InheritanceMatch]] = []

        for index, (node, parent) in enumerate(visited):
            recorded = detector.record_superclass(node, parent)
            if recorded is not None:
                found.append((index, recorded))

        for index, (node, parent) in enumerate(visited):
            correlated = detector.correlate_constructor(node, parent)
            if correlated is not None:
                found.append((index, correlated))

        found.sort(key=lambda item: item[0])
        return [match for _, match in found]
