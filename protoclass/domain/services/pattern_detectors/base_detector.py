"""
Base pattern detector interface.
Defines contract for all node-by-node pattern detectors.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from protoclass.domain.models.ast import SyntaxNode


class PatternDetector(ABC):
    """
    Abstract base class for pattern detectors.

    A detector is fed every node of one traversal, in source order, and may
    keep state between calls. Use one instance per traversal.
    """

    @abstractmethod
    def process(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> Optional[Any]:
        """
        Inspect a node and return evidence, or None when nothing applies.
        """
