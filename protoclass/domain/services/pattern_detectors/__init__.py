"""
Pattern detection utilities package.
Contains detectors for legacy JavaScript idioms.
"""

from protoclass.domain.services.pattern_detectors.base_detector import PatternDetector
from protoclass.domain.services.pattern_detectors.prototypal_detector import (
    PrototypalInheritanceDetector,
)

__all__ = [
    "PatternDetector",
    "PrototypalInheritanceDetector",
]
