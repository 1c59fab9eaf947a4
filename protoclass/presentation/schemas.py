"""Pydantic report models exposed by the command line interface."""

from typing import List, Optional

from pydantic import BaseModel, Field

from protoclass.domain.models.inheritance import (
    ClassInheritance,
    InheritanceMatch,
    RelatedExpression,
    ScanMode,
)
from protoclass.domain.services.inheritance_scanner import ScanResult


class RelatedExpressionSchema(BaseModel):
    """Location of a statement used as evidence."""

    kind: str
    parent_kind: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    @classmethod
    def from_domain(cls, related: RelatedExpression) -> "RelatedExpressionSchema":
        return cls(
            kind=related.node.kind,
            parent_kind=related.parent.kind if related.parent is not None else None,
            line=related.node.line,
            column=related.node.column,
        )


class InheritanceMatchSchema(BaseModel):
    """One detector result."""

    class_name: str
    super_class: str = Field(..., description="Source-like name of the superclass expression")
    related_expressions: List[RelatedExpressionSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, match: InheritanceMatch) -> "InheritanceMatchSchema":
        return cls(
            class_name=match.class_name,
            super_class=match.super_class_name,
            related_expressions=[
                RelatedExpressionSchema.from_domain(r) for r in match.related_expressions
            ],
        )


class ClassInheritanceSchema(BaseModel):
    """All evidence gathered for one class."""

    class_name: str
    super_class: str
    related_expressions: List[RelatedExpressionSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, entry: ClassInheritance) -> "ClassInheritanceSchema":
        return cls(
            class_name=entry.class_name,
            super_class=entry.super_class_name,
            related_expressions=[
                RelatedExpressionSchema.from_domain(r) for r in entry.related_expressions
            ],
        )


class ScanReport(BaseModel):
    """Full report for one scanned source."""

    source: Optional[str] = None
    mode: ScanMode
    matches: List[InheritanceMatchSchema] = Field(default_factory=list)
    classes: List[ClassInheritanceSchema] = Field(default_factory=list)

    @classmethod
    def from_scan(cls, result: ScanResult, source: Optional[str] = None) -> "ScanReport":
        return cls(
            source=source,
            mode=result.mode,
            matches=[InheritanceMatchSchema.from_domain(m) for m in result.matches],
            classes=[ClassInheritanceSchema.from_domain(c) for c in result.classes.values()],
        )


__all__ = [
    "RelatedExpressionSchema",
    "InheritanceMatchSchema",
    "ClassInheritanceSchema",
    "ScanReport",
]
