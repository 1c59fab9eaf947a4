"""Utility helpers to normalize JavaScript source before parsing.

The Lark grammar only understands plain statements, while files found in
the wild start with byte-order marks, hashbang lines or Windows line
endings. The normalizer removes those without shifting line numbers so
positions reported on syntax nodes still point at the original file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import List, Optional


@dataclass
class ParserWarning:
    """Represents a non-fatal issue detected while preprocessing."""

    message: str
    line: Optional[int] = None


@dataclass
class PreprocessingResult:
    """Container returned by the source normalizer."""

    code: str
    warnings: List[ParserWarning] = field(default_factory=list)


class SourceNormalizer:
    """Clean raw JavaScript source before it reaches the parser."""

    _BOM = "\ufeff"
    _HASHBANG_PATTERN = re.compile(r"^#![^\n]*")
    _STRING_OR_COMMENT_PATTERN = re.compile(
        r"\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'|//[^\n]*|/\*[\s\S]*?\*/"
    )

    def normalize(self, source: str) -> PreprocessingResult:
        """Strip BOM and hashbang, unify line endings, check brace balance."""

        if not source:
            return PreprocessingResult(
                code="",
                warnings=[ParserWarning(message="Input is empty; nothing to parse")],
            )

        warnings: List[ParserWarning] = []
        code = source

        if code.startswith(self._BOM):
            code = code[len(self._BOM):]
            warnings.append(ParserWarning(message="Removed byte-order mark", line=1))

        code = code.replace("\r\n", "\n").replace("\r", "\n")

        if self._HASHBANG_PATTERN.match(code):
            # Keep the (now empty) first line so positions are unchanged
            code = self._HASHBANG_PATTERN.sub("", code, count=1)
            warnings.append(ParserWarning(message="Removed hashbang line", line=1))

        warnings.extend(self._validate_brace_balance(code))
        return PreprocessingResult(code=code, warnings=warnings)

    def _validate_brace_balance(self, source: str) -> List[ParserWarning]:
        """Emit warnings when braces or parentheses are unbalanced."""

        warnings: List[ParserWarning] = []
        stripped = self._STRING_OR_COMMENT_PATTERN.sub("", source)

        for opening, closing in (("{", "}"), ("(", ")"), ("[", "]")):
            open_count = stripped.count(opening)
            close_count = stripped.count(closing)
            if open_count != close_count:
                warnings.append(
                    ParserWarning(
                        message=(
                            f"Unbalanced '{opening}'/'{closing}' detected "
                            f"({opening}={open_count}, {closing}={close_count})"
                        )
                    )
                )

        return warnings
