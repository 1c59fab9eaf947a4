"""High-level parser facade that returns fully transformed syntax trees with diagnostics."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from lark import LarkError

from protoclass.domain.models.ast import SyntaxNode
from protoclass.infrastructure.parser.lark_parser import LarkParser
from protoclass.infrastructure.parser.preprocessor import (
    ParserWarning,
    SourceNormalizer,
)
from protoclass.infrastructure.parser.transformer import JavaScriptTransformer
from protoclass.shared.exceptions import ParsingError

logger = logging.getLogger(__name__)


@dataclass
class ParserDiagnostics:
    """Metadata emitted after parsing to aid debugging and tooling."""

    normalized_source: str
    warnings: List[ParserWarning]


@dataclass
class ParserResult:
    """Tuple-like structure returned by :class:`LanguageParser`."""

    ast: SyntaxNode
    diagnostics: ParserDiagnostics


class ILanguageParser(ABC):
    """
    Interface for the language parser.
    """

    @abstractmethod
    def parse(self, code: str) -> ParserResult:
        """
        Parse code and return the syntax tree.
        """

    @abstractmethod
    def parse_file(self, file_path: str) -> ParserResult:
        """
        Parse a file and return the syntax tree.
        """


class LanguageParser(ILanguageParser):
    """
    Parser for the supported JavaScript subset.
    Converts source code to an ESTree-shaped ``Program`` node using Lark and a custom transformer.
    """

    def __init__(self, encoding: str = "utf-8", grammar_path: Optional[str] = None):
        """
        Initializes the components needed for parsing.

        Args:
            encoding: Encoding used by :meth:`parse_file`
            grammar_path: Alternative grammar file; the bundled one by default
        """
        self._encoding = encoding
        self._lark_parser = LarkParser(grammar_path)
        self._transformer = JavaScriptTransformer()
        self._normalizer = SourceNormalizer()

    def parse(self, code: str) -> ParserResult:
        """
        Parse code and return the syntax tree.

        Args:
            code: Source code string to parse

        Returns:
            ParserResult whose ``ast`` is the ``Program`` node

        Raises:
            ParsingError: If parsing or transformation fails
        """
        preprocessed = self._normalizer.normalize(code)
        for warning in preprocessed.warnings:
            logger.debug("Preprocessing warning (line %s): %s", warning.line, warning.message)

        try:
            parse_tree = self._lark_parser.parse(preprocessed.code)
            ast = self._transformer.transform(parse_tree)
        except LarkError as e:
            line: Optional[int] = getattr(e, "line", None)
            column: Optional[int] = getattr(e, "column", None)
            detail = f"Error parsing code at line {line}, column {column}: {e}"
            raise ParsingError(detail, details={"line": line, "column": column}) from e
        except RecursionError as e:
            raise ParsingError(
                "Source nests too deeply to be parsed",
                details={"line": None, "column": None},
            ) from e
        except Exception as e:
            raise ParsingError(
                f"Unexpected error while parsing: {e}",
                details={"line": None, "column": None},
            ) from e

        diagnostics = ParserDiagnostics(
            normalized_source=preprocessed.code,
            warnings=preprocessed.warnings,
        )
        return ParserResult(ast=ast, diagnostics=diagnostics)

    def parse_file(self, file_path: str) -> ParserResult:
        """
        Parse a file and return the syntax tree.

        Args:
            file_path: Path to the JavaScript source file

        Returns:
            ParserResult whose ``ast`` is the ``Program`` node

        Raises:
            ParsingError: If file reading or parsing fails
        """
        try:
            with open(file_path, "r", encoding=self._encoding) as handle:
                code = handle.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ParsingError(f"Error reading file {file_path}: {e}") from e

        logger.info("Parsing %s", file_path)
        return self.parse(code)
