"""Application use cases for scanning JavaScript sources for prototypal inheritance."""

from __future__ import annotations

from protoclass.domain.models.inheritance import ConflictPolicy, ScanMode
from protoclass.domain.services.inheritance_scanner import InheritanceScanner, ScanResult
from protoclass.infrastructure.parser.language_parser import ILanguageParser, ParserResult


class InheritanceUseCases:
    """Coordinate parsing and inheritance scanning through the parser port."""

    def __init__(
        self,
        parser: ILanguageParser,
        mode: ScanMode = ScanMode.SINGLE_PASS,
        conflict_policy: ConflictPolicy = ConflictPolicy.OVERWRITE,
    ):
        self.parser = parser
        self.scanner = InheritanceScanner(mode=mode, conflict_policy=conflict_policy)

    def scan_source(self, code: str) -> ScanResult:
        return self.scan_parsed(self.parser.parse(code))

    def scan_file(self, file_path: str) -> ScanResult:
        return self.scan_parsed(self.parser.parse_file(file_path))

    def scan_parsed(self, parsed: ParserResult) -> ScanResult:
        return self.scanner.scan(parsed.ast)
