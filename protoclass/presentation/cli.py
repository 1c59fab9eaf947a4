"""
Command line interface for scanning JavaScript files.

Parses one file, runs the inheritance scanner over it and prints the
result as plain text, a JSON report or a Mermaid class hierarchy.
"""

import argparse
import logging
import sys
from typing import List, Optional

from protoclass.application.use_cases.inheritance_use_cases import InheritanceUseCases
from protoclass.domain.models.inheritance import ConflictPolicy, ScanMode
from protoclass.domain.services.hierarchy_service import HierarchyDiagramService
from protoclass.infrastructure.parser.language_parser import LanguageParser
from protoclass.presentation.schemas import ScanReport
from protoclass.shared.config import Settings, settings as default_settings
from protoclass.shared.exceptions import ProtoclassError

logger = logging.getLogger(__name__)


def build_parser(settings: Settings = default_settings) -> argparse.ArgumentParser:
    """Construct the argument parser, defaults taken from settings."""
    p = argparse.ArgumentParser(
        prog="protoclass",
        description="Detect prototype-based inheritance in JavaScript sources.",
    )
    p.add_argument("file", help="JavaScript file to scan")
    p.add_argument(
        "--mode",
        choices=[m.value for m in ScanMode],
        default=settings.scan_mode.value,
        help="single_pass follows source order; two_pass resolves constructor restorations last",
    )
    p.add_argument(
        "--conflict-policy",
        dest="conflict_policy",
        choices=[c.value for c in ConflictPolicy],
        default=settings.conflict_policy.value,
        help="What to do when a class is given a different superclass",
    )
    p.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "json", "mermaid"],
        default=settings.output_format,
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=settings.log_level,
    )
    return p


def render_text(report: ScanReport) -> str:
    if not report.classes:
        return "No prototypal inheritance found."

    lines: List[str] = []
    for entry in report.classes:
        lines.append(f"{entry.class_name} extends {entry.super_class}")
        for related in entry.related_expressions:
            lines.append(f"  line {related.line}: {related.kind}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None, settings: Settings = default_settings) -> int:
    """
    Run the CLI.

    Returns:
        Process exit code: 0 on success, 1 when the file cannot be scanned.
    """
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        use_cases = InheritanceUseCases(
            LanguageParser(
                encoding=settings.source_encoding, grammar_path=settings.grammar_path
            ),
            mode=ScanMode(args.mode),
            conflict_policy=ConflictPolicy(args.conflict_policy),
        )
        result = use_cases.scan_file(args.file)
    except ProtoclassError as exc:
        logger.error("Failed to scan %s: %s", args.file, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output_format == "mermaid":
        print(HierarchyDiagramService().generate_mermaid(result.classes.values()))
        return 0

    report = ScanReport.from_scan(result, source=args.file)
    if args.output_format == "json":
        print(report.model_dump_json(indent=2))
    else:
        print(render_text(report))
    return 0
