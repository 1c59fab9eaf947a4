"""
Module that builds and caches Lark parsers for JavaScript grammars.

Building an LALR table is the expensive part of parsing, so compiled parsers
are shared between instances, one per grammar file.
"""

import logging
import os
from functools import lru_cache
from typing import Optional

from lark import Lark, LarkError, Tree

from protoclass.shared.exceptions import ParsingError

logger = logging.getLogger(__name__)

DEFAULT_GRAMMAR_PATH = os.path.join(os.path.dirname(__file__), "grammar.lark")


@lru_cache(maxsize=None)
def _compile(grammar_path: str) -> Lark:
    logger.debug("Compiling grammar %s", grammar_path)
    try:
        # Positions feed line/column on every syntax node.
        return Lark.open(
            grammar_path,
            parser="lalr",
            propagate_positions=True,
            maybe_placeholders=False,
        )
    except (OSError, LarkError) as e:
        raise ParsingError(
            f"Cannot load grammar {grammar_path}: {e}",
            details={"grammar_path": grammar_path},
        ) from e


class LarkParser:
    """
    LALR parser over a JavaScript grammar file.

    Args:
        grammar_path: Grammar to load; the bundled ``grammar.lark`` when omitted
    """

    def __init__(self, grammar_path: Optional[str] = None):
        self.grammar_path = os.path.abspath(grammar_path or DEFAULT_GRAMMAR_PATH)
        self._parser = _compile(self.grammar_path)

    @staticmethod
    def clear_cache() -> None:
        """Drop compiled parsers, forcing grammars to be reloaded."""
        _compile.cache_clear()

    def parse(self, code: str) -> Tree:
        return self._parser.parse(code)
