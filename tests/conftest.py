"""
Global Pytest Configuration and Fixtures.

Provides a shared JavaScript parser and helpers to turn snippets into
statement nodes for detector and scanner tests.
"""

from typing import Callable, List

import pytest

from protoclass.domain.models.ast import SyntaxNode
from protoclass.infrastructure.parser.language_parser import LanguageParser


@pytest.fixture(scope="session")
def js_parser() -> LanguageParser:
    """A parser instance; building the LALR tables once is enough."""
    return LanguageParser()


@pytest.fixture
def parse_program(js_parser: LanguageParser) -> Callable[[str], SyntaxNode]:
    """Parse a snippet and return its ``Program`` node."""

    def _parse(code: str) -> SyntaxNode:
        return js_parser.parse(code).ast

    return _parse


@pytest.fixture
def parse_statements(parse_program) -> Callable[[str], List[SyntaxNode]]:
    """Parse a snippet and return its top-level statements."""

    def _parse(code: str) -> List[SyntaxNode]:
        return list(parse_program(code)["body"])

    return _parse


@pytest.fixture
def parse_statement(parse_statements) -> Callable[[str], SyntaxNode]:
    """Parse a single-statement snippet and return that statement."""

    def _parse(code: str) -> SyntaxNode:
        statements = parse_statements(code)
        assert len(statements) == 1, statements
        return statements[0]

    return _parse


@pytest.fixture
def legacy_source() -> str:
    """A small file written in the pre-ES6 constructor/prototype style."""
    return """\
// Base class
function Animal(name) {
    this.name = name;
}

Animal.prototype.speak = function () {
    return this.name + " makes a sound";
};

function Dog(name) {
    Animal.call(this, name);
}

Dog.prototype = Object.create(Animal.prototype);
Dog.prototype.constructor = Dog;

/* Cats are old-school */
function Cat(name) {
    Animal.call(this, name);
}
Cat.prototype = new Animal();
Cat.prototype.constructor = Cat;
"""
