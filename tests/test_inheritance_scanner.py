"""
Tests for the traversal driver, per-class grouping and the scan use case.
"""

from protoclass.application.use_cases.inheritance_use_cases import InheritanceUseCases
from protoclass.domain.models.inheritance import ScanMode
from protoclass.domain.services.inheritance_scanner import (
    InheritanceScanner,
    group_by_class,
    iter_nodes,
)

RESTORATION_FIRST = """\
Dog.prototype.constructor = Dog;
Dog.prototype = new Animal();
"""


class TestIterNodes:
    def test_pre_order_source_order(self, parse_program):
        program = parse_program("a.b = c;")

        visited = [
            (node.kind, node.get("name"), parent.kind if parent else None)
            for node, parent in iter_nodes(program)
        ]

        assert visited == [
            ("Program", None, None),
            ("ExpressionStatement", None, "Program"),
            ("AssignmentExpression", None, "ExpressionStatement"),
            ("MemberExpression", None, "AssignmentExpression"),
            ("Identifier", "a", "MemberExpression"),
            ("Identifier", "b", "MemberExpression"),
            ("Identifier", "c", "AssignmentExpression"),
        ]

    def test_statements_keep_their_parent(self, parse_program):
        program = parse_program("function Dog() { Dog.prototype = new Animal(); }")
        block = program["body"][0]["body"]

        parents = {
            id(node): parent for node, parent in iter_nodes(program)
        }

        assert parents[id(block["body"][0])] is block


class TestInheritanceScanner:
    def test_single_pass_finds_all_evidence(self, parse_program, legacy_source):
        result = InheritanceScanner().scan(parse_program(legacy_source))

        assert [(m.class_name, m.super_class_name) for m in result.matches] == [
            ("Dog", "Animal"),
            ("Dog", "Animal"),
            ("Cat", "Animal"),
            ("Cat", "Animal"),
        ]
        lines = [m.related_expressions[0].node.line for m in result.matches]
        assert lines == [14, 15, 21, 22]

    def test_correlated_matches_alias_recorded_superclass(self, parse_program, legacy_source):
        result = InheritanceScanner().scan(parse_program(legacy_source))

        dog_assignment, dog_restoration = result.matches[:2]
        assert dog_restoration.super_class is dog_assignment.super_class

    def test_nested_statements_are_found(self, parse_program):
        program = parse_program(
            "function setup() {\n  Dog.prototype = new Animal();\n  Dog.prototype.constructor = Dog;\n}"
        )

        result = InheritanceScanner().scan(program)

        assert len(result.matches) == 2
        assert result.matches[0].related_expressions[0].parent.kind == "BlockStatement"

    def test_single_pass_ignores_restoration_written_first(self, parse_program):
        result = InheritanceScanner(ScanMode.SINGLE_PASS).scan(parse_program(RESTORATION_FIRST))

        assert len(result.matches) == 1
        assert result.matches[0].related_expressions[0].node.line == 2

    def test_two_pass_correlates_restoration_written_first(self, parse_program):
        result = InheritanceScanner(ScanMode.TWO_PASS).scan(parse_program(RESTORATION_FIRST))

        assert [m.related_expressions[0].node.line for m in result.matches] == [1, 2]
        assert result.matches[0].super_class is result.matches[1].super_class

    def test_two_pass_uses_last_assignment(self, parse_program):
        program = parse_program(
            "Dog.prototype.constructor = Dog;\n"
            "Dog.prototype = new Animal();\n"
            "Dog.prototype = new Mammal();\n"
        )

        result = InheritanceScanner("two_pass").scan(program)

        assert [m.super_class_name for m in result.matches] == ["Mammal", "Animal", "Mammal"]

    def test_scans_do_not_share_state(self, parse_program):
        scanner = InheritanceScanner()
        scanner.scan(parse_program("Dog.prototype = new Animal();"))

        result = scanner.scan(parse_program("Dog.prototype.constructor = Dog;"))

        assert result.matches == []

    def test_no_matches(self, parse_program):
        result = InheritanceScanner().scan(parse_program("function Dog() {}\nvar x = 1;"))

        assert result.matches == []
        assert result.classes == {}


class TestGroupByClass:
    def test_groups_evidence_per_class(self, parse_program, legacy_source):
        result = InheritanceScanner().scan(parse_program(legacy_source))

        classes = group_by_class(result.matches)

        assert list(classes) == ["Dog", "Cat"]
        dog = classes["Dog"]
        assert dog.super_class_name == "Animal"
        assert [r.node.line for r in dog.related_expressions] == [14, 15]

    def test_latest_superclass_wins(self, parse_program):
        result = InheritanceScanner().scan(
            parse_program("Dog.prototype = new Animal();\nDog.prototype = new Mammal();")
        )

        dog = result.classes["Dog"]

        assert dog.super_class_name == "Mammal"
        assert len(dog.related_expressions) == 2


class TestInheritanceUseCases:
    def test_scan_source(self, js_parser, legacy_source):
        result = InheritanceUseCases(js_parser).scan_source(legacy_source)

        assert set(result.classes) == {"Dog", "Cat"}

    def test_scan_file_two_pass(self, js_parser, tmp_path):
        source = tmp_path / "dog.js"
        source.write_text(RESTORATION_FIRST, encoding="utf-8")

        result = InheritanceUseCases(js_parser, mode=ScanMode.TWO_PASS).scan_file(str(source))

        assert result.mode is ScanMode.TWO_PASS
        assert len(result.matches) == 2


class TestControlFlowSources:
    def test_assignments_inside_branches_and_loops(self, parse_program):
        program = parse_program(
            "if (typeof Object.create === 'function') {\n"
            "  Dog.prototype = Object.create(Animal.prototype);\n"
            "} else {\n"
            "  Dog.prototype = new Animal();\n"
            "}\n"
            "for (var i = 0; i < mixins.length; i++) { Dog.prototype.constructor = Dog; }\n"
        )

        result = InheritanceScanner().scan(program)

        assert [m.related_expressions[0].node.line for m in result.matches] == [2, 4, 6]
        assert result.matches[2].super_class is result.matches[1].super_class
        assert result.classes["Dog"].super_class_name == "Animal"
