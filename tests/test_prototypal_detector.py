"""
Unit tests for the prototypal inheritance detector.

Statements are parsed from JavaScript snippets and fed to ``process`` one
by one, the way a traversal driver would.
"""

import logging

import pytest

from protoclass.domain.models.inheritance import (
    ConflictPolicy,
    InheritanceMatch,
    RelatedExpression,
)
from protoclass.domain.services.pattern_detectors import PrototypalInheritanceDetector
from protoclass.shared.exceptions import InheritanceConflictError


@pytest.fixture
def detector() -> PrototypalInheritanceDetector:
    return PrototypalInheritanceDetector()


class TestPrototypeAssignments:
    def test_new_expression_superclass(self, detector, parse_program):
        program = parse_program("Dog.prototype = new Animal();")
        statement = program["body"][0]
        animal = statement["expression"]["right"]["callee"]

        result = detector.process(statement, program)

        assert result == InheritanceMatch(
            class_name="Dog",
            super_class=animal,
            related_expressions=[RelatedExpression(node=statement, parent=program)],
        )
        assert result.super_class is animal
        assert detector.known_classes() == {"Dog": animal}

    def test_new_expression_without_arguments_list(self, detector, parse_statement):
        statement = parse_statement("Dog.prototype = new Animal;")

        result = detector.process(statement, None)

        assert result.class_name == "Dog"
        assert result.super_class_name == "Animal"

    def test_new_expression_arguments_are_ignored(self, detector, parse_statement):
        statement = parse_statement("Dog.prototype = new lib.Animal(1, 'two');")

        result = detector.process(statement, None)

        assert result.super_class.kind == "MemberExpression"
        assert result.super_class_name == "lib.Animal"

    def test_object_create_superclass(self, detector, parse_program):
        program = parse_program("Dog.prototype = Object.create(Animal.prototype);")
        statement = program["body"][0]
        animal = statement["expression"]["right"]["arguments"][0]["object"]

        result = detector.process(statement, program)

        assert result.class_name == "Dog"
        assert result.super_class is animal
        assert result.related_expressions == [RelatedExpression(node=statement, parent=program)]
        assert detector.known_classes() == {"Dog": animal}

    @pytest.mark.parametrize(
        "code",
        [
            "Dog.prototype = Object.create(Animal.prototype, extra);",
            "Dog.prototype = Object.create();",
            "Dog.prototype = Object.create(Animal);",
            "Dog.prototype = Reflect.create(Animal.prototype);",
        ],
    )
    def test_object_create_variants_are_rejected(self, detector, parse_statement, code):
        assert detector.process(parse_statement(code), None) is None
        assert detector.known_classes() == {}

    @pytest.mark.parametrize(
        "code",
        [
            "Dog.prototype = Animal;",
            "Dog.proto = new Animal();",
            "Dog[prototype] = new Animal();",
            "Dog['prototype'] = new Animal();",
            "this.prototype = new Animal();",
            "Dog.prototype.speak = new Animal();",
            "var x = new Animal();",
            "Dog.prototype += new Animal();",
            "Dog.prototype = cond ? new Animal() : new Mammal();",
        ],
    )
    def test_unrelated_statements_are_ignored(self, detector, parse_statement, code):
        assert detector.process(parse_statement(code), None) is None
        assert detector.known_classes() == {}

    def test_bare_expression_is_not_a_statement(self, detector, parse_statement):
        assignment = parse_statement("Dog.prototype = new Animal();")["expression"]

        assert detector.process(assignment, None) is None


class TestConstructorRestoration:
    def test_reuses_recorded_superclass_node(self, detector, parse_program):
        program = parse_program(
            "Dog.prototype = new Animal();\nDog.prototype.constructor = Dog;"
        )
        assignment, restoration = program["body"]
        recorded = detector.process(assignment, program)

        result = detector.process(restoration, program)

        assert result.class_name == "Dog"
        assert result.super_class is recorded.super_class
        assert result.related_expressions == [RelatedExpression(node=restoration, parent=program)]
        assert detector.known_classes() == {"Dog": recorded.super_class}

    def test_unknown_class_is_ignored(self, detector, parse_statement):
        statement = parse_statement("Cat.prototype.constructor = Cat;")

        assert detector.process(statement, None) is None
        assert detector.known_classes() == {}

    def test_mismatched_names_never_match(self, detector, parse_statements):
        assignment, dog_to_cat = parse_statements(
            "Dog.prototype = new Animal();\nDog.prototype.constructor = Cat;"
        )
        detector.process(assignment, None)

        assert detector.process(dog_to_cat, None) is None

    def test_restoration_before_assignment_is_not_correlated(self, detector, parse_statements):
        restoration, assignment = parse_statements(
            "Dog.prototype.constructor = Dog;\nDog.prototype = new Animal();"
        )

        assert detector.process(restoration, None) is None
        assert detector.process(assignment, None) is not None


class TestRedefinition:
    SOURCE = """\
Dog.prototype = new Animal();
Dog.prototype = new Mammal();
Dog.prototype.constructor = Dog;
"""

    def test_last_assignment_wins(self, detector, parse_statements):
        first, second, restoration = parse_statements(self.SOURCE)
        detector.process(first, None)
        mammal = detector.process(second, None).super_class

        result = detector.process(restoration, None)

        assert result.super_class is mammal
        assert result.super_class_name == "Mammal"
        assert detector.known_classes() == {"Dog": mammal}

    def test_repeated_process_gives_equal_results(self, detector, parse_program):
        program = parse_program("Dog.prototype = new Animal();")
        statement = program["body"][0]

        first = detector.process(statement, program)
        second = detector.process(statement, program)

        assert first == second
        assert first.super_class is second.super_class

    def test_warn_policy_logs_and_overwrites(self, parse_statements, caplog):
        detector = PrototypalInheritanceDetector(ConflictPolicy.WARN)
        first, second, _ = parse_statements(self.SOURCE)
        detector.process(first, None)

        with caplog.at_level(logging.WARNING):
            detector.process(second, None)

        assert "redefined from Animal to Mammal" in caplog.text
        assert detector.known_classes()["Dog"]["name"] == "Mammal"

    def test_error_policy_raises_and_keeps_first(self, parse_statements):
        detector = PrototypalInheritanceDetector("error")
        first, second, _ = parse_statements(self.SOURCE)
        detector.process(first, None)

        with pytest.raises(InheritanceConflictError) as excinfo:
            detector.process(second, None)

        assert excinfo.value.details["previous"] == "Animal"
        assert excinfo.value.details["current"] == "Mammal"
        assert detector.known_classes()["Dog"]["name"] == "Animal"

    def test_same_superclass_is_not_a_conflict(self, parse_statements):
        detector = PrototypalInheritanceDetector(ConflictPolicy.ERROR)
        first, second = parse_statements(
            "Dog.prototype = new Animal();\nDog.prototype = Object.create(Animal.prototype);"
        )

        detector.process(first, None)
        result = detector.process(second, None)

        assert result.super_class_name == "Animal"


class TestIsolation:
    def test_instances_do_not_share_tables(self, parse_statements):
        assignment, restoration = parse_statements(
            "Dog.prototype = new Animal();\nDog.prototype.constructor = Dog;"
        )
        first = PrototypalInheritanceDetector()
        second = PrototypalInheritanceDetector()

        first.process(assignment, None)

        assert second.process(restoration, None) is None
        assert first.process(restoration, None) is not None

    def test_known_classes_is_a_snapshot(self, detector, parse_statement):
        detector.process(parse_statement("Dog.prototype = new Animal();"), None)

        snapshot = detector.known_classes()
        snapshot.clear()

        assert "Dog" in detector.known_classes()
