"""
Lark Transformer implementation to convert parse trees into ESTree-shaped nodes.
Handles statements, control flow, operators, member access chains, calls,
``new`` and literals.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from lark import Token
from lark.visitors import Transformer_NonRecursive

from protoclass.domain.models.ast import SyntaxNode

Positioned = Union[Token, SyntaxNode]


class JavaScriptTransformer(Transformer_NonRecursive):
    """
    Transforms Lark parse tree into :class:`SyntaxNode` trees.
    Each method corresponds to a rule or alias in grammar.lark. Lark invokes
    these handlers via reflection, so they may appear unused to static analyzers.
    The tree is walked without recursion, so long operator chains do not hit
    the interpreter recursion limit.
    """

    # ===== Internal Utilities =====

    def _assign_position(
        self, node: SyntaxNode, start: Optional[Positioned], end: Optional[Positioned] = None
    ) -> SyntaxNode:
        """Attach source position metadata spanning ``start`` to ``end``."""
        if start is None or getattr(start, "line", None) is None:
            return node

        if end is None or getattr(end, "line", None) is None:
            end = start
        end_line = getattr(end, "end_line", None)
        end_column = getattr(end, "end_column", None)
        node.set_position(
            line=start.line,
            column=start.column,
            end_line=end.line if end_line is None else end_line,
            end_column=end.column if end_column is None else end_column,
        )
        return node

    def _spanning(self, kind: str, fields: dict, items: List[Any]) -> SyntaxNode:
        """Build a node positioned from its first to its last located child."""
        located = [
            item for item in items
            if isinstance(item, (Token, SyntaxNode)) and getattr(item, "line", None) is not None
        ]
        node = SyntaxNode(kind, fields)
        if not located:
            return node
        return self._assign_position(node, located[0], located[-1])

    def _identifier(self, token: Token) -> SyntaxNode:
        return self._assign_position(SyntaxNode("Identifier", {"name": token.value}), token)

    # ===== Program Structure =====

    def program(self, items: List[Any]) -> SyntaxNode:
        """Transform program root node."""
        body = [item for item in items if item is not None]
        return self._spanning("Program", {"body": body}, body)

    def block(self, items: List[Any]) -> SyntaxNode:
        """Transform ``{ ... }`` statement block."""
        body = [item for item in items if item is not None]
        return self._spanning("BlockStatement", {"body": body}, body)

    def empty_statement(self, items: List[Any]) -> SyntaxNode:
        return SyntaxNode("EmptyStatement", {})

    def expression_statement(self, items: List[Any]) -> SyntaxNode:
        return self._spanning("ExpressionStatement", {"expression": items[0]}, items)

    def return_statement(self, items: List[Any]) -> SyntaxNode:
        argument = items[0] if items else None
        return self._spanning("ReturnStatement", {"argument": argument}, items)

    # ===== Control Flow =====

    def if_statement(self, items: List[Any]) -> SyntaxNode:
        test, consequent = items[0], items[1]
        alternate = items[2] if len(items) > 2 else None
        return self._spanning(
            "IfStatement",
            {"test": test, "consequent": consequent, "alternate": alternate},
            items,
        )

    def while_statement(self, items: List[Any]) -> SyntaxNode:
        test, body = items
        return self._spanning("WhileStatement", {"test": test, "body": body}, items)

    def do_while_statement(self, items: List[Any]) -> SyntaxNode:
        body, test = items
        return self._spanning("DoWhileStatement", {"body": body, "test": test}, items)

    def for_init(self, items: List[Any]) -> Tuple[str, SyntaxNode]:
        return "init", items[0]

    def for_test(self, items: List[Any]) -> Tuple[str, SyntaxNode]:
        return "test", items[0]

    def for_update(self, items: List[Any]) -> Tuple[str, SyntaxNode]:
        return "update", items[0]

    def for_statement(self, items: List[Any]) -> SyntaxNode:
        """Transform ``for (init; test; update)``; absent clauses are ``None``."""
        fields: Dict[str, Any] = {"init": None, "test": None, "update": None}
        fields.update(dict(items[:-1]))
        fields["body"] = items[-1]
        return self._spanning("ForStatement", fields, [*fields.values()])

    def for_in_statement(self, items: List[Any]) -> SyntaxNode:
        """Transform ``for (var key in object)`` and ``for (key in object)``."""
        *head, right, body = items
        left = self._identifier(head[-1])
        if len(head) == 2:
            declarator = self._spanning(
                "VariableDeclarator", {"id": left, "init": None}, [left]
            )
            left = self._spanning(
                "VariableDeclaration",
                {"declarations": [declarator], "kind": head[0].value},
                head,
            )
        return self._spanning(
            "ForInStatement", {"left": left, "right": right, "body": body}, [left, right, body]
        )

    def break_statement(self, items: List[Any]) -> SyntaxNode:
        return SyntaxNode("BreakStatement", {"label": None})

    def continue_statement(self, items: List[Any]) -> SyntaxNode:
        return SyntaxNode("ContinueStatement", {"label": None})

    def throw_statement(self, items: List[Any]) -> SyntaxNode:
        return self._spanning("ThrowStatement", {"argument": items[0]}, items)

    def try_statement(self, items: List[Any]) -> SyntaxNode:
        """Transform ``try`` with a ``catch`` clause, a ``finally`` block or both."""
        block, *rest = items
        handler = next((item for item in rest if item.kind == "CatchClause"), None)
        finalizer = next((item for item in rest if item.kind == "BlockStatement"), None)
        return self._spanning(
            "TryStatement",
            {"block": block, "handler": handler, "finalizer": finalizer},
            items,
        )

    def catch_clause(self, items: List[Any]) -> SyntaxNode:
        param = self._identifier(items[0])
        return self._spanning("CatchClause", {"param": param, "body": items[1]}, [param, items[1]])

    def finally_clause(self, items: List[Any]) -> SyntaxNode:
        return items[0]

    # ===== Declarations =====

    def declaration_kind(self, items: List[Token]) -> Token:
        return items[0]

    def variable_declaration(self, items: List[Any]) -> SyntaxNode:
        return items[0]

    def declarations(self, items: List[Any]) -> SyntaxNode:
        """Transform ``var``/``let``/``const`` declaration."""
        kind_token = items[0]
        declarations = items[1:]
        return self._spanning(
            "VariableDeclaration",
            {"declarations": declarations, "kind": kind_token.value},
            items,
        )

    def variable_declarator(self, items: List[Any]) -> SyntaxNode:
        identifier = self._identifier(items[0])
        init = items[1] if len(items) > 1 else None
        return self._spanning(
            "VariableDeclarator", {"id": identifier, "init": init}, [identifier, init]
        )

    def params(self, items: List[Token]) -> List[SyntaxNode]:
        return [self._identifier(token) for token in items]

    def function_declaration(self, items: List[Any]) -> SyntaxNode:
        """Transform named function declaration."""
        return self._function("FunctionDeclaration", items)

    def function_expression(self, items: List[Any]) -> SyntaxNode:
        """Transform (optionally named) function expression."""
        return self._function("FunctionExpression", items)

    def _function(self, kind: str, items: List[Any]) -> SyntaxNode:
        identifier = None
        params: List[SyntaxNode] = []
        body = items[-1]
        for item in items[:-1]:
            if isinstance(item, Token):
                identifier = self._identifier(item)
            elif isinstance(item, list):
                params = item
        return self._spanning(
            kind,
            {"id": identifier, "params": params, "body": body},
            [identifier, *params, body],
        )

    # ===== Expressions =====

    def assignment_expression(self, items: List[Any]) -> SyntaxNode:
        """Transform ``=`` and compound (``+=``, ``-=`` ...) assignment."""
        left, right = items[0], items[-1]
        operator = items[1].value if len(items) == 3 else "="
        return self._spanning(
            "AssignmentExpression", {"operator": operator, "left": left, "right": right}, items
        )

    def conditional_expression(self, items: List[Any]) -> SyntaxNode:
        test, consequent, alternate = items
        return self._spanning(
            "ConditionalExpression",
            {"test": test, "consequent": consequent, "alternate": alternate},
            items,
        )

    def logical_expression(self, items: List[Any]) -> SyntaxNode:
        left, operator, right = items
        return self._spanning(
            "LogicalExpression",
            {"operator": operator.value, "left": left, "right": right},
            items,
        )

    def unary_operator(self, items: List[Token]) -> Token:
        return items[0]

    def unary_expression(self, items: List[Any]) -> SyntaxNode:
        """Transform prefix operators such as ``!``, ``-`` and ``typeof``."""
        operator, argument = items
        return self._spanning(
            "UnaryExpression",
            {"operator": operator.value, "prefix": True, "argument": argument},
            items,
        )

    def update_prefix(self, items: List[Any]) -> SyntaxNode:
        operator, argument = items
        return self._spanning(
            "UpdateExpression",
            {"operator": operator.value, "prefix": True, "argument": argument},
            items,
        )

    def update_postfix(self, items: List[Any]) -> SyntaxNode:
        argument, operator = items
        return self._spanning(
            "UpdateExpression",
            {"operator": operator.value, "prefix": False, "argument": argument},
            items,
        )

    def binary_expression(self, items: List[Any]) -> SyntaxNode:
        left, operator, right = items
        return self._spanning(
            "BinaryExpression",
            {"operator": operator.value, "left": left, "right": right},
            items,
        )

    def member(self, items: List[Any]) -> SyntaxNode:
        """Transform ``object.property`` access."""
        obj, name = items
        prop = self._identifier(name)
        return self._spanning(
            "MemberExpression",
            {"object": obj, "property": prop, "computed": False},
            [obj, prop],
        )

    def computed_member(self, items: List[Any]) -> SyntaxNode:
        """Transform ``object[expression]`` access."""
        obj, prop = items
        return self._spanning(
            "MemberExpression",
            {"object": obj, "property": prop, "computed": True},
            items,
        )

    def arguments(self, items: List[Any]) -> List[SyntaxNode]:
        return [item for item in items if item is not None]

    def call(self, items: List[Any]) -> SyntaxNode:
        callee, args = items
        return self._spanning(
            "CallExpression", {"callee": callee, "arguments": args}, [callee, *args]
        )

    def new_call(self, items: List[Any]) -> SyntaxNode:
        """Transform ``new Callee(args)``."""
        callee, args = items
        return self._spanning(
            "NewExpression", {"callee": callee, "arguments": args}, [callee, *args]
        )

    def new_bare(self, items: List[Any]) -> SyntaxNode:
        """Transform ``new Callee`` without an argument list."""
        callee = items[0]
        return self._spanning("NewExpression", {"callee": callee, "arguments": []}, items)

    # ===== Literals =====

    def identifier(self, items: List[Token]) -> SyntaxNode:
        """Transform identifier reference."""
        return self._identifier(items[0])

    def this_expression(self, items: List[Token]) -> SyntaxNode:
        return self._assign_position(SyntaxNode("ThisExpression", {}), items[0])

    def number(self, items: List[Token]) -> SyntaxNode:
        """Transform number literal."""
        raw = items[0].value
        value = float(raw) if any(c in raw for c in ".eE") else int(raw)
        return self._assign_position(SyntaxNode("Literal", {"value": value, "raw": raw}), items[0])

    def string(self, items: List[Token]) -> SyntaxNode:
        """Transform string literal."""
        raw = items[0].value
        # Remove quotes from string
        return self._assign_position(
            SyntaxNode("Literal", {"value": raw[1:-1], "raw": raw}), items[0]
        )

    def boolean(self, items: List[Token]) -> SyntaxNode:
        raw = items[0].value
        return self._assign_position(
            SyntaxNode("Literal", {"value": raw == "true", "raw": raw}), items[0]
        )

    def null(self, items: List[Token]) -> SyntaxNode:
        return self._assign_position(SyntaxNode("Literal", {"value": None, "raw": "null"}), items[0])

    def array_literal(self, items: List[Any]) -> SyntaxNode:
        elements = [item for item in items if item is not None]
        return self._spanning("ArrayExpression", {"elements": elements}, elements)

    def object_literal(self, items: List[Any]) -> SyntaxNode:
        properties = [item for item in items if item is not None]
        return self._spanning("ObjectExpression", {"properties": properties}, properties)

    def object_property(self, items: List[Any]) -> SyntaxNode:
        key, value = items
        return self._spanning(
            "Property",
            {"key": key, "value": value, "kind": "init", "computed": False},
            items,
        )
