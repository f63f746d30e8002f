"""
Prints Lockset AST nodes back as canonical Lockset source code.

This module defines the `SourceEmitter` class, the printer used for formatting
and for round-tripping: parsing its output yields a tree structurally identical
to the one it was given.

Layout:
    - One statement per line, four spaces of indentation per block level.
    - Declarations end with `;`; expression statements take no terminator.
    - `else if` chains are folded onto the closing brace of the previous block.

Parenthesization:
    Each node kind has a binding level on the precedence ladder
    (assignment < object < additive < multiplicative < call/member < primary).
    A sub-expression is wrapped in parentheses only when its level is lower
    than the position it occupies requires. Equality comparisons are always
    printed inside their own parentheses, the only place the grammar accepts them.

Raises:
    - `TypeError`: If a non-computed member access has a non-identifier property.
    - `ValueError`: If a numeric literal is not finite.
    - `NotImplementedError`: If a node kind has no emitter.
"""

import re
from decimal import Decimal

from lockset.lockset_ast import (
    AssignmentExpr,
    ASTNode,
    BinaryExpr,
    CallExpr,
    EqualityExpr,
    FunctionDeclaration,
    Identifier,
    IfStmt,
    MemberExpr,
    NumericLiteral,
    ObjectLiteral,
    Program,
    Property,
    StringLiteral,
    VarDeclaration,
)
from lockset.lockset_constants import additive_operators

ASSIGNMENT = 0
OBJECT = 1
ADDITIVE = 2
MULTIPLICATIVE = 3
CALL_MEMBER = 4
PRIMARY = 5

EQUALITY_SYMBOLS = {"DOUBLE_EQUALS": "==", "NOT_EQUALS": "!="}


def snake_kind(kind: str) -> str:
    """`VarDeclaration` -> `var_declaration`."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", kind).lower()


def binding_level(node: ASTNode) -> int:
    if isinstance(node, AssignmentExpr):
        return ASSIGNMENT
    if isinstance(node, ObjectLiteral):
        return OBJECT
    if isinstance(node, BinaryExpr):
        return ADDITIVE if node.operator in additive_operators else MULTIPLICATIVE
    if isinstance(node, (CallExpr, MemberExpr)):
        return CALL_MEMBER
    return PRIMARY


def _has_unescaped(text: str, quote: str) -> bool:
    i = 0
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote:
            return True
        i += 1
    return False


class SourceEmitter:
    """Emits Lockset source code from Lockset AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted source.
        indent (int): Current indentation level for emitted blocks.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    # --- Expressions ---

    def emit_expr(self, node: ASTNode, level: int = ASSIGNMENT) -> str:
        """
        Emits an expression, parenthesized if it binds looser than `level`.

        Parameters
        ----------
        node : ASTNode
            The expression node to emit.
        level : int
            The minimum binding level required at this position.

        Returns
        -------
        str
            The Lockset source for the expression.
        """
        method = getattr(self, f"emit_expr_{snake_kind(node.kind)}", None)
        if method is None:
            raise NotImplementedError(f"No expression emitter for '{node.kind}'")
        text: str = method(node)
        if binding_level(node) < level:
            return f"({text})"
        return text

    def emit_expr_assignment_expr(self, node: AssignmentExpr) -> str:
        target = self.emit_expr(node.assigne, OBJECT)
        return f"{target} = {self.emit_expr(node.value, ASSIGNMENT)}"

    def emit_expr_object_literal(self, node: ObjectLiteral) -> str:
        if not node.properties:
            return "{}"
        return "{ " + ", ".join(self.emit_property(p) for p in node.properties) + " }"

    def emit_property(self, node: Property) -> str:
        if node.value is None:
            return node.key
        return f"{node.key}: {self.emit_expr(node.value)}"

    def emit_expr_binary_expr(self, node: BinaryExpr) -> str:
        own = binding_level(node)
        left = self.emit_expr(node.left, own)
        right = self.emit_expr(node.right, own + 1)
        return f"{left} {node.operator} {right}"

    def emit_expr_equality_expr(self, node: EqualityExpr) -> str:
        op = EQUALITY_SYMBOLS[node.operator]
        return f"({self.emit_expr(node.left)} {op} {self.emit_expr(node.right)})"

    def emit_expr_call_expr(self, node: CallExpr) -> str:
        caller = self.emit_expr(node.caller, CALL_MEMBER)
        args = ", ".join(self.emit_expr(arg) for arg in node.args)
        return f"{caller}({args})"

    def emit_expr_member_expr(self, node: MemberExpr) -> str:
        obj = self.emit_expr(node.object, CALL_MEMBER)
        if node.computed:
            return f"{obj}[{self.emit_expr(node.property)}]"
        if not isinstance(node.property, Identifier):
            raise TypeError("Non-computed member access requires an Identifier property")
        if isinstance(node.object, NumericLiteral):
            # `1.x` would lex as the number `1.` followed by `x`
            obj = f"({obj})"
        return f"{obj}.{node.property.symbol}"

    def emit_expr_identifier(self, node: Identifier) -> str:
        return node.symbol

    def emit_expr_numeric_literal(self, node: NumericLiteral) -> str:
        value = float(node.value)
        if value != value or value in (float("inf"), float("-inf")):
            raise ValueError(f"Cannot emit non-finite number: {value}")
        if value.is_integer():
            return str(int(value))
        # repr is the shortest round-tripping form; Decimal drops the exponent
        return format(Decimal(repr(value)), "f")

    def emit_expr_string_literal(self, node: StringLiteral) -> str:
        quote = "'" if _has_unescaped(node.value, '"') else '"'
        return f"{quote}{node.value}{quote}"

    # --- Statements ---

    def _visit(self, node: ASTNode) -> None:
        method = getattr(self, f"emit_{snake_kind(node.kind)}", None)
        if method is None:
            raise NotImplementedError(f"No emitter method for node kind '{node.kind}'")
        method(node)

    def _emit_block(self, body: tuple[ASTNode, ...]) -> None:
        self.indent += 1
        for stmt in body:
            self._visit(stmt)
        self.indent -= 1

    def emit_program(self, node: Program) -> None:
        for stmt in node.body:
            self._visit(stmt)

    def emit_var_declaration(self, node: VarDeclaration) -> None:
        keyword = "lock" if node.constant else "set"
        if node.value is None:
            self.lines.append(f"{self.indent_str()}{keyword} {node.identifier};")
            return
        value = self.emit_expr(node.value)
        self.lines.append(f"{self.indent_str()}{keyword} {node.identifier} = {value};")

    def emit_function_declaration(self, node: FunctionDeclaration) -> None:
        params = ", ".join(node.parameters)
        self.lines.append(f"{self.indent_str()}fun {node.name}({params}) {{")
        self._emit_block(node.body)
        self.lines.append(f"{self.indent_str()}}}")

    def emit_if_stmt(self, node: IfStmt, prefix: str = "") -> None:
        cond = self.emit_expr(node.conditional)
        self.lines.append(f"{self.indent_str()}{prefix}if {cond} {{")
        self._emit_block(node.consequent)

        alternate = node.alternate
        if alternate is None:
            self.lines.append(f"{self.indent_str()}}}")
        elif len(alternate) == 1 and isinstance(alternate[0], IfStmt):
            self.emit_if_stmt(alternate[0], prefix="} else ")
        else:
            self.lines.append(f"{self.indent_str()}}} else {{")
            self._emit_block(alternate)
            self.lines.append(f"{self.indent_str()}}}")

    def emit_expression_statement(self, node: ASTNode) -> None:
        self.lines.append(f"{self.indent_str()}{self.emit_expr(node)}")

    emit_assignment_expr = emit_expression_statement
    emit_object_literal = emit_expression_statement
    emit_binary_expr = emit_expression_statement
    emit_equality_expr = emit_expression_statement
    emit_call_expr = emit_expression_statement
    emit_member_expr = emit_expression_statement
    emit_identifier = emit_expression_statement
    emit_numeric_literal = emit_expression_statement
    emit_string_literal = emit_expression_statement
