"""
Defines the abstract syntax tree (AST) node kinds for the Lockset scripting language.

Every node is an immutable dataclass carrying a `kind` discriminant plus its
kind-specific fields. Child sequences are stored as tuples, so a tree handed to
a caller can never be changed underneath it.

Statements:
    Program, VarDeclaration, FunctionDeclaration, IfStmt

Expressions:
    AssignmentExpr, ObjectLiteral (with Property entries), BinaryExpr,
    EqualityExpr, CallExpr, MemberExpr, Identifier, NumericLiteral, StringLiteral

Serialization:
    `ASTNode.to_dict()` converts a node and all descendants into plain
    dictionaries (`{"kind": ..., <field>: ...}`), suitable for JSON output or
    debugging. Unset optional fields serialize as None.

Example:
    node = VarDeclaration("x", constant=True, value=NumericLiteral(1.0))
"""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Union

ASTDict = dict[str, Any]
"""Plain-dictionary form of a node, as returned by `ASTNode.to_dict()`."""


@dataclasses.dataclass(frozen=True)
class ASTNode:
    """Base class for all Lockset AST nodes.

    Subclasses set the `kind` class attribute, which downstream consumers
    (emitters, evaluators) dispatch on.
    """

    kind: ClassVar[str] = "Node"

    def to_dict(self) -> ASTDict:
        out: ASTDict = {"kind": self.kind}
        for field in dataclasses.fields(self):
            out[field.name] = _serialize(getattr(self, field.name))
        return out


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


# --- Statements ---


@dataclasses.dataclass(frozen=True)
class Program(ASTNode):
    """Whole-file root: the ordered top-level statements."""

    kind: ClassVar[str] = "Program"
    body: tuple[Stmt, ...] = ()


@dataclasses.dataclass(frozen=True)
class VarDeclaration(ASTNode):
    """`set name;`, `set name = value;` or `lock name = value;`."""

    kind: ClassVar[str] = "VarDeclaration"
    identifier: str
    constant: bool
    value: Expr | None = None


@dataclasses.dataclass(frozen=True)
class FunctionDeclaration(ASTNode):
    kind: ClassVar[str] = "FunctionDeclaration"
    name: str
    parameters: tuple[str, ...]
    body: tuple[Stmt, ...]


@dataclasses.dataclass(frozen=True)
class IfStmt(ASTNode):
    """Conditional branch.

    `alternate` is None when there is no `else`; for `else if` it holds a
    single nested IfStmt.
    """

    kind: ClassVar[str] = "IfStmt"
    conditional: Expr
    consequent: tuple[Stmt, ...]
    alternate: tuple[Stmt, ...] | None = None


# --- Expressions ---


@dataclasses.dataclass(frozen=True)
class AssignmentExpr(ASTNode):
    """`assigne = value`. The target is not restricted at parse time."""

    kind: ClassVar[str] = "AssignmentExpr"
    assigne: Expr
    value: Expr


@dataclasses.dataclass(frozen=True)
class Property(ASTNode):
    """Object literal entry. A shorthand entry (`{ key }`) has no value."""

    kind: ClassVar[str] = "Property"
    key: str
    value: Expr | None = None


@dataclasses.dataclass(frozen=True)
class ObjectLiteral(ASTNode):
    kind: ClassVar[str] = "ObjectLiteral"
    properties: tuple[Property, ...] = ()


@dataclasses.dataclass(frozen=True)
class BinaryExpr(ASTNode):
    """Arithmetic operation; `operator` is one of `+ - * / %`."""

    kind: ClassVar[str] = "BinaryExpr"
    left: Expr
    right: Expr
    operator: str


@dataclasses.dataclass(frozen=True)
class EqualityExpr(ASTNode):
    """Equality comparison; `operator` is the token type DOUBLE_EQUALS or NOT_EQUALS."""

    kind: ClassVar[str] = "EqualityExpr"
    left: Expr
    operator: str
    right: Expr


@dataclasses.dataclass(frozen=True)
class CallExpr(ASTNode):
    kind: ClassVar[str] = "CallExpr"
    caller: Expr
    args: tuple[Expr, ...] = ()


@dataclasses.dataclass(frozen=True)
class MemberExpr(ASTNode):
    """`object.property` (computed=False) or `object[property]` (computed=True)."""

    kind: ClassVar[str] = "MemberExpr"
    object: Expr
    property: Expr
    computed: bool


@dataclasses.dataclass(frozen=True)
class Identifier(ASTNode):
    kind: ClassVar[str] = "Identifier"
    symbol: str


@dataclasses.dataclass(frozen=True)
class NumericLiteral(ASTNode):
    kind: ClassVar[str] = "NumericLiteral"
    value: float


@dataclasses.dataclass(frozen=True)
class StringLiteral(ASTNode):
    """String constant; escape sequences are kept exactly as written."""

    kind: ClassVar[str] = "StringLiteral"
    value: str


Expr = Union[
    AssignmentExpr,
    ObjectLiteral,
    BinaryExpr,
    EqualityExpr,
    CallExpr,
    MemberExpr,
    Identifier,
    NumericLiteral,
    StringLiteral,
]

Stmt = Union[VarDeclaration, FunctionDeclaration, IfStmt, Expr]

__all__ = [
    "ASTDict",
    "ASTNode",
    "AssignmentExpr",
    "BinaryExpr",
    "CallExpr",
    "EqualityExpr",
    "Expr",
    "FunctionDeclaration",
    "Identifier",
    "IfStmt",
    "MemberExpr",
    "NumericLiteral",
    "ObjectLiteral",
    "Program",
    "Property",
    "Stmt",
    "StringLiteral",
    "VarDeclaration",
]
