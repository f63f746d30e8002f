"""
Lockset Language Parser

Parses Lockset source text (or a pre-built token list) into a `Program` AST.

This module implements a recursive-descent parser with one token of lookahead
and no backtracking. Expressions are parsed by precedence climbing: each level
of the ladder is one method that descends into the next tighter-binding level.

Grammar
-------
    program      := stmt* EOF
    stmt         := var_decl | fun_decl | if_stmt | expr
    var_decl     := ("set" | "lock") IDENT (";" | "=" expr ";")
    fun_decl     := "fun" IDENT args "{" stmt* "}"
    if_stmt      := "if" expr "{" stmt* "}" ("else" (if_stmt | "{" stmt* "}"))?
    expr         := assignment
    assignment   := object ("=" assignment)?
    object       := "{" (IDENT ((":" expr)? ","?))* "}" | additive
    additive     := multiplicative (("+" | "-") multiplicative)*
    multiplicative := call_member (("*" | "/" | "%") call_member)*
    call_member  := member (args (args | member_tail)*)?
    member       := primary member_tail
    member_tail  := ("." IDENT | "[" expr "]")*
    primary      := IDENT | NUMBER | STRING | "(" expr (("==" | "!=") expr)? ")"
    args         := "(" (assignment ("," assignment)*)? ")"

Equality comparisons are only reachable inside a parenthesized primary, so a
conditional is written `if (a == b) { ... }`. Expression statements take no
terminator. The left-hand side of an assignment is not restricted; whether it
is a valid target is decided at evaluation time.

Entry Points
------------
- `Parser.parse(source)`: Tokenize and parse a full program.
- `Parser.parse_tokens(tokens)`: Parse an EOF-terminated token list.
- `parse(source)`: Module-level shortcut for `Parser().parse(source)`.

Raises
------
UnexpectedTokenError
    A specific token type was required and a different one was found
    (unbalanced delimiters, missing semicolons or colons, a non-identifier
    after `.`, an unexpected token in expression position).
DeclarationError
    A declaration is well formed but invalid (`lock` without a value,
    a function parameter that is not a plain name).
ParseError
    A numeric literal too large to hold as a finite float.

Parsing stops at the first error; no partial tree is returned.
"""

from __future__ import annotations

import math

from lockset.lockset_ast import (
    AssignmentExpr,
    BinaryExpr,
    CallExpr,
    EqualityExpr,
    Expr,
    FunctionDeclaration,
    Identifier,
    IfStmt,
    MemberExpr,
    NumericLiteral,
    ObjectLiteral,
    Program,
    Property,
    Stmt,
    StringLiteral,
    VarDeclaration,
)
from lockset.lockset_constants import (
    additive_operators,
    equality_tokens,
    multiplicative_operators,
)
from lockset.lockset_lexer import Token, tokenize


class ParseError(SyntaxError):
    """Base class for all Lockset parse failures.

    Attributes:
        message (str): Human-readable description of the failure.
        token (Token | None): The offending token, when one exists.
    """

    def __init__(self, message: str, token: Token | None = None):
        super().__init__(message)
        self.message = message
        self.token = token

    def __str__(self) -> str:
        if self.token is None:
            return self.message
        return f"{self.message} (got {_describe(self.token)})"


class UnexpectedTokenError(ParseError):
    """A required token type was not the next token.

    Attributes:
        expected (str): The token type or construct that was required.
    """

    def __init__(self, expected: str, token: Token, message: str):
        super().__init__(message, token)
        self.expected = expected

    def __str__(self) -> str:
        return f"{self.message} (expected {self.expected}, got {_describe(self.token)})"


class DeclarationError(ParseError):
    """A structurally well-formed declaration that is semantically invalid."""


def _describe(token: Token | None) -> str:
    if token is None:  # pragma: no cover
        return "nothing"
    return f"{token.type} {token.value!r} at line {token.line}, col {token.col}"


class Parser:
    """
    Lockset Parser Class

    Turns an EOF-terminated token list into a `Program`. The instance keeps
    only its token buffer and cursor, both replaced on every call to
    `parse()` or `parse_tokens()`; one instance must not be shared by
    concurrent parses.

    Attributes
    ----------
    tokens : list[Token]
        The token buffer of the current parse.
    position : int
        Index of the next unconsumed token.
    """

    def __init__(self) -> None:
        self.tokens: list[Token] = []
        self.position: int = 0

    # --- Token cursor ---

    def peek(self, offset: int = 0) -> Token:
        index = self.position + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def advance(self) -> Token:
        tok = self.peek()
        if self.position < len(self.tokens) - 1:
            self.position += 1
        return tok

    def expect(self, type_: str, message: str) -> Token:
        """Consume the next token, raising if it is not of type `type_`."""
        tok = self.advance()
        if tok.type != type_:
            raise UnexpectedTokenError(type_, tok, message)
        return tok

    def not_eof(self) -> bool:
        return self.peek().type != "EOF"

    # --- Entry points ---

    def parse(self, source: str) -> Program:
        """Tokenize `source` and parse it into a Program."""
        return self.parse_tokens(tokenize(source))

    def parse_tokens(self, tokens: list[Token]) -> Program:
        """Parse an EOF-terminated token list into a Program."""
        if not tokens or tokens[-1].type != "EOF":
            raise ParseError("token stream must end with an EOF token")
        self.tokens = list(tokens)
        self.position = 0

        body: list[Stmt] = []
        while self.not_eof():
            body.append(self.parse_stmt())
        return Program(tuple(body))

    # --- Statements ---

    def parse_stmt(self) -> Stmt:
        tok_type = self.peek().type
        if tok_type in ("SET", "LOCK"):
            return self.parse_var_declaration()
        if tok_type == "FUN":
            return self.parse_fn_declaration()
        if tok_type == "IF":
            return self.parse_if_stmt()
        return self.parse_expr()

    def parse_block(self, what: str) -> tuple[Stmt, ...]:
        """Parse `{ stmt* }`; `what` names the block in error messages."""
        self.expect("LBRACE", f"Expected opening brace for {what}.")
        body: list[Stmt] = []
        while self.not_eof() and self.peek().type != "RBRACE":
            body.append(self.parse_stmt())
        self.expect("RBRACE", f"Expected closing brace for {what}.")
        return tuple(body)

    def parse_var_declaration(self) -> VarDeclaration:
        is_constant = self.advance().type == "LOCK"
        name_tok = self.expect(
            "IDENT", "Expected identifier name following set | lock keywords."
        )

        if self.peek().type == "SEMICOLON":
            self.advance()
            if is_constant:
                raise DeclarationError("constant requires a value", name_tok)
            return VarDeclaration(name_tok.value, constant=False)

        self.expect(
            "EQUALS", "Expected equals token following identifier in var declaration."
        )
        value = self.parse_expr()
        self.expect(
            "SEMICOLON", "Variable declaration statement must end with semicolon."
        )
        return VarDeclaration(name_tok.value, constant=is_constant, value=value)

    def parse_fn_declaration(self) -> FunctionDeclaration:
        self.advance()  # fun
        name = self.expect(
            "IDENT", "Expected function name following fun keyword."
        ).value

        params: list[str] = []
        for start_tok, arg in self.parse_located_args():
            if not isinstance(arg, Identifier):
                raise DeclarationError("function parameters must be names", start_tok)
            params.append(arg.symbol)

        body = self.parse_block("function body")
        return FunctionDeclaration(name, tuple(params), body)

    def parse_if_stmt(self) -> IfStmt:
        self.expect("IF", 'Expected "if" keyword.')
        conditional = self.parse_expr()
        consequent = self.parse_block("consequent block")

        alternate: tuple[Stmt, ...] | None = None
        if self.peek().type == "ELSE":
            self.advance()
            if self.peek().type == "IF":
                alternate = (self.parse_if_stmt(),)
            else:
                alternate = self.parse_block("alternate block")

        return IfStmt(conditional, consequent, alternate)

    # --- Expressions ---

    def parse_expr(self) -> Expr:
        return self.parse_assignment_expr()

    def parse_assignment_expr(self) -> Expr:
        left = self.parse_object_expr()

        if self.peek().type == "EQUALS":
            self.advance()
            value = self.parse_assignment_expr()
            return AssignmentExpr(assigne=left, value=value)

        return left

    def parse_object_expr(self) -> Expr:
        if self.peek().type != "LBRACE":
            return self.parse_additive_expr()

        self.advance()  # {
        properties: list[Property] = []

        while self.not_eof() and self.peek().type != "RBRACE":
            key = self.expect("IDENT", "Object literal key expected.").value

            # shorthand: { key, } and { key }
            if self.peek().type == "COMMA":
                self.advance()
                properties.append(Property(key))
                continue
            if self.peek().type == "RBRACE":
                properties.append(Property(key))
                continue

            self.expect("COLON", "Missing colon following identifier in object literal.")
            value = self.parse_expr()
            properties.append(Property(key, value))

            if self.peek().type != "RBRACE":
                self.expect(
                    "COMMA", "Expected comma or closing brace following property."
                )

        self.expect("RBRACE", "Object literal missing closing brace.")
        return ObjectLiteral(tuple(properties))

    def _at_operator(self, operators: tuple[str, ...]) -> bool:
        tok = self.peek()
        # BINARY_OP excludes EOF, and guards against STRING tokens whose value is "+"
        return tok.type == "BINARY_OP" and tok.value in operators

    def parse_additive_expr(self) -> Expr:
        left = self.parse_multiplicative_expr()

        while self._at_operator(additive_operators):
            operator = self.advance().value
            right = self.parse_multiplicative_expr()
            left = BinaryExpr(left, right, operator)

        return left

    def parse_multiplicative_expr(self) -> Expr:
        left = self.parse_call_member_expr()

        while self._at_operator(multiplicative_operators):
            operator = self.advance().value
            right = self.parse_call_member_expr()
            left = BinaryExpr(left, right, operator)

        return left

    def parse_call_member_expr(self) -> Expr:
        member = self.parse_member_expr()

        if self.peek().type == "LPAREN":
            return self.parse_call_expr(member)

        return member

    def parse_call_expr(self, caller: Expr) -> Expr:
        expr: Expr = CallExpr(caller, tuple(self.parse_args()))

        # a.b(1)[2], f().x
        if self.peek().type in ("DOT", "LBRACK"):
            expr = self.parse_member_tail(expr)

        if self.peek().type == "LPAREN":
            return self.parse_call_expr(expr)

        return expr

    def parse_args(self) -> list[Expr]:
        return [arg for _, arg in self.parse_located_args()]

    def parse_located_args(self) -> list[tuple[Token, Expr]]:
        """Parse `( arg, ... )`, pairing each argument with its first token."""
        self.expect("LPAREN", "Expected open parenthesis.")
        args: list[tuple[Token, Expr]] = []

        if self.peek().type != "RPAREN":
            args.append((self.peek(), self.parse_assignment_expr()))
            while self.peek().type == "COMMA":
                self.advance()
                args.append((self.peek(), self.parse_assignment_expr()))

        self.expect("RPAREN", "Missing closing parenthesis inside arguments list.")
        return args

    def parse_member_expr(self) -> Expr:
        return self.parse_member_tail(self.parse_primary_expr())

    def parse_member_tail(self, obj: Expr) -> Expr:
        """Extend `obj` with any chain of `.name` and `[expr]` accesses."""
        while self.peek().type in ("DOT", "LBRACK"):
            operator = self.advance()

            if operator.type == "DOT":
                name_tok = self.expect("IDENT", "dot operator requires identifier")
                obj = MemberExpr(obj, Identifier(name_tok.value), computed=False)
            else:
                prop = self.parse_expr()
                self.expect("RBRACK", "Missing closing bracket in computed value.")
                obj = MemberExpr(obj, prop, computed=True)

        return obj

    def parse_primary_expr(self) -> Expr:
        tok = self.peek()

        if tok.type == "IDENT":
            return Identifier(self.advance().value)
        if tok.type == "NUMBER":
            number = float(self.advance().value)
            if not math.isfinite(number):
                raise ParseError("Numeric literal is too large", tok)
            return NumericLiteral(number)
        if tok.type == "STRING":
            return StringLiteral(self.advance().value)
        if tok.type == "LPAREN":
            self.advance()
            left = self.parse_expr()
            value: Expr = left
            if self.peek().type in equality_tokens:
                operator = self.advance().type
                right = self.parse_expr()
                value = EqualityExpr(left, operator, right)
            self.expect(
                "RPAREN",
                "Unexpected token found inside parenthesised expression. Expected closing parenthesis.",
            )
            return value

        raise UnexpectedTokenError(
            "expression", tok, "Unexpected token found during parsing."
        )


def parse(source: str) -> Program:
    """Parse Lockset source text into a Program."""
    return Parser().parse(source)


__all__ = [
    "DeclarationError",
    "ParseError",
    "Parser",
    "UnexpectedTokenError",
    "parse",
]
