"""
Token vocabulary for the Lockset language.

Exports:
    KEYWORD_TOKENS: Reserved words mapped to their token types.
    SYMBOL_TOKENS: Punctuation and operator lexemes mapped to their token types.
    token_hashmap: Union of both tables, used by the lexer for longest-match lookup.
    binary_operators: Arithmetic operator lexemes carried by `BINARY_OP` tokens.
    TOKEN_TYPES: The closed set of token types the lexer can produce.
"""

KEYWORD_TOKENS: dict[str, str] = {
    "set": "SET",
    "lock": "LOCK",
    "fun": "FUN",
    "if": "IF",
    "else": "ELSE",
}

SYMBOL_TOKENS: dict[str, str] = {
    "{": "LBRACE",
    "}": "RBRACE",
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACK",
    "]": "RBRACK",
    ".": "DOT",
    ",": "COMMA",
    ":": "COLON",
    ";": "SEMICOLON",
    "=": "EQUALS",
    "==": "DOUBLE_EQUALS",
    "!=": "NOT_EQUALS",
    "+": "BINARY_OP",
    "-": "BINARY_OP",
    "*": "BINARY_OP",
    "/": "BINARY_OP",
    "%": "BINARY_OP",
}

token_hashmap: dict[str, str] = {**KEYWORD_TOKENS, **SYMBOL_TOKENS}

additive_operators: tuple[str, ...] = ("+", "-")
multiplicative_operators: tuple[str, ...] = ("*", "/", "%")
binary_operators: tuple[str, ...] = additive_operators + multiplicative_operators

equality_tokens: tuple[str, ...] = ("DOUBLE_EQUALS", "NOT_EQUALS")

TOKEN_TYPES: frozenset[str] = frozenset(token_hashmap.values()) | {
    "IDENT",
    "NUMBER",
    "STRING",
    "ERROR",
    "EOF",
}

__all__ = [
    "KEYWORD_TOKENS",
    "SYMBOL_TOKENS",
    "TOKEN_TYPES",
    "additive_operators",
    "binary_operators",
    "equality_tokens",
    "multiplicative_operators",
    "token_hashmap",
]
