"""
Tokenizer for Lockset source text.

`Lexer` pulls characters from a `CharacterStream` and yields `Token` objects;
`tokenize` drains it into a list that always ends with a single EOF token.
Whitespace and `#` comments are skipped. Characters the language does not
know become `ERROR` tokens so the parser can report them with a position.

Raises:
    SyntaxError: On a number with two decimal points or an unterminated string.

Example:
    >>> tokenize("lock x = 1;")[0]
    Token(LOCK, lock)
"""

import string
from typing import Any

from lockset.lockset_constants import KEYWORD_TOKENS, SYMBOL_TOKENS, token_hashmap

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_PART = IDENT_START | frozenset(string.digits)
DIGITS = frozenset(string.digits)
QUOTES = ('"', "'")
WHITESPACE = frozenset(" \t\r\n")
SYMBOL_LENGTHS = sorted({len(symbol) for symbol in SYMBOL_TOKENS}, reverse=True)


class CharacterStream:
    """Cursor over a source string that tracks 1-based line and column."""

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        if self.end_of_file():
            raise EOFError(
                f"read past end of source (position {self.position}, line {self.line})"
            )
        char = self.source[self.position]
        self.position += 1
        if char == "\n":
            self.line, self.column = self.line + 1, 1
        else:
            self.column += 1
        return char

    def peek(self) -> str:
        """The current character, or "" at end of input."""
        return self.source[self.position] if not self.end_of_file() else ""

    def lookahead(self, size: int) -> str:
        return self.source[self.position : self.position + size]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """A lexeme with its type and the line/column where it starts."""

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def _key(self) -> tuple[str, str, int, int]:
        return (self.type, self.value, self.line, self.col)

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Token) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class Lexer:
    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def _take_while(self, accept: frozenset[str]) -> str:
        text = ""
        while self.stream.peek() in accept:
            text += self.stream.next()
        return text

    def skip_trivia(self) -> None:
        """Skip whitespace and `#` comments up to the next lexeme."""
        while not self.stream.end_of_file():
            ch = self.stream.peek()
            if ch in WHITESPACE:
                self.stream.next()
            elif ch == "#":
                while not self.stream.end_of_file() and self.stream.peek() != "\n":
                    self.stream.next()
            else:
                return

    def read_word(self, line: int, col: int) -> Token:
        word = self._take_while(IDENT_PART)
        return Token(KEYWORD_TOKENS.get(word, "IDENT"), word, line, col)

    def read_number(self, line: int, col: int) -> Token:
        text = self._take_while(DIGITS)
        if self.stream.peek() == ".":
            text += self.stream.next() + self._take_while(DIGITS)
            if self.stream.peek() == ".":
                raise SyntaxError(f"Invalid number format at line {line}, col {col}")
        return Token("NUMBER", text, line, col)

    def read_string(self, line: int, col: int) -> Token:
        # Escapes stay in the value as written; only the closing quote is special.
        quote = self.stream.next()
        text = ""
        while not self.stream.end_of_file():
            ch = self.stream.next()
            if ch == quote:
                return Token("STRING", text, line, col)
            text += ch
            if ch == "\\" and not self.stream.end_of_file():
                text += self.stream.next()
        raise SyntaxError(f"Unterminated string at line {line}, col {col}")

    def read_symbol(self, line: int, col: int) -> Token | None:
        """Longest lexeme from the symbol table at the cursor, if any."""
        for size in SYMBOL_LENGTHS:
            candidate = self.stream.lookahead(size)
            if candidate in SYMBOL_TOKENS:
                for _ in candidate:
                    self.stream.next()
                return Token(SYMBOL_TOKENS[candidate], candidate, line, col)
        return None

    def next_token(self) -> Token:
        self.skip_trivia()
        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "EOF", line, col)

        ch = self.stream.peek()
        if ch in IDENT_START:
            return self.read_word(line, col)
        if ch in DIGITS:
            return self.read_number(line, col)
        if ch in QUOTES:
            return self.read_string(line, col)
        return self.read_symbol(line, col) or Token(
            "ERROR", self.stream.next(), line, col
        )


def tokenize(source: str) -> list[Token]:
    """Lex `source` completely; the result always ends with exactly one EOF token."""
    lexer = Lexer(CharacterStream(source))
    tokens = [lexer.next_token()]
    while tokens[-1].type != "EOF":
        tokens.append(lexer.next_token())
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "token_hashmap", "tokenize"]
