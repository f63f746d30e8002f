import pytest
from hypothesis import given
from hypothesis import strategies as st

from lockset.lockset_constants import KEYWORD_TOKENS, TOKEN_TYPES
from lockset.lockset_lexer import CharacterStream, Lexer, Token, tokenize


def types_of(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "{ } ( ) [ ] . , : ; = + - * / %"
    expected = [
        "LBRACE",
        "RBRACE",
        "LPAREN",
        "RPAREN",
        "LBRACK",
        "RBRACK",
        "DOT",
        "COMMA",
        "COLON",
        "SEMICOLON",
        "EQUALS",
        "BINARY_OP",
        "BINARY_OP",
        "BINARY_OP",
        "BINARY_OP",
        "BINARY_OP",
        "EOF",
    ]
    assert types_of(code) == expected


def test_longest_match_for_equality() -> None:
    assert types_of("a == b != c = d") == [
        "IDENT",
        "DOUBLE_EQUALS",
        "IDENT",
        "NOT_EQUALS",
        "IDENT",
        "EQUALS",
        "IDENT",
        "EOF",
    ]


def test_adjacent_equals_without_spaces() -> None:
    tokens = tokenize("x==1")
    assert [t.value for t in tokens] == ["x", "==", "1", "EOF"]


def test_keywords() -> None:
    assert types_of("set lock fun if else") == [
        "SET",
        "LOCK",
        "FUN",
        "IF",
        "ELSE",
        "EOF",
    ]


def test_keywords_are_case_sensitive() -> None:
    lexer = Lexer(CharacterStream("Set"))
    tok = lexer.next_token()
    assert tok.type == "IDENT"
    assert tok.value == "Set"


def test_keyword_prefix_is_identifier() -> None:
    tok = Lexer(CharacterStream("settings")).next_token()
    assert tok == Token("IDENT", "settings", 1, 1)


def test_number_token() -> None:
    tok = Lexer(CharacterStream("123")).next_token()
    assert tok.type == "NUMBER"
    assert tok.value == "123"


def test_decimal_number_token() -> None:
    tok = Lexer(CharacterStream("123.456")).next_token()
    assert tok.type == "NUMBER"
    assert tok.value == "123.456"


def test_malformed_number_raises() -> None:
    with pytest.raises(SyntaxError, match="Invalid number format"):
        tokenize("1.2.3")


def test_string_token() -> None:
    tok = Lexer(CharacterStream('"hello world"')).next_token()
    assert tok.type == "STRING"
    assert tok.value == "hello world"


def test_single_quoted_string() -> None:
    tok = Lexer(CharacterStream("'it \"works\"'")).next_token()
    assert tok.type == "STRING"
    assert tok.value == 'it "works"'


def test_string_escapes_kept_verbatim() -> None:
    tok = Lexer(CharacterStream(r'"a\"b\n"')).next_token()
    assert tok.value == r"a\"b\n"


def test_unterminated_string_raises() -> None:
    with pytest.raises(SyntaxError, match="Unterminated string"):
        tokenize('"never closed')


def test_line_and_column_tracking() -> None:
    tokens = tokenize("set x = 1;\nlock y = 2;")
    lock_tok = tokens[5]
    assert lock_tok.type == "LOCK"
    assert (lock_tok.line, lock_tok.col) == (2, 1)
    assert (tokens[6].line, tokens[6].col) == (2, 6)


def test_skip_whitespace_and_comments() -> None:
    tokens = tokenize("   \n  # a comment\n123")
    assert tokens[0].type == "NUMBER"
    assert tokens[0].value == "123"


def test_unknown_character_becomes_error_token() -> None:
    tokens = tokenize("a ! b")
    assert Token("ERROR", "!", 1, 3) in tokens


def test_empty_source_is_single_eof() -> None:
    assert tokenize("") == [Token("EOF", "EOF", 1, 1)]


def test_character_stream_read_past_end() -> None:
    stream = CharacterStream("a")
    assert stream.next() == "a"
    assert stream.peek() == ""
    with pytest.raises(EOFError):
        stream.next()


def test_token_repr_and_hash() -> None:
    tok = Token("IDENT", "x", 1, 1)
    assert repr(tok) == "Token(IDENT, x)"
    assert hash(tok) == hash(Token("IDENT", "x", 1, 1))
    assert tok != "x"


@given(st.text(alphabet="abcxyz_019 \n\t{}()[].,:;=+-*/%!", max_size=60))
def test_tokenize_always_ends_with_single_eof(source: str) -> None:
    try:
        tokens = tokenize(source)
    except SyntaxError:
        return  # malformed numbers such as "1.2.3"
    assert tokens[-1].type == "EOF"
    assert sum(1 for t in tokens if t.type == "EOF") == 1
    assert all(t.type in TOKEN_TYPES for t in tokens)


@given(st.from_regex(r"[a-z_][a-z0-9_]{0,8}", fullmatch=True))
def test_identifiers_or_keywords(word: str) -> None:
    tok = Lexer(CharacterStream(word)).next_token()
    if word in KEYWORD_TOKENS:
        assert tok.type == KEYWORD_TOKENS[word]
    else:
        assert tok.type == "IDENT"
    assert tok.value == word


@pytest.mark.parametrize("char", ["²", "٣", "é", "Ω"])
def test_non_ascii_characters_become_error_tokens(char: str) -> None:
    assert tokenize(f"a{char}1") == [
        Token("IDENT", "a", 1, 1),
        Token("ERROR", char, 1, 2),
        Token("NUMBER", "1", 1, 3),
        Token("EOF", "EOF", 1, 4),
    ]


def test_trailing_dot_number_then_second_dot_raises() -> None:
    assert tokenize("3.")[0] == Token("NUMBER", "3.", 1, 1)
    with pytest.raises(SyntaxError, match="Invalid number format"):
        tokenize("1..2")
