import pytest
from hypothesis import given, strategies as st

from ember.errors import EmberUnterminatedString
from ember.reader.lexer import TokenKind, Tokenizer, classify, lex
from ember.types.location import Location


def _kinds(source):
    return [(str(t.kind), t.text) for t in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("abc", [("symbol", "abc")]),
        ("snake_case-name", [("symbol", "snake_case-name")]),
        ("42", [("num", "42")]),
        ("abc1", [("symbol", "abc"), ("num", "1")]),
        ('"hi there"', [("string", "hi there")]),
        ("'hi'", [("string", "hi")]),
        ("f(a, 1)", [("symbol", "f"), ("oparen", "("), ("symbol", "a"), ("comma", ","), ("num", "1"), ("cparen", ")")]),
        ("  ?! x . ", [("symbol", "x")]),
        ("", []),
        ('""', [("string", "")]),
    ],
)
def test_lexer_basic(source, expected):
    assert _kinds(source) == expected


def test_mixed_quotes_close_each_other():
    # Either quote character closes a string, whichever opened it
    assert _kinds("'a\" b") == [("string", "a"), ("symbol", "b")]
    assert _kinds("\"it's''") == [("string", "it"), ("symbol", "s"), ("string", "")]


def test_whitespace_and_newlines_tracked():
    tokens = list(lex("  \r\n\r\n )   "))
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.CPAREN
    assert tokens[0].location == Location(2, 1)


def test_token_location_is_start():
    tok = list(lex("x\n  foo"))[1]
    assert tok.text == "foo"
    assert tok.location == Location(1, 2)
    assert str(tok) == "kind: symbol, text: `foo`, loc: 2:3"


def test_unterminated_string_raises_with_start_location():
    with pytest.raises(EmberUnterminatedString) as err:
        list(lex('a "never closed'))
    assert err.value.location == Location(0, 2)


def test_peek_does_not_consume():
    tokens = Tokenizer("a(")
    assert tokens.peek_token().text == "a"
    assert tokens.peek_token().text == "a"
    assert tokens.next_token().text == "a"
    assert tokens.next_token().kind is TokenKind.OPAREN
    assert tokens.next_token().kind is TokenKind.END


def test_illegal_tokens_when_not_skipping():
    tokens = Tokenizer("a ?")
    assert tokens.next_token(skip_illegal=False).kind is TokenKind.SYMBOL
    tok = tokens.next_token(skip_illegal=False)
    assert tok.kind is TokenKind.ILLEGAL and tok.text == " "
    tok = tokens.next_token(skip_illegal=False)
    assert tok.kind is TokenKind.ILLEGAL and tok.text == "?"
    assert tokens.next_token(skip_illegal=False).kind is TokenKind.END


@pytest.mark.parametrize(
    "ch,kind",
    [
        ("a", TokenKind.SYMBOL),
        ("Z", TokenKind.SYMBOL),
        ("_", TokenKind.SYMBOL),
        ("-", TokenKind.SYMBOL),
        ("7", TokenKind.NUM),
        ('"', TokenKind.STRING),
        ("'", TokenKind.STRING),
        ("(", TokenKind.OPAREN),
        (")", TokenKind.CPAREN),
        (",", TokenKind.COMMA),
        ("\0", TokenKind.END),
        (" ", TokenKind.ILLEGAL),
        ("+", TokenKind.ILLEGAL),
        ("é", TokenKind.ILLEGAL),
    ],
)
def test_classify(ch, kind):
    assert classify(ch) is kind


@given(st.from_regex(r"[a-zA-Z_-]+", fullmatch=True))
def test_symbol_is_single_token(name):
    assert _kinds(name) == [("symbol", name)]


@given(st.integers(min_value=0, max_value=10**30))
def test_digits_are_single_num_token(n):
    assert _kinds(str(n)) == [("num", str(n))]


def test_nul_ends_input():
    assert _kinds("a\0b") == [("symbol", "a")]
    assert [t.text for t in Tokenizer("f(1)")] == ["f", "(", "1", ")"]
