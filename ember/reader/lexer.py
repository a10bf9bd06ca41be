"""
  Tokenizer

- Table-driven: every character maps to exactly one class
    letters, '_' and '-'   -> symbol
    digits                 -> num
    '"' and "'"            -> string delimiter (either one closes either one)
    '(' ')' ','            -> single character tokens
    NUL                    -> end of input
    anything else          -> illegal, skipped before each token
- Whitespace has no class of its own: it is illegal and skipped like any other
  meaningless character.
- Symbol and number tokens extend while the next character has the same class,
  so `abc1` is the symbol `abc` followed by the number `1`.
- Strings have no escapes. The closing scan stops at the first quote of either
  kind, so "it's" ends at the apostrophe.
- Token text is a slice of the source; string tokens exclude their quotes.
- A token's location is where it starts.
"""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass
from typing import Iterator, Optional

from ember.errors import EmberEndOfFile, EmberUnterminatedString
from ember.types.location import Cursor, Location


class TokenKind(enum.Enum):
    SYMBOL = "symbol"
    NUM = "num"
    STRING = "string"
    OPAREN = "oparen"
    CPAREN = "cparen"
    COMMA = "comma"
    END = "end"
    ILLEGAL = "illegal"

    def __str__(self) -> str:
        return self.value


def _build_classes() -> dict[str, TokenKind]:
    table: dict[str, TokenKind] = {}
    for ch in string.ascii_letters + "_-":
        table[ch] = TokenKind.SYMBOL
    for ch in string.digits:
        table[ch] = TokenKind.NUM
    table['"'] = TokenKind.STRING
    table["'"] = TokenKind.STRING
    table["("] = TokenKind.OPAREN
    table[")"] = TokenKind.CPAREN
    table[","] = TokenKind.COMMA
    table["\0"] = TokenKind.END
    return table


CHAR_CLASSES: dict[str, TokenKind] = _build_classes()


def classify(ch: str) -> TokenKind:
    return CHAR_CLASSES.get(ch, TokenKind.ILLEGAL)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    location: Location

    def __str__(self) -> str:
        return f"kind: {self.kind}, text: `{self.text}`, loc: {self.location}"


class Tokenizer:
    __slots__ = ("cursor",)

    def __init__(
        self,
        source: str,
        source_name: Optional[str] = None,
        cursor: Optional[Cursor] = None,
    ):
        self.cursor: Cursor = cursor if cursor is not None else Cursor(source, source_name)

    @property
    def source(self) -> str:
        return self.cursor.source

    def location(self) -> Location:
        return self.cursor.location()

    def skip_illegals(self) -> TokenKind:
        """Advance past illegal characters; return the class of the next one."""
        cursor = self.cursor
        while True:
            if cursor.at_end():
                return TokenKind.END
            kind = classify(cursor.current())
            if kind is not TokenKind.ILLEGAL:
                return kind
            cursor.advance()

    def next_token(self, skip_illegal: bool = True) -> Token:
        """Consume and return the next token.

        With skip_illegal=False an illegal character at the cursor is returned
        as a one-character ILLEGAL token instead of being skipped.
        Raises EmberUnterminatedString when input ends inside a string.
        """
        cursor = self.cursor
        if skip_illegal:
            kind = self.skip_illegals()
        else:
            kind = TokenKind.END if cursor.at_end() else classify(cursor.current())

        start = cursor.pos
        start_loc = cursor.location()

        if kind is TokenKind.SYMBOL or kind is TokenKind.NUM:
            while True:
                cursor.advance()
                if cursor.at_end() or classify(cursor.current()) is not kind:
                    return Token(kind, self.source[start:cursor.pos], start_loc)

        if kind is TokenKind.STRING:
            while True:
                try:
                    cursor.advance()
                except EmberEndOfFile:
                    raise EmberUnterminatedString(start_loc) from None
                if cursor.at_end():
                    raise EmberUnterminatedString(start_loc)
                if classify(cursor.current()) is TokenKind.STRING:
                    text = self.source[start + 1:cursor.pos]
                    cursor.advance()  # closing quote
                    return Token(TokenKind.STRING, text, start_loc)

        if kind is TokenKind.END:
            return Token(TokenKind.END, "", start_loc)

        # '(' ')' ',' and illegal characters are one character long
        cursor.advance()
        return Token(kind, self.source[cursor.pos - 1:cursor.pos], start_loc)

    def peek_token(self) -> Token:
        """Return the next token without consuming it."""
        state = self.cursor.snapshot()
        try:
            return self.next_token()
        finally:
            self.cursor.restore(state)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok.kind is TokenKind.END:
                return
            yield tok


def lex(source: str, source_name: Optional[str] = None) -> Iterator[Token]:
    """Token generator: yields tokens up to, not including, the end of input."""
    yield from Tokenizer(source, source_name)
