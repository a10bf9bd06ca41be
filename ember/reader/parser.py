"""
  Recursive-descent parser

    expression := NUM | STRING | SYMBOL ( '(' arglist ')' )?
    arglist    := (expression (',' expression)*)?

- After a symbol the next token is peeked: '(' makes a function call; ')', ','
  or end of input make a bare variable; anything else is an error (two
  expressions cannot simply follow each other).
- Each call argument is parsed by a sub-parser that starts at the argument and
  shares the source text; its cursor is spliced back into the parent afterwards,
  so locations stay exact across nesting.
- Malformed input is never an exception: next_expression returns None at the
  end of input, an Expression, or a ParseError carrying a location.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from ember.config import get_max_parse_depth
from ember.errors import EmberUnterminatedString
from ember.reader.lexer import Token, TokenKind, Tokenizer
from ember.types.expression import Expression, FnCall, Int, String, Var, U64_MAX
from ember.types.location import Cursor, Location

logger = logging.getLogger(__name__)

# u64 max has 20 digits; anything longer overflows without converting
_MAX_INT_DIGITS = len(str(U64_MAX))


@dataclass(frozen=True)
class ParseError:
    location: Location
    message: str

    def format(self) -> str:
        return f"{self.location}: error: {self.message}"

    def __str__(self) -> str:
        return self.format()


ParseResult = Union[Expression, ParseError, None]


def _illegal(tok: Token) -> ParseError:
    return ParseError(tok.location, f"found illegal token: {tok.text}")


class Parser:
    __slots__ = ("tokenizer", "depth", "max_depth")

    def __init__(
        self,
        source: str,
        source_name: Optional[str] = None,
        *,
        cursor: Optional[Cursor] = None,
        depth: int = 0,
        max_depth: Optional[int] = None,
    ):
        self.tokenizer: Tokenizer = Tokenizer(source, source_name, cursor=cursor)
        self.depth: int = depth
        self.max_depth: int = max_depth if max_depth is not None else get_max_parse_depth()

    @property
    def cursor(self) -> Cursor:
        return self.tokenizer.cursor

    def location(self) -> Location:
        return self.tokenizer.location()

    def next_expression(self) -> ParseResult:
        """Parse the next top-level expression.

        Returns None at the end of input, otherwise an Expression or a
        ParseError.
        """
        tokens = self.tokenizer
        try:
            tokens.skip_illegals()
            start_loc = tokens.location()
            tok = tokens.next_token()

            match tok.kind:
                case TokenKind.SYMBOL:
                    return self._parse_symbol(tok)
                case TokenKind.NUM:
                    return self._parse_int(tok, start_loc)
                case TokenKind.STRING:
                    return String(tok.text)
                case TokenKind.END:
                    return None
                case TokenKind.ILLEGAL:
                    return _illegal(tok)
                case _:
                    return ParseError(start_loc, f"expression cannot start with '{tok.text}'")
        except EmberUnterminatedString as e:
            return ParseError(e.location, "unterminated string literal")

    def _parse_int(self, tok: Token, start_loc: Location) -> ParseResult:
        text = tok.text
        if len(text) > _MAX_INT_DIGITS:
            return ParseError(start_loc, "could not parse int: Overflow")
        try:
            value = int(text, 10)
        except ValueError:
            return ParseError(start_loc, "could not parse int: InvalidCharacter")
        if value > U64_MAX:
            return ParseError(start_loc, "could not parse int: Overflow")
        return Int(value)

    def _parse_symbol(self, tok: Token) -> ParseResult:
        tokens = self.tokenizer
        peeked = tokens.peek_token()

        match peeked.kind:
            case TokenKind.CPAREN | TokenKind.COMMA | TokenKind.END:
                return Var(tok.text)
            case TokenKind.ILLEGAL:
                return _illegal(peeked)
            case TokenKind.OPAREN:
                tokens.next_token()  # consume the peeked '('
            case _:
                return ParseError(
                    peeked.location, "two non-function-calls cannot follow each other"
                )

        args: list[Expression] = []
        should_be_arg = True
        while True:
            arg_start = self.cursor.fork()
            arg_tok = tokens.next_token()

            match arg_tok.kind:
                case TokenKind.SYMBOL | TokenKind.NUM | TokenKind.STRING:
                    if not should_be_arg:
                        return ParseError(
                            arg_tok.location,
                            f"tried to parse argument `{arg_tok.text}` as function separator or delimiter",
                        )
                    if self.depth >= self.max_depth:
                        return ParseError(
                            arg_tok.location,
                            f"expression nesting exceeds maximum depth of {self.max_depth}",
                        )

                    sub = Parser(
                        arg_start.source,
                        cursor=arg_start,
                        depth=self.depth + 1,
                        max_depth=self.max_depth,
                    )
                    res = sub.next_expression()
                    if res is None:
                        return ParseError(sub.location(), "found unexpected end of file")
                    if isinstance(res, ParseError):
                        return res

                    args.append(res)
                    self.cursor.restore(sub.cursor.snapshot())
                    should_be_arg = False
                case TokenKind.COMMA:
                    if should_be_arg:
                        return ParseError(arg_tok.location, "tried to parse function argument as a ','")
                    should_be_arg = True
                case TokenKind.CPAREN:
                    if should_be_arg and args:
                        return ParseError(arg_tok.location, "tried to parse function argument as a ')'")
                    break
                case TokenKind.OPAREN:
                    return ParseError(
                        arg_tok.location, "found unexpected token in function call args: '('"
                    )
                case TokenKind.END:
                    return ParseError(arg_tok.location, "expected ')' to close function arguments")
                case TokenKind.ILLEGAL:
                    return _illegal(arg_tok)

        return FnCall(tok.text, args)

    def parse_all(self) -> Iterator[Union[Expression, ParseError]]:
        """Yield expressions until the end of input.

        Parsing stops at the first error, which is yielded as the last item.
        """
        while True:
            res = self.next_expression()
            if res is None:
                return
            if isinstance(res, ParseError):
                logger.debug("parse stopped: %s", res)
                yield res
                return
            yield res


def parse(source: str, source_name: Optional[str] = None) -> ParseResult:
    """Parse the first expression in `source`."""
    return Parser(source, source_name).next_expression()
