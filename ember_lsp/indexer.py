"""
Indexer for ember source files, built without evaluating code.

The document is read with the real parser, one top-level expression at a time,
and an index is built for:
- definitions: let(name, ...) as a var, define(name, args(...), body) as a function
- diagnostics: the first parse error, and every character the tokenizer ignores
  that is not whitespace

Only top-level forms are indexed; parsing stops at the first error, as the
interpreter does.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ember.errors import EmberUnterminatedString
from ember.evaluation.builtin_forms import BUILTINS
from ember.reader.lexer import TokenKind, Tokenizer
from ember.reader.parser import ParseError, Parser
from ember.types.expression import FnCall, Var
from ember.types.location import Cursor, Location


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        if self.kind == "function":
            return f"{self.name}({', '.join(self.params)})"
        return self.name


@dataclass
class IndexDiagnostic:
    line: int
    col: int
    message: str
    severity: str  # "error" | "info"


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    diagnostics: List[IndexDiagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)


def _name_location(text: str, state: tuple[int, int, int]) -> Optional[Location]:
    # let(NAME, ...) / define(NAME, ...): the third token of the form
    cursor = Cursor(text)
    cursor.restore(state)
    tokens = Tokenizer(text, cursor=cursor)
    tokens.next_token()
    tokens.next_token()
    tok = tokens.next_token()
    return tok.location if tok.kind is TokenKind.SYMBOL else None


def _definition(expr: FnCall) -> Optional[tuple[str, str, tuple[str, ...]]]:
    if expr.name not in ("let", "define") or not expr.args:
        return None
    if not isinstance(expr.args[0], Var):
        return None
    name = expr.args[0].name
    if expr.name == "let":
        return name, "var", ()

    params: tuple[str, ...] = ()
    if len(expr.args) > 1 and isinstance(expr.args[1], FnCall) and expr.args[1].name == "args":
        params = tuple(a.name for a in expr.args[1].args if isinstance(a, Var))
    return name, "function", params


def _index_definitions(text: str, idx: DocumentIndex) -> None:
    parser = Parser(text)
    while True:
        parser.tokenizer.skip_illegals()
        state = parser.cursor.snapshot()
        res = parser.next_expression()
        if res is None:
            return
        if isinstance(res, ParseError):
            idx.diagnostics.append(
                IndexDiagnostic(res.location.row, res.location.col, res.message, "error")
            )
            return
        if not isinstance(res, FnCall):
            continue

        found = _definition(res)
        if found is None:
            continue
        name, kind, params = found
        loc = _name_location(text, state)
        if loc is not None:
            idx.symbols[name] = SymbolDef(name, kind, loc.row, loc.col, params)


def _index_ignored(text: str, idx: DocumentIndex) -> None:
    tokens = Tokenizer(text)
    while True:
        try:
            tok = tokens.next_token(skip_illegal=False)
        except EmberUnterminatedString:
            # already reported by the parser
            return
        if tok.kind is TokenKind.END:
            return
        if tok.kind is TokenKind.ILLEGAL and not tok.text.isspace():
            idx.diagnostics.append(
                IndexDiagnostic(
                    tok.location.row,
                    tok.location.col,
                    f"character {tok.text!r} is ignored",
                    "info",
                )
            )


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    _index_definitions(text, idx)
    _index_ignored(text, idx)
    return idx


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {b.name: b.signature for b in BUILTINS}
