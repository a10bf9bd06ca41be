"""
A pygls-based Language Server for ember.

Features:
- Text synchronization (document text comes from the pygls workspace)
- Diagnostics: the first parse error, ignored characters
- Hover: builtin signatures and locally defined names
- Completion: builtins and local definitions
- Signature Help: builtins and local define()s
- Document Symbols: from the indexer

The buffer is never evaluated; a static index is rebuilt per change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)
from pygls.server import LanguageServer

from ember import __version__
from ember.reader.lexer import TokenKind, classify
from ember_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex, build_index

logger = logging.getLogger(__name__)

SOURCE = "ember-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class EmberLanguageServer(LanguageServer):
    CMD_NAME = "ember-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}


ls = EmberLanguageServer()


# --- Text sync ---
def _refresh(uri: str) -> None:
    text = ls.workspace.get_text_document(uri).source
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, make_diagnostics(idx))


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _refresh(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    _refresh(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def make_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for d in idx.diagnostics:
        severity = DiagnosticSeverity.Error if d.severity == "error" else DiagnosticSeverity.Information
        diags.append(
            Diagnostic(
                range=_mk_range(d.line, d.col),
                message=d.message,
                severity=severity,
                source=SOURCE,
            )
        )
    return diags


# --- Hover ---
def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    return f"{sdef.signature}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = hover_text(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind, detail=sdef.signature))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["(", ","]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return CompletionList(is_incomplete=False, items=[])
    return CompletionList(is_incomplete=False, items=completion_items(state.index))


# --- Signature Help ---
def signature_for(callee: str, idx: DocumentIndex) -> Optional[SignatureInformation]:
    label = BUILTIN_SIGNATURES.get(callee)
    if label is None:
        sdef = idx.symbols.get(callee)
        if sdef is None or sdef.kind != "function":
            return None
        label = sdef.signature

    params_text = label[label.find("(") + 1:label.rfind(")")]
    parameters = [ParameterInformation(label=p.strip()) for p in params_text.split(",") if p.strip()]
    return SignatureInformation(label=label, parameters=parameters)


@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", ","]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    prefix = get_line_prefix(state.text, params.position)
    callee = extract_callee_name(prefix)
    if not callee:
        return None

    sig = signature_for(callee, state.index)
    if sig is None:
        return None

    active = prefix[prefix.rfind("(") + 1:].count(",")
    return SignatureHelp(signatures=[sig], active_signature=0, active_parameter=active)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.signature,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---

def _is_name_char(ch: str) -> bool:
    return classify(ch) is TokenKind.SYMBOL


def get_line_prefix(text: str, pos: Position) -> str:
    # Text from the start of the line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = pos.character
    while start > 0 and _is_name_char(line[start - 1]):
        start -= 1
    end = pos.character
    while end < len(line) and _is_name_char(line[end]):
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    """Name of the innermost call that is still open at the end of `prefix`."""
    depth = 0
    for i in range(len(prefix) - 1, -1, -1):
        ch = prefix[i]
        if ch == ")":
            depth += 1
        elif ch == "(":
            if depth == 0:
                end = i
                start = end
                while start > 0 and _is_name_char(prefix[start - 1]):
                    start -= 1
                return prefix[start:end] or None
            depth -= 1
    return None


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger.info("starting %s %s over stdio", SOURCE, __version__)
    ls.start_io()


if __name__ == "__main__":
    main()
