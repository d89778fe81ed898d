"""
Tranquility Language Server.

This server provides language features for Tranquility source files using
`pygls`. Every open or edited document is run through `tranquility.check`
and the resulting diagnostics are published to the editor. The last AST that
parsed cleanly is kept per document to answer document symbol and definition
requests; hover text comes from the built-in function table.

Standard output carries the protocol, so the server logs through `logging`.


File: server.py
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer
from pygls.workspace import PositionCodec

from tranquility import __version__
from tranquility.analysis import AnalysisResult, check, is_tranquility_file
from tranquility.builtin_table import describe
from tranquility.lexer import Token
from tranquility.nodes import Program

logger = logging.getLogger(__name__)

# Token columns count code points; the client counts UTF-16 units.
position_codec = PositionCodec()


@dataclass
class TranquilitySymbol:
    """Represents a top-level symbol in a Tranquility file."""

    name: str
    kind: SymbolKind
    token: Token
    detail: str

    @property
    def range(self) -> Range:
        start = Position(line=self.token.line, character=self.token.column)
        end = Position(line=self.token.line, character=self.token.column + len(self.token.text))
        return Range(start=start, end=end)


def collect_symbols(ast: Program) -> List[TranquilitySymbol]:
    """Extract global variables and functions from ``ast``."""
    symbols: List[TranquilitySymbol] = []
    if ast.var_list is not None:
        for tok in ast.var_list.tokens:
            symbols.append(TranquilitySymbol(tok.text, SymbolKind.Variable, tok, f"var {tok.text}"))
    for func in ast.functions:
        params = func.parameters.names if func.parameters else []
        detail = f"fun {func.name}({', '.join(params)})"
        symbols.append(TranquilitySymbol(func.name, SymbolKind.Function, func.token, detail))
    return symbols


def to_client_diagnostics(text: str, result: AnalysisResult) -> List[Diagnostic]:
    """Convert ``result`` diagnostics to protocol diagnostics in UTF-16 columns."""
    lines = text.splitlines(True)
    converted: List[Diagnostic] = []
    for diagnostic in result.diagnostics:
        item = diagnostic.to_lsp()
        item.range = position_codec.range_to_client_units(lines, item.range)
        converted.append(item)
    return converted


class TranquilityLanguageServer(LanguageServer):
    """Language server for Tranquility source files."""

    def __init__(self) -> None:
        super().__init__("tranquility-ls", f"v{__version__}")
        self.results_by_uri: Dict[str, AnalysisResult] = {}
        self.symbols_by_uri: Dict[str, List[TranquilitySymbol]] = {}

    def refresh(self, uri: str, text: str) -> Optional[AnalysisResult]:
        """Check ``text`` and publish its diagnostics for ``uri``.

        Documents that are not `.t` or `.tranq` files are ignored.
        """
        if not is_tranquility_file(uri):
            return None
        result = check(text)
        self.results_by_uri[uri] = result
        if result.ast is not None:
            self.symbols_by_uri[uri] = collect_symbols(result.ast)
        logger.debug("%s: %d diagnostic(s)", uri, len(result.diagnostics))
        self.publish_diagnostics(uri, to_client_diagnostics(text, result))
        return result

    def forget(self, uri: str) -> None:
        """Drop state for a closed document and clear its diagnostics."""
        self.results_by_uri.pop(uri, None)
        self.symbols_by_uri.pop(uri, None)
        self.publish_diagnostics(uri, [])

    def find_symbol(self, uri: str, name: str) -> Optional[TranquilitySymbol]:
        for sym in self.symbols_by_uri.get(uri, []):
            if sym.name == name:
                return sym
        return None


lang_server = TranquilityLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: TranquilityLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Check a document when it is opened."""
    ls.refresh(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: TranquilityLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-check a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    ls.refresh(doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DID_SAVE)
def did_save(ls: TranquilityLanguageServer, params: DidSaveTextDocumentParams) -> None:
    """Re-check a document when it is saved."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    ls.refresh(doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: TranquilityLanguageServer, params: DidCloseTextDocumentParams) -> None:
    """Clear diagnostics for a closed document."""
    ls.forget(params.text_document.uri)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: TranquilityLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return documentation for the built-in or keyword under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    description = describe(word)
    if description is None:
        sym = ls.find_symbol(params.text_document.uri, word)
        if sym is None:
            return None
        description = f"\n```\n{sym.detail}\n```\n"
    contents = MarkupContent(kind=MarkupKind.Markdown, value=description)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: TranquilityLanguageServer, params: DefinitionParams):
    """Return the declaration of the function or global under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.find_symbol(params.text_document.uri, word)
    if sym is None:
        return None
    return Location(uri=params.text_document.uri, range=sym.range)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: TranquilityLanguageServer, params: DocumentSymbolParams):
    """Return top-level symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    result: List[DocumentSymbol] = []
    for sym in symbols:
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=sym.kind,
                range=sym.range,
                selection_range=sym.range,
                detail=sym.detail,
            )
        )
    return result


def main() -> None:
    """Start the language server."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    lang_server.start_io()


if __name__ == "__main__":
    main()
