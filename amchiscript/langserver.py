"""
AmchiScript Language Server.

This server provides basic language features for AmchiScript source files
using `pygls`. It reuses the lexer and parser to build a symbol index of
top-level ``kaamKar`` functions and ``heAhe`` variables, supporting
definition lookup, hover information, and document symbols.


File: langserver.py
Copyright: © 2025 AmchiScript contributors.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
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
from pygls.lsp.server import LanguageServer

from amchiscript.ast_nodes import FunctionDeclaration, VarDeclaration
from amchiscript.exceptions import LexerError, ParseError
from amchiscript.lexer import tokenize
from amchiscript.parser import Parser

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".amchi"


@dataclass
class AmchiSymbol:
    """Represents a top-level symbol in an AmchiScript file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    detail: str

    @property
    def range(self) -> Range:
        return Range(Position(self.line, 0), Position(self.line, len(self.name)))


def collect_symbols(uri: str, text: str) -> List[AmchiSymbol]:
    """
    Parse ``text`` and return its top-level functions and variables.

    Raises:
        LexerError, ParseError: If ``text`` is not a valid program.
    """
    program = Parser(tokenize(text), uri).parse()
    symbols: List[AmchiSymbol] = []
    for node in program.body:
        line = (node.line or 1) - 1
        if isinstance(node, FunctionDeclaration):
            detail = f"kaamKar {node.name}({', '.join(node.parameters)})"
            symbols.append(AmchiSymbol(node.name, SymbolKind.Function, uri, line, detail))
        elif isinstance(node, VarDeclaration):
            detail = f"heAhe {node.name}"
            symbols.append(AmchiSymbol(node.name, SymbolKind.Variable, uri, line, detail))
    return symbols


class AmchiLanguageServer(LanguageServer):
    """Language server for AmchiScript source files."""

    def __init__(self) -> None:
        super().__init__("amchi-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[AmchiSymbol]] = {}
        self.global_symbols: Dict[str, List[AmchiSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all AmchiScript files under the current workspace."""
        root = self.workspace.root_path
        if root:
            for path in Path(root).rglob(f"*{SOURCE_SUFFIX}"):
                try:
                    text = path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    logger.warning("Failed to read %s: %s", path, e)
                    continue
                self.update_index(path.as_uri(), text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> None:
        """Parse ``text`` and update the symbol index for ``uri``.

        A document that does not lex or parse keeps its previous symbols,
        so a half-typed edit does not wipe the index.
        """
        try:
            symbols = collect_symbols(uri, text)
        except (LexerError, ParseError) as e:
            logger.debug("Not indexing %s: %s", uri, e)
            return
        self.symbols_by_uri[uri] = symbols
        self._rebuild_global_index()

    def _rebuild_global_index(self) -> None:
        # Documents are visited in URI order so lookup() is deterministic.
        index: Dict[str, List[AmchiSymbol]] = {}
        for uri in sorted(self.symbols_by_uri):
            for sym in self.symbols_by_uri[uri]:
                index.setdefault(sym.name, []).append(sym)
        self.global_symbols = index

    def lookup(self, word: str) -> Optional[AmchiSymbol]:
        """Return the first indexed symbol named ``word``."""
        matches = self.global_symbols.get(word)
        return matches[0] if matches else None


lang_server = AmchiLanguageServer()


def _symbol_at(ls: AmchiLanguageServer, uri: str, position: Position) -> Optional[AmchiSymbol]:
    doc = ls.workspace.get_text_document(uri)
    word = doc.word_at_position(position)
    if not word:
        return None
    if not ls.indexed_workspace:
        ls._index_workspace()
    return ls.lookup(word)


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: AmchiLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    ls.update_index(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: AmchiLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    ls.update_index(params.text_document.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: AmchiLanguageServer, params: DefinitionParams) -> Optional[Location]:
    """Return the definition location for the symbol under the cursor."""
    sym = _symbol_at(ls, params.text_document.uri, params.position)
    if sym is None:
        return None
    return Location(uri=sym.uri, range=sym.range)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: AmchiLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    sym = _symbol_at(ls, params.text_document.uri, params.position)
    if sym is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=sym.detail))


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: AmchiLanguageServer, params: DocumentSymbolParams) -> List[DocumentSymbol]:
    """Return top-level symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    return [
        DocumentSymbol(
            name=sym.name,
            kind=sym.kind,
            range=sym.range,
            selection_range=sym.range,
            detail=sym.detail,
        )
        for sym in symbols
    ]


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
