"""Injection of generated content into documents"""

from .document import Position, TextDocument, TextInsert, TextLine, WorkspaceEdit
from .injector import DEFAULT_POSITION, InlineString, Injector
from .store import FileDocumentStore, IDocumentStore, InMemoryDocumentStore

__all__ = [
    "Position",
    "TextDocument",
    "TextInsert",
    "TextLine",
    "WorkspaceEdit",
    "DEFAULT_POSITION",
    "InlineString",
    "Injector",
    "FileDocumentStore",
    "IDocumentStore",
    "InMemoryDocumentStore",
]
