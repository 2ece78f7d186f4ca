"""
Journal entries and notes: template resolution and content injection
"""

from daybook.errors import InjectionError, InputCancelled
from daybook.journal.commands import JournalCommands
from daybook.journal.injection import (
    FileDocumentStore,
    InlineString,
    Injector,
    InMemoryDocumentStore,
    Position,
    TextDocument,
)
from daybook.journal.input import (
    DateOffset,
    ExplicitSelection,
    Input,
    InputParser,
    NoteRequest,
)
from daybook.journal.models import (
    SCOPE_DEFAULT,
    InlineTemplate,
    JournalPageType,
    PatternDefinition,
    PatternKind,
    ScopeDefinition,
    ScopedTemplate,
)
from daybook.journal.pages import PageLoader
from daybook.journal.template_system import TemplateEngine

__all__ = [
    # Commands
    "JournalCommands",
    "PageLoader",
    # Template resolution
    "TemplateEngine",
    # Injection
    "Injector",
    "InlineString",
    "InjectionError",
    "InputCancelled",
    "FileDocumentStore",
    "InMemoryDocumentStore",
    "Position",
    "TextDocument",
    # Input
    "InputParser",
    "Input",
    "DateOffset",
    "ExplicitSelection",
    "NoteRequest",
    # Models
    "SCOPE_DEFAULT",
    "InlineTemplate",
    "JournalPageType",
    "PatternDefinition",
    "PatternKind",
    "ScopeDefinition",
    "ScopedTemplate",
]
