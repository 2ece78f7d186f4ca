"""Template system for journal paths, file names and content"""

from .engine import DEFAULT_ENTRY_TEMPLATE, DEFAULT_NOTE_TEMPLATE, TemplateEngine
from .patterns import PatternStore, first_non_empty, resolve_scope
from .variables import DateFormatter, replace_date_formats, replace_variable

__all__ = [
    "DEFAULT_ENTRY_TEMPLATE",
    "DEFAULT_NOTE_TEMPLATE",
    "TemplateEngine",
    "PatternStore",
    "first_non_empty",
    "resolve_scope",
    "DateFormatter",
    "replace_date_formats",
    "replace_variable",
]
