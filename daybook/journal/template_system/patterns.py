"""Scope resolution and pattern lookup"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from daybook.journal.models import (
    SCOPE_DEFAULT,
    PatternKind,
    ScopedTemplate,
    ScopeDefinition,
)
from daybook.utils.mixins import LoggerMixin

if TYPE_CHECKING:
    from daybook.config import Settings

SettingsProvider = Callable[[], "Settings"]


def resolve_scope(scope_id: str | None = None) -> str:
    """Returns a valid scope, falls back to default"""
    return scope_id if scope_id else SCOPE_DEFAULT


def first_non_empty(*candidates: str | None) -> str:
    """First candidate that is neither None nor empty ("" if there is none)"""
    for candidate in candidates:
        if candidate:
            return candidate
    return ""


def find_scope(settings: "Settings", scope: str) -> ScopeDefinition | None:
    """Scope definition with the given name, None for unknown scopes"""
    matches = [sd for sd in settings.scopes if sd.name == scope]
    return matches[-1] if matches else None


class PatternStore(LoggerMixin):
    """
    Looks up path and file patterns from the live settings.

    Resolution order: the scope's own pattern (or the top level ``patterns``
    block for the default scope), then the built-in default. Unknown scopes
    are not an error, they simply have no pattern.
    """

    def __init__(self, settings_provider: SettingsProvider):
        self.settings_provider = settings_provider

    def get_pattern(self, kind: PatternKind, scope: str | None = None) -> ScopedTemplate:
        scope = resolve_scope(scope)
        settings = self.settings_provider()

        if scope == SCOPE_DEFAULT:
            definition = kind.lookup(settings.patterns)
        else:
            scope_definition = find_scope(settings, scope)
            if scope_definition is None:
                self.logger.debug("Unknown scope, using default pattern", scope=scope)
            definition = (
                kind.lookup(scope_definition.patterns) if scope_definition else None
            )

        return ScopedTemplate(
            name=f"{kind.section}.{kind.field}",
            scope=scope,
            template=first_non_empty(definition, kind.default),
        )
