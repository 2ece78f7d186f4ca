"""Test scope resolution and pattern lookup"""

import pytest

from daybook.config import Settings
from daybook.journal.models import SCOPE_DEFAULT, PatternKind
from daybook.journal.template_system.patterns import (
    PatternStore,
    first_non_empty,
    resolve_scope,
)

DEFAULTS = {
    PatternKind.NOTE_PATH: "${base}/notes",
    PatternKind.NOTE_FILE: "N${year}${month}${day}_${input}.${ext}",
    PatternKind.ENTRY_PATH: "${base}/entries",
    PatternKind.ENTRY_FILE: "${year}-${month}-${day} ${weekday}.${ext}",
}

OVERRIDES = {
    "notes": {"path": "${base}/n/${year}", "file": "${input}.${ext}"},
    "entries": {"path": "${base}/${year}/${month}", "file": "${day}.${ext}"},
}

SCOPED = {
    "notes": {"path": "${base}/work-notes", "file": "W_${input}.${ext}"},
    "entries": {"path": "${base}/work", "file": "W${day}.${ext}"},
}


def store_for(**values) -> PatternStore:
    settings = Settings(**values)
    return PatternStore(lambda: settings)


class TestResolveScope:
    @pytest.mark.parametrize("scope_id", [None, ""])
    def test_falls_back_to_default(self, scope_id) -> None:
        assert resolve_scope(scope_id) == SCOPE_DEFAULT

    def test_keeps_scope_without_validation(self) -> None:
        assert resolve_scope("does-not-exist") == "does-not-exist"


class TestFirstNonEmpty:
    def test_first_candidate_wins(self) -> None:
        assert first_non_empty("a", "b") == "a"

    def test_skips_none_and_empty(self) -> None:
        assert first_non_empty(None, "", "c") == "c"

    def test_nothing_found(self) -> None:
        assert first_non_empty(None, "") == ""


class TestPatternStore:
    @pytest.mark.parametrize("kind", list(PatternKind))
    def test_builtin_defaults(self, kind: PatternKind) -> None:
        pattern = store_for().get_pattern(kind)

        assert pattern.template == DEFAULTS[kind]
        assert pattern.scope == SCOPE_DEFAULT
        assert pattern.value is None

    @pytest.mark.parametrize("kind", list(PatternKind))
    def test_configured_patterns(self, kind: PatternKind) -> None:
        pattern = store_for(patterns=OVERRIDES).get_pattern(kind)
        assert pattern.template == OVERRIDES[kind.section][kind.field]

    @pytest.mark.parametrize("kind", list(PatternKind))
    def test_scoped_patterns(self, kind: PatternKind) -> None:
        store = store_for(
            patterns=OVERRIDES,
            scopes=[{"name": "work", "base": "/work", "patterns": SCOPED}],
        )

        pattern = store.get_pattern(kind, "work")

        assert pattern.template == SCOPED[kind.section][kind.field]
        assert pattern.scope == "work"

    @pytest.mark.parametrize("kind", list(PatternKind))
    def test_unknown_scope_uses_builtin_default(self, kind: PatternKind) -> None:
        store = store_for(patterns=OVERRIDES, scopes=[{"name": "work"}])

        pattern = store.get_pattern(kind, "private")

        assert pattern.template == DEFAULTS[kind]
        assert pattern.scope == "private"

    def test_empty_pattern_falls_back(self) -> None:
        store = store_for(patterns={"notes": {"path": "", "file": "x.${ext}"}})

        assert store.get_pattern(PatternKind.NOTE_PATH).template == DEFAULTS[PatternKind.NOTE_PATH]
        assert store.get_pattern(PatternKind.NOTE_FILE).template == "x.${ext}"

    def test_partial_scope_patterns(self) -> None:
        store = store_for(
            scopes=[{"name": "work", "patterns": {"entries": {"file": "${day}.md"}}}]
        )

        assert store.get_pattern(PatternKind.ENTRY_FILE, "work").template == "${day}.md"
        assert store.get_pattern(PatternKind.ENTRY_PATH, "work").template == DEFAULTS[PatternKind.ENTRY_PATH]

    @pytest.mark.parametrize("scope", [None, "", "default", "work", "unknown"])
    @pytest.mark.parametrize("kind", list(PatternKind))
    def test_never_empty(self, kind: PatternKind, scope) -> None:
        store = store_for(scopes=[{"name": "work", "patterns": {}}])
        assert store.get_pattern(kind, scope).template

    def test_reads_live_settings(self) -> None:
        current = {"settings": Settings()}
        store = PatternStore(lambda: current["settings"])
        assert store.get_pattern(PatternKind.NOTE_PATH).template == "${base}/notes"

        current["settings"] = Settings(patterns={"notes": {"path": "${base}/changed"}})
        assert store.get_pattern(PatternKind.NOTE_PATH).template == "${base}/changed"
