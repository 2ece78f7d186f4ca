"""Template resolution engine for journal paths, file names and content"""

import os
from datetime import date as date_type
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from daybook.journal.models import (
    SCOPE_DEFAULT,
    InlineTemplate,
    PatternKind,
    ScopedTemplate,
    find_template,
)
from daybook.utils.logger import preview
from daybook.utils.mixins import LoggerMixin

from .patterns import PatternStore, SettingsProvider, find_scope, resolve_scope
from .variables import DEFAULT_LOCALE, replace_date_formats, replace_variable

if TYPE_CHECKING:
    from daybook.config import Settings

DEFAULT_ENTRY_TEMPLATE = "# ${localDate}\n\n"
DEFAULT_NOTE_TEMPLATE = "# ${input}\n${tags}\n"

# Files older than this are not offered in pickers
INPUT_TIME_THRESHOLD_DAYS = 60


class TemplateEngine(LoggerMixin):
    """
    Resolves path, file and content templates for a scope and a date.

    Every call reads the settings again through ``settings_provider``. The
    default provider is the cached ``get_settings``: edits to ``journal.json``
    or ``journal.yaml`` apply once the cache is refreshed
    (``get_settings(refresh=True)``).
    """

    def __init__(
        self,
        settings_provider: SettingsProvider | None = None,
        home_dir: str | Path | None = None,
    ):
        if settings_provider is None:
            from daybook.config import get_settings

            settings_provider = get_settings

        self.settings_provider = settings_provider
        self.patterns = PatternStore(settings_provider)
        self.home_dir = str(home_dir) if home_dir else str(Path.home())

    @property
    def settings(self) -> "Settings":
        return self.settings_provider()

    # Plain settings

    def get_locale(self) -> str:
        return self.settings.locale or DEFAULT_LOCALE

    def get_scopes(self) -> list[str]:
        """All known scopes, ``default`` first"""
        return [SCOPE_DEFAULT] + [sd.name for sd in self.settings.scopes]

    def get_base_path(self, scope_id: str | None = None) -> str:
        """
        The base directory, defaults to ~/Journal.

        Supported variables: ${homeDir}, ${workspaceRoot} (default scope only).
        A scope without its own base uses the default base.
        """
        scope = resolve_scope(scope_id)
        settings = self.settings

        if scope != SCOPE_DEFAULT:
            scope_definition = find_scope(settings, scope)
            if scope_definition is None or not scope_definition.base:
                return self.get_base_path()
            base = replace_variable("homeDir", self.home_dir, scope_definition.base)
            return os.path.normpath(base)

        if not settings.base:
            return os.path.join(self.home_dir, "Journal")

        base = replace_variable("homeDir", self.home_dir, settings.base)
        base = replace_variable("workspaceRoot", settings.workspace_root, base)
        return os.path.normpath(base)

    def get_file_extension(self) -> str:
        """File extension of notes and entries without the leading dot"""
        ext = self.settings.ext or "md"
        return ext[1:] if ext.startswith(".") else ext

    def is_development_mode_enabled(self) -> bool:
        return self.settings.dev

    def is_open_in_new_editor_group(self) -> bool:
        return self.settings.open_in_new_editor_group

    def get_input_time_threshold(self, now: datetime | None = None) -> datetime:
        """Maximal age of files shown in the quick picker"""
        return (now or datetime.now()) - timedelta(days=INPUT_TIME_THRESHOLD_DAYS)

    # Path and file patterns

    async def resolve_note_path(
        self, date: date_type, scope: str | None = None
    ) -> ScopedTemplate:
        """
        Directory of a note.

        Supported variables: homeDir, base and the date tokens. The result is
        not normalized, separators in user patterns are kept as written.
        """
        pattern = self.patterns.get_pattern(PatternKind.NOTE_PATH, scope)
        value = self._resolve_path_variables(pattern.template, date, scope)
        return pattern.resolved(value)

    async def resolve_note_file(
        self, date: date_type, input_text: str, scope: str | None = None
    ) -> ScopedTemplate:
        """File name of a note. Supported variables: ext, input, date tokens"""
        pattern = self.patterns.get_pattern(PatternKind.NOTE_FILE, scope)
        value = replace_variable("ext", self.get_file_extension(), pattern.template)
        value = replace_variable("input", input_text, value)
        value = replace_date_formats(value, date, self.get_locale())
        return pattern.resolved(value)

    async def resolve_entry_path(
        self, date: date_type, scope: str | None = None
    ) -> ScopedTemplate:
        """Directory of a journal entry, normalized after substitution"""
        pattern = self.patterns.get_pattern(PatternKind.ENTRY_PATH, scope)
        value = self._resolve_path_variables(pattern.template, date, scope)
        return pattern.resolved(os.path.normpath(value))

    async def resolve_entry_file(
        self, date: date_type, scope: str | None = None
    ) -> ScopedTemplate:
        """File name of a journal entry. Supported variables: ext, date tokens"""
        pattern = self.patterns.get_pattern(PatternKind.ENTRY_FILE, scope)
        value = replace_variable("ext", self.get_file_extension(), pattern.template)
        value = replace_date_formats(value, date, self.get_locale())
        return pattern.resolved(value)

    def _resolve_path_variables(
        self, template: str, date: date_type, scope: str | None
    ) -> str:
        # base may contain ${homeDir} itself, so homeDir goes first
        value = replace_variable("homeDir", self.home_dir, template)
        value = replace_variable("base", self.get_base_path(scope), value)
        return replace_date_formats(value, date, self.get_locale())

    # Content templates

    async def resolve_inline_template(
        self, name: str, default: str, scope: str | None = None
    ) -> InlineTemplate:
        """
        Named content template.

        1. legacy single string setting ``tpl-<name>`` (anchor ``<name>-after``)
        2. template called ``name`` in the scope's template list (the top level
           ``templates`` list for the default scope)
        3. ``default`` without anchor
        """
        settings = self.settings

        legacy = settings.get(f"tpl-{name}")
        if legacy:
            return InlineTemplate(
                name=name,
                scope=SCOPE_DEFAULT,
                template=legacy,
                after=settings.get(f"{name}-after") or "",
            )

        scope = resolve_scope(scope)
        if scope == SCOPE_DEFAULT:
            template = find_template(settings.templates, name)
        else:
            scope_definition = find_scope(settings, scope)
            template = scope_definition.find_template(name) if scope_definition else None

        if template is None:
            return InlineTemplate(name=name, scope=scope, template=default, after="")

        return template.model_copy(
            update={
                "scope": scope,
                "template": template.template or default,
                "after": template.after or "",
                "value": None,
            }
        )

    async def resolve_content_template(
        self,
        name: str,
        default: str,
        date: date_type,
        scope: str | None = None,
    ) -> InlineTemplate:
        """Named content template with its date tokens resolved"""
        template = await self.resolve_inline_template(name, default, scope)
        value = replace_date_formats(template.template, date, self.get_locale())
        return template.model_copy(update={"value": value})

    async def resolve_entry_template(
        self, date: date_type, scope: str | None = None
    ) -> InlineTemplate:
        """
        Header of a new journal entry.

        Supported variables: base and the date tokens. The old placeholder
        ``{content}`` stands for ``${localDate}``.
        """
        template = await self.resolve_inline_template(
            "entry", DEFAULT_ENTRY_TEMPLATE, scope
        )
        template = template.model_copy(
            update={"template": template.template.replace("{content}", "${localDate}", 1)}
        )

        value = replace_date_formats(template.template, date, self.get_locale())
        value = replace_variable("base", self.get_base_path(scope), value)
        return template.model_copy(update={"value": value})

    async def resolve_notes_template(
        self,
        input_text: str,
        tags: list[str] | tuple[str, ...] = (),
        scope: str | None = None,
        date: date_type | None = None,
    ) -> InlineTemplate:
        """
        Content of a new note.

        Supported variables: input, tags and the date tokens. The old
        placeholder ``{content}`` stands for ``${input}``.
        """
        template = await self.resolve_inline_template(
            "note", DEFAULT_NOTE_TEMPLATE, scope
        )
        template = template.model_copy(
            update={"template": template.template.replace("{content}", "${input}", 1)}
        )

        value = replace_date_formats(
            template.template, date or datetime.now(), self.get_locale()
        )
        value = replace_variable("input", input_text, value)
        value = replace_variable("tags", " ".join(tags) + "\n", value)

        self.logger.debug(
            "Resolved note template",
            scope=template.scope,
            input=preview(input_text),
            tag_count=len(tags),
        )
        return template.model_copy(update={"value": value})
