"""Loading and creating journal pages (entries and notes)"""

import os
import re
from datetime import date as date_type

from daybook.journal.injection import IDocumentStore, TextDocument
from daybook.journal.models import JournalPageType
from daybook.journal.template_system import TemplateEngine
from daybook.utils.mixins import LoggerMixin

_INVALID_FILENAME_CHARS = re.compile(r"[\\/<>:\n|?*\"]")


def sanitize_filename(text: str) -> str:
    """Turn note input into something usable as (part of) a file name"""
    text = re.sub(r"\s+", "_", text.strip())
    return _INVALID_FILENAME_CHARS.sub("-", text)


class PageLoader(LoggerMixin):
    """Opens existing pages or creates them from the configured templates"""

    def __init__(self, engine: TemplateEngine, store: IDocumentStore):
        self.engine = engine
        self.store = store

    async def resolve_entry_uri(self, date: date_type, scope: str | None = None) -> str:
        path = await self.engine.resolve_entry_path(date, scope)
        file = await self.engine.resolve_entry_file(date, scope)
        return os.path.join(path.value or "", file.value or "")

    async def resolve_note_uri(
        self, date: date_type, input_text: str, scope: str | None = None
    ) -> str:
        path = await self.engine.resolve_note_path(date, scope)
        file = await self.engine.resolve_note_file(
            date, sanitize_filename(input_text), scope
        )
        return os.path.join(path.value or "", file.value or "")

    async def load_entry(self, date: date_type, scope: str | None = None) -> TextDocument:
        """Journal entry of the given day, created with the entry header if new"""
        uri = await self.resolve_entry_uri(date, scope)
        try:
            return await self.store.open_document(uri)
        except FileNotFoundError:
            header = await self.engine.resolve_entry_template(date, scope)
            self.logger.info(
                "Creating page",
                page_type=JournalPageType.ENTRY.value,
                uri=uri,
                scope=header.scope,
            )
            await self.store.ensure_directory(os.path.dirname(uri))
            return await self.store.create_document(uri, header.value or "")

    async def load_note(self, uri: str, content: str) -> TextDocument:
        """Note at ``uri``, created with ``content`` if new"""
        try:
            return await self.store.open_document(uri)
        except FileNotFoundError:
            self.logger.info("Creating page", page_type=JournalPageType.NOTE.value, uri=uri)
            await self.store.ensure_directory(os.path.dirname(uri))
            return await self.store.create_document(uri, content)
