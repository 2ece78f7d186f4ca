"""Document stores: where documents live and how edits are applied"""

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import aiofiles
import aiofiles.os

from daybook.utils.mixins import LoggerMixin

from .document import TextDocument, WorkspaceEdit, apply_inserts


class IDocumentStore(Protocol):
    """Interface for the editor's document storage."""

    async def open_document(self, uri: str) -> TextDocument:
        """Open an existing document, FileNotFoundError if there is none."""
        ...

    async def create_document(self, uri: str, content: str) -> TextDocument:
        """Create a document with the given initial content."""
        ...

    async def apply_edit(self, edit: WorkspaceEdit) -> bool:
        """Apply all inserts of the edit atomically, False if rejected."""
        ...

    async def ensure_directory(self, path: str) -> None:
        """Make sure the directory exists."""
        ...


class InMemoryDocumentStore(LoggerMixin):
    """Keeps documents in memory only"""

    def __init__(self) -> None:
        self.documents: dict[str, TextDocument] = {}
        self.directories: set[str] = set()

    async def open_document(self, uri: str) -> TextDocument:
        document = self.documents.get(str(uri))
        if document is None:
            raise FileNotFoundError(f"Document not found: {uri}")
        return document

    async def create_document(self, uri: str, content: str) -> TextDocument:
        document = TextDocument(str(uri), content)
        self.documents[document.uri] = document
        self.logger.debug("Document created", uri=document.uri, size=len(content))
        return document

    async def apply_edit(self, edit: WorkspaceEdit) -> bool:
        updates: list[tuple[TextDocument, str]] = []
        for uri, inserts in edit.entries().items():
            try:
                document = await self.open_document(uri)
            except FileNotFoundError:
                self.logger.warning("Edit targets unknown document", uri=uri)
                return False
            updates.append((document, apply_inserts(document, inserts)))

        # nothing is committed before every document has been computed
        return await self._commit(updates)

    async def ensure_directory(self, path: str) -> None:
        self.directories.add(str(path))

    async def _commit(self, updates: list[tuple[TextDocument, str]]) -> bool:
        for document, text in updates:
            document._replace_text(text)
        return True


class FileDocumentStore(InMemoryDocumentStore):
    """
    Documents backed by files on disk, written on every applied edit.

    An edit is first written to temporary files next to the documents. The
    documents are replaced only once every temporary file has been written.
    """

    TEMP_SUFFIX = ".daybook-tmp"

    def __init__(self, encoding: str = "utf-8") -> None:
        super().__init__()
        self.encoding = encoding

    async def open_document(self, uri: str) -> TextDocument:
        if str(uri) in self.documents:
            return self.documents[str(uri)]

        path = Path(uri)
        if not path.exists():
            raise FileNotFoundError(f"Document not found: {uri}")

        async with aiofiles.open(path, encoding=self.encoding, newline="") as f:
            content = await f.read()

        document = TextDocument(str(uri), content)
        self.documents[document.uri] = document
        self.logger.debug("Document loaded", uri=document.uri, lines=document.line_count)
        return document

    async def create_document(self, uri: str, content: str) -> TextDocument:
        path = Path(uri)
        await self.ensure_directory(str(path.parent))

        async with aiofiles.open(path, "w", encoding=self.encoding, newline="") as f:
            await f.write(content)

        self.logger.info("Document created", uri=str(uri), size=len(content))
        return await super().create_document(uri, content)

    async def ensure_directory(self, path: str) -> None:
        await aiofiles.os.makedirs(path, exist_ok=True)

    def _temp_path(self, document: TextDocument) -> Path:
        path = Path(document.uri)
        return path.with_name(f".{path.name}{self.TEMP_SUFFIX}")

    async def _commit(self, updates: list[tuple[TextDocument, str]]) -> bool:
        staged: list[tuple[TextDocument, str, Path]] = []
        try:
            for document, text in updates:
                if await aiofiles.os.path.exists(
                    document.uri
                ) and not await aiofiles.os.path.isfile(document.uri):
                    raise IsADirectoryError(f"Not a regular file: {document.uri}")

                temp_path = self._temp_path(document)
                staged.append((document, text, temp_path))
                async with aiofiles.open(
                    temp_path, "w", encoding=self.encoding, newline=""
                ) as f:
                    await f.write(text)
        except OSError as e:
            self.logger.error("Failed to write document", uri=document.uri, error=str(e))
            await self._discard(temp_path for _, _, temp_path in staged)
            return False

        for index, (document, text, temp_path) in enumerate(staged):
            try:
                await aiofiles.os.replace(temp_path, document.uri)
            except OSError as e:
                self.logger.error(
                    "Failed to replace document", uri=document.uri, error=str(e)
                )
                await self._discard(temp for _, _, temp in staged[index:])
                return False
            document._replace_text(text)
        return True

    async def _discard(self, temp_paths: Iterable[Path]) -> None:
        for temp_path in temp_paths:
            try:
                await aiofiles.os.remove(temp_path)
            except FileNotFoundError:
                continue
