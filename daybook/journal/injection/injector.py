"""Injects generated content into existing documents"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from daybook.errors import InjectionError
from daybook.journal.models import InlineTemplate
from daybook.utils.error_handler import ErrorHandler
from daybook.utils.logger import preview
from daybook.utils.mixins import LoggerMixin

from .document import Position, TextDocument, WorkspaceEdit
from .store import IDocumentStore

# Right below a single line header
DEFAULT_POSITION = Position(1, 0)

HEADER_PATTERN = re.compile(r"^#+\s+.*$")


@dataclass
class InlineString:
    """A computed edit: what to insert where, in which document"""

    position: Position | None
    value: str
    document: TextDocument


class Injector(LoggerMixin):
    """
    Computes insert positions for generated content and applies them.

    ``build_inline_string`` decides *where* (anchor lookup), while
    ``inject_inline_string`` decides *how* (line breaks around the content)
    and applies one or more inserts as a single edit.
    """

    def __init__(self, store: IDocumentStore):
        self.store = store

    async def build_inline_string(
        self,
        document: TextDocument,
        template: InlineTemplate,
        *values: Sequence[str],
    ) -> InlineString:
        """
        Writes content at the location configured in the inline template (the
        ``after`` anchor). Without anchor, content goes right after the header.

        Args:
            document: target document
            template: resolved inline template
            *values: ``(placeholder, replacement)`` pairs, each applied once

        Returns:
            InlineString ready for ``inject_inline_string``
        """
        self.logger.debug(
            "Building inline string",
            template=template.name,
            after=template.after,
            value_count=len(values),
        )

        content = template.value if template.is_resolved else template.template
        for placeholder, replacement in values:
            content = content.replace(placeholder, replacement, 1)

        position = DEFAULT_POSITION
        after = template.after or ""
        if after:
            offset = document.get_text().find(after)

            # markdown needs a line break between a header and the injected text
            if after.startswith("#"):
                content = "\n" + content

            if offset > 0:
                position = document.validate_position(document.position_at(offset))
                position = position.translate(1)
            else:
                self.logger.debug(
                    "Anchor not found, using default position",
                    anchor=after,
                    uri=document.uri,
                )
        else:
            content = "\n" + content

        return InlineString(position=position, value=content, document=document)

    async def inject_inline_string(
        self, content: InlineString, *other: InlineString
    ) -> TextDocument:
        """
        Injects the string at its position, together with any further strings.

        All inserts are applied as one edit against the current text, so the
        positions of later inserts are not shifted by earlier ones.

        Raises:
            InjectionError: no edit was built or the store rejected it
        """
        uri = content.document.uri
        self.logger.debug(
            "Injecting inline string",
            uri=uri,
            value=preview(content.value),
            additional=len(other),
        )

        try:
            edit = self._build_edit(content, other)
            if len(edit) == 0:
                raise InjectionError(InjectionError.NO_EDITS, uri)

            applied = await self.store.apply_edit(edit)
            if not applied:
                raise InjectionError(InjectionError.EDIT_FAILED, uri)
        except Exception as e:
            ErrorHandler.log_and_reraise(
                "inject string", e, uri=uri, version=content.document.version
            )

        self.logger.info(
            "Content injected", uri=uri, inserts=len(edit), version=content.document.version
        )
        return content.document

    async def inject_string(
        self, document: TextDocument, content: str, position: Position | None
    ) -> TextDocument:
        """Injects a string at the given position"""
        return await self.inject_inline_string(
            InlineString(position=position, value=content, document=document)
        )

    async def inject_header(self, document: TextDocument, content: str) -> TextDocument:
        """Injects the given string as header (first line of the document)"""
        return await self.inject_string(document, content, Position(0, 0))

    async def inject_template(
        self,
        document: TextDocument,
        template: InlineTemplate,
        *values: Sequence[str],
    ) -> TextDocument:
        inline_string = await self.build_inline_string(document, template, *values)
        return await self.inject_inline_string(inline_string)

    async def inject_batch(
        self,
        document: TextDocument,
        template: InlineTemplate,
        values: Sequence[Sequence[Sequence[str]]],
    ) -> TextDocument:
        """
        Injects one rendering of ``template`` per entry of ``values``, all
        computed against the same document version and applied as one edit.
        """
        if not values:
            raise InjectionError(InjectionError.NO_EDITS, document.uri)

        inline_strings = [
            await self.build_inline_string(document, template, *pairs)
            for pairs in values
        ]
        return await self.inject_inline_string(inline_strings[0], *inline_strings[1:])

    def _build_edit(
        self, content: InlineString, other: Sequence[InlineString]
    ) -> WorkspaceEdit:
        document = content.document
        position = content.position or DEFAULT_POSITION
        value = content.value

        # column 0 is a request for a line of its own
        new_line = position.character == 0

        # a target line past the end means the end of the last line
        position = document.validate_position(position)

        # shift the existing content of an occupied line
        if new_line and not document.line_at(position.line).is_empty_or_whitespace:
            end = document.line_at(document.line_count - 1).end
            if position.is_after_or_equal(end):
                value = "\n" + value
            value = value + "\n"

        # keep a blank line before a following header
        if new_line and document.line_count > position.line + 1:
            if HEADER_PATTERN.match(document.line_at(position.line + 1).text):
                value = value + "\n"

        edit = WorkspaceEdit()
        # last text inserted at each position, to keep adjacent values apart
        tails: dict[tuple[str, Position], str] = {}
        if value:
            edit.insert(document.uri, position, value)
            tails[(document.uri, position)] = value

        for extra in other:
            extra_document = extra.document
            extra_position = extra_document.validate_position(
                extra.position or DEFAULT_POSITION
            )
            extra_value = extra.value

            previous = tails.get((extra_document.uri, extra_position))
            if previous is not None and previous.endswith("\n"):
                # already on a fresh line
                needs_break = False
                extra_value = extra_value.removeprefix("\n")
            elif previous is not None:
                needs_break = True
            else:
                line = extra_document.line_at(extra_position.line)
                needs_break = (
                    extra_position.character > 0
                    and extra_position == line.end
                    and not line.is_empty_or_whitespace
                )
            if needs_break and not extra_value.startswith("\n"):
                extra_value = "\n" + extra_value

            extra_value = extra_value + "\n"
            edit.insert(extra_document.uri, extra_position, extra_value)
            tails[(extra_document.uri, extra_position)] = extra_value

        return edit
