"""Journal commands: the operations the editor layer triggers"""

from datetime import date, datetime

from daybook.errors import InputCancelled
from daybook.journal.injection import Injector, TextDocument
from daybook.journal.input import (
    DateOffset,
    ExplicitSelection,
    Input,
    InputParser,
    NoteRequest,
)
from daybook.journal.pages import PageLoader
from daybook.journal.template_system import TemplateEngine
from daybook.utils.error_handler import handle_errors
from daybook.utils.mixins import LoggerMixin

DEFAULT_MEMO_TEMPLATE = "- ${input}"


class JournalCommands(LoggerMixin):
    """
    Composes the template engine and the injector.

    The editor layer supplies the raw input and today's date and shows the
    returned document. Aborted prompts raise ``InputCancelled``, which is
    never logged as a failure.
    """

    def __init__(self, engine: TemplateEngine, injector: Injector):
        self.engine = engine
        self.injector = injector
        self.pages = PageLoader(engine, injector.store)

    def parser(self) -> InputParser:
        return InputParser(scopes=self.engine.get_scopes())

    @handle_errors("get file")
    async def show_entry(
        self, offset: int, scope: str | None = None, today: date | None = None
    ) -> TextDocument:
        """Entry for today, yesterday or tomorrow (no input box involved)"""
        return await self.load_page(DateOffset(offset=offset, scope=scope), today)

    @handle_errors("process input")
    async def process_input(
        self, raw: str | None, today: date | None = None
    ) -> TextDocument:
        """Entry, memo or selected file for whatever the user typed"""
        page_input = self.parser().parse(raw, today)
        return await self.load_page(page_input, today)

    async def show_note(self, raw: str | None, today: date | None = None) -> TextDocument | None:
        """Creates or opens the note titled ``raw``; None if the prompt was aborted"""
        try:
            return await self._show_note(raw, today)
        except InputCancelled:
            return None

    @handle_errors("load note")
    async def _show_note(self, raw: str | None, today: date | None) -> TextDocument:
        return await self.load_page(self.parser().parse_note(raw), today)

    async def load_page(self, page_input: Input, today: date | None = None) -> TextDocument:
        today = today or date.today()

        match page_input:
            case ExplicitSelection(path=path):
                return await self.injector.store.open_document(path)
            case NoteRequest(text=text, tags=tags, scope=scope):
                uri = await self.pages.resolve_note_uri(today, text, scope)
                content = await self.engine.resolve_notes_template(
                    text, tags, scope, date=datetime.now()
                )
                return await self.pages.load_note(uri, content.value or "")
            case DateOffset() if page_input.has_memo:
                return await self.add_memo(page_input, today)
            case DateOffset(scope=scope):
                return await self.pages.load_entry(page_input.target_date(today), scope)
            case _:
                raise TypeError(f"Unsupported input: {page_input!r}")

    async def add_memo(self, memo: DateOffset, today: date | None = None) -> TextDocument:
        """Adds a memo line to the entry of the memo's day"""
        target = memo.target_date(today)
        document = await self.pages.load_entry(target, memo.scope)
        template = await self.engine.resolve_content_template(
            "memo", DEFAULT_MEMO_TEMPLATE, datetime.now(), memo.scope
        )
        return await self.injector.inject_template(
            document, template, ("${input}", memo.text)
        )
