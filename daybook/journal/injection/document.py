"""Text document model used by the injection engine

Lines and columns are zero based. A document always has at least one line;
line breaks are ``\\r\\n``, ``\\r`` or ``\\n``.
"""

import re
from bisect import bisect_right
from collections import defaultdict
from dataclasses import dataclass

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, order=True)
class Position:
    """Line and character offset within a document"""

    line: int
    character: int = 0

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> "Position":
        return Position(self.line + line_delta, self.character + character_delta)

    def is_after_or_equal(self, other: "Position") -> bool:
        return self >= other


@dataclass(frozen=True)
class TextLine:
    """One line of a document, without its line break"""

    line_number: int
    text: str

    @property
    def is_empty_or_whitespace(self) -> bool:
        return not self.text.strip()

    @property
    def end(self) -> Position:
        return Position(self.line_number, len(self.text))


class TextDocument:
    """
    In-memory text buffer addressed by URI.

    Only a document store changes the text (through ``apply_edit``); the
    version increases with every applied edit.
    """

    def __init__(self, uri: str, text: str = "", version: int = 1):
        self.uri = str(uri)
        self.version = version
        self._set_text(text)

    def __repr__(self) -> str:
        return f"TextDocument(uri={self.uri!r}, lines={self.line_count}, version={self.version})"

    def _set_text(self, text: str) -> None:
        self._text = text
        self._line_starts = [0] + [match.end() for match in _LINE_BREAK.finditer(text)]

    def _replace_text(self, text: str) -> None:
        self._set_text(text)
        self.version += 1

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def get_text(self) -> str:
        return self._text

    def line_at(self, line: int) -> TextLine:
        if not 0 <= line < self.line_count:
            raise IndexError(f"Illegal line {line}, document has {self.line_count} lines")

        start = self._line_starts[line]
        if line + 1 < self.line_count:
            end = self._line_starts[line + 1]
            text = _LINE_BREAK.sub("", self._text[start:end], count=1)
        else:
            text = self._text[start:]
        return TextLine(line, text)

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._line_starts, offset) - 1
        return self.validate_position(Position(line, offset - self._line_starts[line]))

    def offset_at(self, position: Position) -> int:
        position = self.validate_position(position)
        return self._line_starts[position.line] + position.character

    def validate_position(self, position: Position) -> Position:
        """Clamp a position into the document"""
        if position.line < 0:
            return Position(0, 0)
        if position.line >= self.line_count:
            return self.line_at(self.line_count - 1).end

        length = len(self.line_at(position.line).text)
        return Position(position.line, max(0, min(position.character, length)))


@dataclass(frozen=True)
class TextInsert:
    uri: str
    position: Position
    text: str


class WorkspaceEdit:
    """Inserts for one or more documents, applied as a single transaction"""

    def __init__(self) -> None:
        self._inserts: list[TextInsert] = []

    def __len__(self) -> int:
        return len(self._inserts)

    def insert(self, uri: str, position: Position, text: str) -> None:
        self._inserts.append(TextInsert(str(uri), position, text))

    def entries(self) -> dict[str, list[TextInsert]]:
        """Inserts grouped by document, each group in insertion order"""
        grouped: dict[str, list[TextInsert]] = defaultdict(list)
        for text_insert in self._inserts:
            grouped[text_insert.uri].append(text_insert)
        return dict(grouped)


def apply_inserts(document: TextDocument, inserts: list[TextInsert]) -> str:
    """
    New text of ``document`` with all inserts applied.

    Every position refers to the original text. Inserts at the same position
    keep their order.
    """
    text = document.get_text()
    ordered = sorted(
        ((document.offset_at(ins.position), index, ins.text) for index, ins in enumerate(inserts)),
    )

    parts: list[str] = []
    cursor = 0
    for offset, _, value in ordered:
        parts.append(text[cursor:offset])
        parts.append(value)
        cursor = offset
    parts.append(text[cursor:])
    return "".join(parts)
