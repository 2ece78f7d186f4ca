"""
Parsing of the free text the user types into the journal input box.

The result is one of three input kinds:

* ``DateOffset``: a day relative to today, optionally with memo text
* ``ExplicitSelection``: an existing file picked by the user
* ``NoteRequest``: the title of a (new) note

Supported date expressions: empty input, ``0``, ``+N``/``-N``, ``today``,
``tomorrow``, ``yesterday``, ISO dates (``2026-10-19``) and weekdays with an
optional ``next``/``last`` (``next wednesday``). Words starting with ``#`` are
tags; a tag naming a configured scope selects that scope.
"""

import os
import re
from collections.abc import Collection
from dataclasses import dataclass
from datetime import date, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from daybook.errors import InputCancelled

OFFSET_PATTERN = re.compile(r"^(?:[+-]\d+|0)$")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

NAMED_OFFSETS = {"today": 0, "tomorrow": 1, "yesterday": -1}

WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}


@dataclass(frozen=True)
class DateOffset:
    offset: int
    text: str = ""
    tags: tuple[str, ...] = ()
    scope: str | None = None

    @property
    def has_memo(self) -> bool:
        return bool(self.text)

    def target_date(self, today: date | None = None) -> date:
        return (today or date.today()) + timedelta(days=self.offset)


@dataclass(frozen=True)
class ExplicitSelection:
    path: str


@dataclass(frozen=True)
class NoteRequest:
    text: str
    tags: tuple[str, ...] = ()
    scope: str | None = None


Input = DateOffset | ExplicitSelection | NoteRequest


class InputParser:
    """Turns raw input box text into an ``Input``"""

    def __init__(self, scopes: Collection[str] = ()):
        self.scopes = set(scopes)

    def parse(self, raw: str | None, today: date | None = None) -> Input:
        """
        Args:
            raw: text from the input box, None if the user aborted
            today: reference day for relative expressions

        Raises:
            InputCancelled: the prompt was aborted
            ValueError: the date expression is not a valid date
        """
        if raw is None:
            raise InputCancelled()

        raw = raw.strip()
        if raw and os.path.isfile(raw):
            return ExplicitSelection(path=raw)

        today = today or date.today()
        words, tags = self._split_tags(raw)
        offset, consumed = self._parse_date_expression(words, today)

        return DateOffset(
            offset=offset,
            text=" ".join(words[consumed:]),
            tags=tags,
            scope=self._scope_for(tags),
        )

    def parse_note(self, raw: str | None) -> NoteRequest:
        """Title of a new note, with tags and scope"""
        if raw is None:
            raise InputCancelled()

        words, tags = self._split_tags(raw.strip())
        return NoteRequest(text=" ".join(words), tags=tags, scope=self._scope_for(tags))

    def _split_tags(self, raw: str) -> tuple[list[str], tuple[str, ...]]:
        words: list[str] = []
        tags: list[str] = []
        for word in raw.split():
            if word.startswith("#") and len(word) > 1:
                tags.append(word)
            else:
                words.append(word)
        return words, tuple(tags)

    def _scope_for(self, tags: tuple[str, ...]) -> str | None:
        for tag in tags:
            if tag[1:] in self.scopes:
                return tag[1:]
        return None

    def _parse_date_expression(self, words: list[str], today: date) -> tuple[int, int]:
        """Offset in days and the number of words the expression used"""
        if not words:
            return 0, 0

        first = words[0].lower()
        if OFFSET_PATTERN.match(first):
            return int(first), 1
        if first in NAMED_OFFSETS:
            return NAMED_OFFSETS[first], 1
        if ISO_DATE_PATTERN.match(first):
            target = date_parser.isoparse(first).date()
            return (target - today).days, 1

        if first in ("next", "last") and len(words) > 1 and words[1].lower() in WEEKDAYS:
            weekday = WEEKDAYS[words[1].lower()]
            if first == "next":
                target = today + relativedelta(days=+1, weekday=weekday(+1))
            else:
                target = today + relativedelta(days=-1, weekday=weekday(-1))
            return (target - today).days, 2

        if first in WEEKDAYS:
            # upcoming occurrence, today included
            target = today + relativedelta(weekday=WEEKDAYS[first](+1))
            return (target - today).days, 1

        return 0, 0
