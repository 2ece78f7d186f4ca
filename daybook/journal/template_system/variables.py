"""Variable and date format substitution for journal templates

Two passes with different semantics:

* ``replace_variable`` resolves the *first* ``${key}`` only. Callers run it
  once per variable they know about.
* ``replace_date_formats`` resolves *every* date token. It always runs last,
  over the already substituted string.

Date tokens::

    ${year}       YYYY
    ${month}      MM
    ${day}        DD
    ${weekday}    dddd (full weekday name in the configured locale)
    ${localTime}  short locale time (CLDR)
    ${localDate}  long locale date (CLDR)
    ${d:<spec>}   <spec> handed to the formatter verbatim (moment style tokens)
"""

import datetime as dt
import re
from types import MappingProxyType

import arrow
from arrow.locales import get_locale
from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_time

DEFAULT_LOCALE = "en-US"

DATE_FORMAT_PATTERN = re.compile(
    r"\$\{(?:(year|month|day|localTime|localDate|weekday)|(d:[\s\S]+?))\}"
)

FIXED_FORMATS = MappingProxyType(
    {
        "year": "YYYY",
        "month": "MM",
        "day": "DD",
        "weekday": "dddd",
    }
)


def replace_variable(key: str, value: str, template: str) -> str:
    """Replace the first occurrence of ``${key}`` in template"""
    placeholder = "${" + key + "}"
    if placeholder not in template:
        return template
    return template.replace(placeholder, value, 1)


def replace_date_formats(
    template: str, date: dt.date, locale: str = DEFAULT_LOCALE
) -> str:
    """Replace all date tokens in template using the given date and locale"""
    if "${" not in template:
        return template

    formatter = DateFormatter(date, locale)
    return DATE_FORMAT_PATTERN.sub(formatter.format_match, template)


class DateFormatter:
    """Formats one date for the tokens of a single template"""

    def __init__(self, date: dt.date, locale: str = DEFAULT_LOCALE):
        if isinstance(date, dt.datetime):
            self.date = date
        else:
            self.date = dt.datetime.combine(date, dt.time())
        self.moment = arrow.Arrow.fromdatetime(self.date)
        self.arrow_locale = _arrow_locale(locale)
        self.babel_locale = _babel_locale(locale)

    def format_match(self, match: re.Match) -> str:
        fixed, custom = match.group(1), match.group(2)
        if fixed == "localTime":
            return self.local_time()
        if fixed == "localDate":
            return self.local_date()
        if fixed:
            return self.format(FIXED_FORMATS[fixed])
        return self.format(custom[len("d:") :])

    def format(self, spec: str) -> str:
        return self.moment.format(spec, locale=self.arrow_locale)

    def local_time(self) -> str:
        return format_time(self.date.time(), format="short", locale=self.babel_locale)

    def local_date(self) -> str:
        return format_date(self.date.date(), format="long", locale=self.babel_locale)


def _arrow_locale(locale: str) -> str:
    """First locale arrow knows: full tag, then language, then en-US"""
    language = locale.replace("_", "-").split("-")[0]
    for candidate in (locale, language, DEFAULT_LOCALE):
        name = candidate.lower().replace("_", "-")
        try:
            get_locale(name)
        except ValueError:
            continue
        return name
    return DEFAULT_LOCALE.lower()


def _babel_locale(locale: str) -> Locale:
    try:
        return Locale.parse(locale.replace("_", "-"), sep="-")
    except (UnknownLocaleError, TypeError, ValueError):
        return Locale.parse(DEFAULT_LOCALE, sep="-")
