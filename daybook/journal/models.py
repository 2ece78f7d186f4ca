"""
Journal data models
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

SCOPE_DEFAULT = "default"


class JournalPageType(Enum):
    """Kinds of journal pages"""

    NOTE = "note"
    ENTRY = "entry"
    ATTACHMENT = "attachment"


class PathFilePattern(BaseModel):
    """Path and file name pattern of one page type"""

    path: str = ""
    file: str = ""


class PatternDefinition(BaseModel):
    """Pattern block as it appears in the settings (``patterns``)"""

    notes: PathFilePattern = Field(default_factory=PathFilePattern)
    entries: PathFilePattern = Field(default_factory=PathFilePattern)


DEFAULT_PATTERNS = PatternDefinition(
    notes=PathFilePattern(
        path="${base}/notes",
        file="N${year}${month}${day}_${input}.${ext}",
    ),
    entries=PathFilePattern(
        path="${base}/entries",
        file="${year}-${month}-${day} ${weekday}.${ext}",
    ),
)


class PatternKind(Enum):
    """The four pattern kinds, as ``(section, field)`` of a PatternDefinition"""

    NOTE_PATH = ("notes", "path")
    NOTE_FILE = ("notes", "file")
    ENTRY_PATH = ("entries", "path")
    ENTRY_FILE = ("entries", "file")

    @property
    def section(self) -> str:
        return self.value[0]

    @property
    def field(self) -> str:
        return self.value[1]

    def lookup(self, definition: PatternDefinition | None) -> str | None:
        """Read this kind's pattern string from a definition"""
        if definition is None:
            return None
        return getattr(getattr(definition, self.section), self.field)

    @property
    def default(self) -> str:
        return self.lookup(DEFAULT_PATTERNS) or ""


class ScopedTemplate(BaseModel):
    """
    A pattern or content template bound to a scope.

    ``template`` holds the raw string with unresolved ``${...}`` variables,
    ``value`` the substituted result once resolution has run.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    scope: str = SCOPE_DEFAULT
    template: str = ""
    value: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.value is not None

    def resolved(self, value: str) -> "ScopedTemplate":
        """Copy of this template carrying ``value``; ``template`` stays untouched"""
        return self.model_copy(update={"value": value})


class InlineTemplate(ScopedTemplate):
    """Content template with an optional anchor (``after``) for injection"""

    after: str | None = ""


class ScopeDefinition(BaseModel):
    """User defined scope (``scopes`` entry of the settings)"""

    model_config = ConfigDict(extra="ignore")

    name: str
    base: str = ""
    patterns: PatternDefinition = Field(default_factory=PatternDefinition)
    templates: list[InlineTemplate] = Field(default_factory=list)

    def find_template(self, name: str) -> InlineTemplate | None:
        return find_template(self.templates, name)


def find_template(
    templates: list[InlineTemplate] | None, name: str
) -> InlineTemplate | None:
    """Last template with the given name wins, like a settings override"""
    matches = [tpl for tpl in templates or [] if tpl.name == name]
    return matches[-1] if matches else None
