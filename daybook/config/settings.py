"""Configuration settings for Daybook with caching utilities."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from daybook.errors import ConfigurationError
from daybook.journal.models import (
    SCOPE_DEFAULT,
    InlineTemplate,
    PatternDefinition,
    ScopeDefinition,
)


class Settings(BaseSettings):
    """Journal settings (the ``journal.*`` block of the editor configuration)"""

    model_config = SettingsConfigDict(
        env_prefix="JOURNAL_",
        env_file=[".env.test", ".env"],
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        json_file="journal.json",
        json_file_encoding="utf-8",
        yaml_file="journal.yaml",
        yaml_file_encoding="utf-8",
        case_sensitive=False,
        # legacy keys such as ``tpl-memo`` or ``memo-after`` land in model_extra
        extra="allow",
    )

    # Storage
    base: str = ""  # empty means ~/Journal
    ext: str = "md"
    locale: str = ""  # empty means en-US

    # Patterns, scopes and inline templates
    patterns: PatternDefinition = Field(default_factory=PatternDefinition)
    scopes: list[ScopeDefinition] = Field(default_factory=list)
    templates: list[InlineTemplate] = Field(default_factory=list)

    # Legacy single string templates (pre 0.6 configuration)
    tpl_entry: str | None = None
    tpl_note: str | None = None
    entry_after: str | None = None
    note_after: str | None = None

    # Editor behaviour
    dev: bool = False
    open_in_new_editor_group: bool = False
    workspace_root: str = ""

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"
    log_file: Path | None = None

    @field_validator("scopes")
    @classmethod
    def _validate_scope_names(
        cls, scopes: list[ScopeDefinition]
    ) -> list[ScopeDefinition]:
        seen: set[str] = set()
        for scope in scopes:
            if scope.name == SCOPE_DEFAULT:
                raise ValueError(f"Scope name '{SCOPE_DEFAULT}' is reserved")
            if scope.name in seen:
                raise ValueError(f"Duplicate scope name: {scope.name}")
            seen.add(scope.name)
        return scopes

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a setting by its editor key (``tpl-note``, ``note-after``...)"""
        attribute = key.replace("-", "_")
        if attribute in type(self).model_fields:
            value = getattr(self, attribute)
            if value is not None:
                return value

        extra = self.model_extra or {}
        for candidate in (key, attribute):
            if extra.get(candidate) is not None:
                return extra[candidate]
        return default

    @property
    def is_development(self) -> bool:
        """Check if the development mode (tracing) is enabled"""
        return self.dev


_SETTINGS_LOCK = RLock()
_SETTINGS_CACHE: Settings | None = None


def get_settings(*, refresh: bool = False) -> Settings:
    """Return a cached ``Settings`` instance.

    Parameters
    ----------
    refresh:
        When ``True`` the cached instance is discarded and a new one is created.

    Raises
    ------
    ConfigurationError
        The environment or a configuration file holds invalid settings.
    """

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        if refresh or _SETTINGS_CACHE is None:
            try:
                _SETTINGS_CACHE = Settings()
            except ValidationError as e:
                raise ConfigurationError(f"Invalid journal settings: {e}") from e
        return _SETTINGS_CACHE


def clear_settings_cache() -> None:
    """Clear the cached settings instance."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = None


get_settings.cache_clear = clear_settings_cache  # type: ignore[attr-defined]


@contextmanager
def override_settings(**overrides: Any) -> Iterator[Settings]:
    """Temporarily override the cached settings within a context."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        previous_settings = _SETTINGS_CACHE

    base_settings = previous_settings or Settings()
    patched_settings = base_settings.model_copy(update=overrides)

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = patched_settings

    try:
        yield patched_settings
    finally:
        with _SETTINGS_LOCK:
            _SETTINGS_CACHE = previous_settings
