"""Page options schema and mdpage.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mdpage.errors import ConfigError


CONFIG_FILE = "mdpage.yaml"
ENV_PREFIX = "MDPAGE_"

LIST_FIELDS = ("style", "script", "app", "header", "footer")
MAP_FIELDS = ("html", "meta", "equiv", "body", "attr")


class PageOptions(BaseModel):
    """Immutable page build options, normalized once at construction. Unknown keys are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    doctype:    str = "<!doctype html>"
    lang:       str = "en-us"
    charset:    str = "utf-8"
    title:      Optional[str] = None
    style:      list[str] = Field(default_factory=list, description="Stylesheet URLs for link elements")
    script:     list[str] = Field(default_factory=list, description="Script URLs for the document head")
    css:        Optional[str] = Field(default=None, description="File whose contents are inlined in a style element")
    javascript: Optional[str] = Field(default=None, description="File whose contents are inlined in a script element")
    favicon:    Optional[str] = None
    media:      Optional[str] = Field(default=None, description="Media attribute for stylesheet links")
    async_:     bool = Field(default=False, alias="async", description="Add async to every script element")
    html:       dict[str, str] = Field(default_factory=dict, description="Attributes for the html element")
    meta:       dict[str, str] = Field(default_factory=dict, description="name -> content meta elements")
    equiv:      dict[str, str] = Field(default_factory=dict, description="http-equiv -> content meta elements")
    body:       dict[str, str] = Field(default_factory=dict, description="Attributes for the body element")
    element:    Optional[str] = Field(default=None, description="Container element wrapping the document")
    attr:       dict[str, str] = Field(default_factory=dict, description="Attributes for the container element")
    app:        list[str] = Field(default_factory=list, description="Script URLs placed before the end of body")
    header:     list[str] = Field(default_factory=list, description="Include files at the start of body")
    footer:     list[str] = Field(default_factory=list, description="Include files at the end of body")
    markdown:   bool = Field(default=False, description="Parse header/footer files as markdown")

    @field_validator("doctype", "lang", "charset", mode="before")
    @classmethod
    def _default_when_empty(cls, value, info):
        if value in (None, ""):
            return cls.model_fields[info.field_name].default
        return value

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def _coerce_list(cls, value):
        if value is None:
            return []
        if isinstance(value, (str, Path)):
            return [str(value)]
        return [str(v) for v in value]

    @field_validator(*MAP_FIELDS, mode="before")
    @classmethod
    def _coerce_map(cls, value):
        if value is None:
            return {}
        return {str(k): "" if v is None else str(v) for k, v in dict(value).items()}

    @field_validator("async_", "markdown", mode="before")
    @classmethod
    def _coerce_flag(cls, value):
        return False if value is None else value

    @property
    def html_attrs(self) -> dict[str, str]:
        """html element attributes with lang forced in."""
        return {**self.html, "lang": self.lang}


def _env_values() -> dict[str, Any]:
    """Collect MDPAGE_<FIELD> variables; list fields are comma-separated, maps are not supported."""
    data: dict[str, Any] = {}
    for name, field in PageOptions.model_fields.items():
        if name in MAP_FIELDS:
            continue
        key = field.alias or name
        if val := os.getenv(f"{ENV_PREFIX}{key.upper()}"):
            data[key] = [v.strip() for v in val.split(",") if v.strip()] if name in LIST_FIELDS else val
    return data


def load_config(overrides: dict[str, Any] = None, path: str | Path | None = None) -> PageOptions:
    """Load PageOptions from mdpage.yaml, then MDPAGE_<FIELD> env vars, then non-None overrides."""
    config_path = Path(path) if path else Path(CONFIG_FILE)
    data: dict[str, Any] = {}
    if path and not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    if config_path.exists():
        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {config_path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {config_path.name}: expected a mapping, got {type(data).__name__}")

    data.update(_env_values())

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return PageOptions(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid page options: {e}") from e

