"""folio.core.config

Three config surfaces only:
1) `config/default.yaml` (repo defaults)
2) `<source>/_config.yml` (site overlay)
3) Environment variables, `FOLIO_` prefix

Everything else is derived.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from folio.core.exceptions import ConfigError

SITE_CONFIG_NAME = "_config.yml"

PERMALINK_STYLES: dict[str, str] = {
    "date": "/:categories/:year/:month/:day/:title.html",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "ordinal": "/:categories/:year/:y_day/:title.html",
    "none": "/:categories/:title.html",
}


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return raw


class SiteMeta(BaseModel):
    """Exposed to templates as `site.*`."""

    title: str = "folio"
    description: str = ""
    author: str = ""
    url: str = ""
    baseurl: str = ""

    @field_validator("baseurl")
    @classmethod
    def baseurl_has_no_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if v and not v.startswith("/"):
            v = "/" + v
        return v.rstrip("/")


class ContentConfig(BaseModel):
    posts_dir: str = "_posts"
    layouts_dir: str = "_layouts"
    includes_dir: str = "_includes"
    permalink: str = "date"
    markdown_extensions: list[str] = ["md", "markdown"]
    include_unpublished: bool = False
    exclude: list[str] = []

    @field_validator("permalink")
    @classmethod
    def permalink_must_be_style_or_template(cls, v: str) -> str:
        if v in PERMALINK_STYLES or v.startswith("/"):
            return v
        raise ValueError(f"permalink must be one of {sorted(PERMALINK_STYLES)} or start with '/', got {v!r}")

    @field_validator("markdown_extensions")
    @classmethod
    def extensions_are_bare(cls, v: list[str]) -> list[str]:
        return [e.lower().lstrip(".") for e in v]

    def permalink_template(self) -> str:
        return PERMALINK_STYLES.get(self.permalink, self.permalink)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class PreviewConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 4000


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    # Paths
    source_dir: Path = Path("site")
    destination_dir: Path = Path("_site")

    # Component configs
    site: SiteMeta = Field(default_factory=SiteMeta)
    content: ContentConfig = Field(default_factory=ContentConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)

    model_config = {"env_prefix": "FOLIO_", "env_nested_delimiter": "__"}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Config:
        try:
            return cls(**raw)
        except ValidationError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return cls.from_dict(_read_yaml(path))

    @classmethod
    def for_site(cls, source_dir: Path, *, repo_root: Path | None = None) -> Config:
        """Defaults from the repo, overlaid with the site's own `_config.yml`.

        Relative paths in the overlay are resolved against `source_dir`'s parent.
        """

        root = repo_root or Path.cwd()
        default_path = root / "config" / "default.yaml"
        raw = _read_yaml(default_path) if default_path.exists() else {}

        site_path = source_dir / SITE_CONFIG_NAME
        if site_path.exists():
            raw = _deep_merge(raw, _read_yaml(site_path))

        raw["source_dir"] = source_dir
        dest = Path(raw.get("destination_dir", "_site"))
        if not dest.is_absolute():
            dest = source_dir.parent / dest
        raw["destination_dir"] = dest
        return cls.from_dict(raw)

    @property
    def posts_path(self) -> Path:
        return self.source_dir / self.content.posts_dir

    @property
    def layouts_path(self) -> Path:
        return self.source_dir / self.content.layouts_dir

    @property
    def includes_path(self) -> Path:
        return self.source_dir / self.content.includes_dir
