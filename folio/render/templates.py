"""folio.render.templates

Jinja2 for pages and layouts.

Autoescape is off: titles and URLs are authored content and pass through as written.
Layouts live in `_layouts/`, may carry their own metadata block, and may name a
parent `layout` of their own.
"""

from __future__ import annotations

import html
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import jinja2

from folio.content.frontmatter import split_front_matter
from folio.core.config import Config
from folio.core.exceptions import FrontMatterError, TemplateError
from folio.core.time import date_to_long_string, date_to_string
from folio.render.markup import markdownify

logger = logging.getLogger(__name__)


def _as_date(value: Any) -> date | None:
    if isinstance(value, (date, datetime)):
        return value
    return None


def _filter_date_to_string(value: Any) -> str:
    d = _as_date(value)
    return date_to_string(d) if d is not None else ""


def _filter_date_to_long_string(value: Any) -> str:
    d = _as_date(value)
    return date_to_long_string(d) if d is not None else ""


def _filter_date_to_xmlschema(value: Any) -> str:
    d = _as_date(value)
    return d.isoformat() if d is not None else ""


def _filter_xml_escape(value: Any) -> str:
    return html.escape("" if value is None else str(value), quote=True)


def slugify(value: Any) -> str:
    s = str(value or "").strip().lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    return s.strip("-")


class Layout:
    __slots__ = ("name", "meta", "template")

    def __init__(self, name: str, meta: dict[str, Any], template: jinja2.Template) -> None:
        self.name = name
        self.meta = meta
        self.template = template

    @property
    def parent(self) -> str | None:
        p = self.meta.get("layout")
        return str(p) if p else None


class TemplateRenderer:
    """Renders page bodies and wraps content in layouts."""

    def __init__(self, config: Config) -> None:
        self.config = config
        loader = jinja2.FileSystemLoader(str(config.includes_path))
        self.env = jinja2.Environment(loader=loader, autoescape=False, keep_trailing_newline=True)
        self.env.filters.update(
            {
                "date_to_string": _filter_date_to_string,
                "date_to_long_string": _filter_date_to_long_string,
                "date_to_xmlschema": _filter_date_to_xmlschema,
                "xml_escape": _filter_xml_escape,
                "markdownify": markdownify,
                "slugify": slugify,
            }
        )
        self._layouts: dict[str, Layout] = {}

    def render_string(self, source: str, context: dict[str, Any], *, name: str = "<string>") -> str:
        try:
            return self.env.from_string(source).render(**context)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"{name}:{e.lineno}: {e.message}") from e
        except jinja2.TemplateError as e:
            raise TemplateError(f"{name}: {e}") from e

    def _layout_path(self, name: str) -> Path:
        base = self.config.layouts_path
        exact = base / name
        if exact.is_file():
            return exact
        html_path = base / f"{name}.html"
        if html_path.is_file():
            return html_path
        matches = sorted(base.glob(f"{name}.*")) if base.is_dir() else []
        if matches:
            return matches[0]
        raise TemplateError(f"Layout not found: {name!r} (looked in {base})")

    def layout(self, name: str) -> Layout:
        cached = self._layouts.get(name)
        if cached is not None:
            return cached

        path = self._layout_path(name)
        try:
            meta, body = split_front_matter(path.read_text(encoding="utf-8"), source=str(path))
        except FrontMatterError as e:
            raise TemplateError(str(e)) from e

        try:
            template = self.env.from_string(body)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"{path}:{e.lineno}: {e.message}") from e

        layout = Layout(name, meta, template)
        self._layouts[name] = layout
        return layout

    def apply_layouts(self, layout: str | None, content: str, *, page: dict[str, Any], site: dict[str, Any]) -> str:
        """Wrap `content` in `layout`, then in that layout's parent, and so on."""

        seen: list[str] = []
        name = layout
        while name:
            if name in seen:
                chain = " -> ".join([*seen, name])
                raise TemplateError(f"Layout cycle: {chain}")
            seen.append(name)

            current = self.layout(name)
            try:
                content = current.template.render(content=content, page=page, site=site, layout=current.meta)
            except jinja2.TemplateError as e:
                raise TemplateError(f"layout {name!r}: {e}") from e
            name = current.parent

        if seen:
            logger.debug("layouts_applied", extra={"url": page.get("url"), "chain": seen})
        return content
