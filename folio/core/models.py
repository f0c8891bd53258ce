"""folio.core.models

Core content models.

A content item is immutable once loaded. Edits happen in the source file.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field


class ContentItem(BaseModel):
    """A post or page: metadata block plus body."""

    kind: Literal["post", "page"]
    source_path: Path  # relative to the site source
    url: str
    title: str
    body: str
    layout: str | None = None
    date: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    front_matter: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_context(self, *, content: str | None = None) -> dict[str, Any]:
        """Template view of the item: front matter first, derived fields win."""

        ctx: dict[str, Any] = dict(self.front_matter)
        ctx.update(
            {
                "title": self.title,
                "url": self.url,
                "date": self.date,
                "tags": list(self.tags),
                "layout": self.layout,
                "path": self.source_path.as_posix(),
                "content": self.body if content is None else content,
            }
        )
        return ctx


class Post(ContentItem):
    """A dated entry from the posts directory."""

    kind: Literal["post"] = "post"
    date: datetime
    slug: str
    categories: list[str] = Field(default_factory=list)

    def to_context(self, *, content: str | None = None) -> dict[str, Any]:
        ctx = super().to_context(content=content)
        ctx["slug"] = self.slug
        ctx["categories"] = list(self.categories)
        ctx["id"] = self.url.rstrip("/").removesuffix(".html") or "/"
        return ctx


class Page(ContentItem):
    """Any other file with a metadata block."""

    kind: Literal["page"] = "page"


class StaticFile(BaseModel):
    """Copied through unchanged."""

    source_path: Path
    url: str

    model_config = {"frozen": True}
