"""folio.build

Source directory in, static site out.

load -> collection -> render posts and pages -> layouts -> write -> copy static files
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path, PurePosixPath
from typing import Any

from folio.content.collection import SiteCollection
from folio.content.loader import load_site
from folio.core.config import Config
from folio.core.exceptions import BuildError
from folio.core.models import Page, Post
from folio.core.time import utc_now
from folio.core.types import BuildResult
from folio.render.index import render_index
from folio.render.markup import is_markdown, markdownify
from folio.render.templates import TemplateRenderer

logger = logging.getLogger(__name__)


def output_path(destination: Path, url: str) -> Path:
    """Where a URL lands on disk. Directory-style URLs get an `index.html`.

    Raises:
        BuildError: the URL would escape the destination.
    """

    rel = PurePosixPath(url.lstrip("/"))
    if url.endswith("/") or not rel.suffix:
        rel = rel / "index.html"
    if ".." in rel.parts:
        raise BuildError(f"URL escapes the destination: {url}")
    return destination.joinpath(*rel.parts)


class SiteBuilder:
    def __init__(self, config: Config, *, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer(config)

    def _check_paths(self) -> None:
        source = self.config.source_dir.resolve()
        dest = self.config.destination_dir.resolve()
        if dest == source or source.is_relative_to(dest):
            raise BuildError(f"Destination {dest} must not be or contain the source {source}")

    def site_context(self, collection: SiteCollection, post_html: dict[str, str]) -> dict[str, Any]:
        """The `site` variable templates see. `site.posts` is the post index, newest first."""

        posts_by_url = {p.url: p.to_context(content=post_html.get(p.url)) for p in collection.posts}
        site: dict[str, Any] = self.config.site.model_dump()
        site.update(
            {
                "time": utc_now(),
                "posts": list(posts_by_url.values()),
                "pages": [p.to_context() for p in collection.pages],
                "tags": {tag: [posts_by_url[p.url] for p in posts] for tag, posts in collection.tags().items()},
                "index": [e.as_dict() for e in render_index(collection.posts)],
                "static_files": [{"path": f.source_path.as_posix(), "url": f.url} for f in collection.static_files],
            }
        )
        return site

    def render_post_body(self, post: Post) -> str:
        return markdownify(post.body)

    def render_post(self, post: Post, html: str, site: dict[str, Any]) -> str:
        return self.renderer.apply_layouts(post.layout, html, page=post.to_context(content=html), site=site)

    def render_page(self, page: Page, site: dict[str, Any]) -> str:
        page_ctx = page.to_context()
        content = self.renderer.render_string(page.body, {"site": site, "page": page_ctx}, name=page.source_path.as_posix())
        if is_markdown(page.source_path, self.config.content.markdown_extensions):
            content = markdownify(content)
        page_ctx["content"] = content
        return self.renderer.apply_layouts(page.layout, content, page=page_ctx, site=site)

    def _write(self, url: str, text: str, written: list[Path]) -> None:
        path = output_path(self.config.destination_dir, url)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        written.append(path)

    def build(self) -> BuildResult:
        start = time.perf_counter()
        self._check_paths()

        collection = load_site(self.config)
        logger.info("build_started", extra={"source": str(self.config.source_dir), "destination": str(self.config.destination_dir)})

        post_html = {p.url: self.render_post_body(p) for p in collection.posts}
        site = self.site_context(collection, post_html)

        rendered: dict[str, str] = {}
        for post in collection.posts:
            rendered[post.url] = self.render_post(post, post_html[post.url], site)
        for page in collection.pages:
            rendered[page.url] = self.render_page(page, site)

        dest = self.config.destination_dir
        if dest.exists():
            shutil.rmtree(dest)
        dest.mkdir(parents=True)

        written: list[Path] = []
        for url, text in rendered.items():
            self._write(url, text, written)

        for f in collection.static_files:
            target = dest.joinpath(*f.source_path.parts)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(self.config.source_dir / f.source_path, target)
            written.append(target)

        duration_ms = int((time.perf_counter() - start) * 1000)
        result = BuildResult(
            posts=len(collection.posts),
            pages=len(collection.pages),
            static_files=len(collection.static_files),
            written=written,
            duration_ms=duration_ms,
        )
        logger.info(
            "build_finished",
            extra={"posts": result.posts, "pages": result.pages, "static_files": result.static_files, "duration_ms": duration_ms},
        )
        return result


def build_site(config: Config) -> BuildResult:
    return SiteBuilder(config).build()
