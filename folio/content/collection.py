"""folio.content.collection

The site-wide collection. Every post, page and static file owns exactly one URL.
"""

from __future__ import annotations

from collections.abc import Iterable

from folio.core.exceptions import DuplicateUrlError
from folio.core.models import ContentItem, Page, Post, StaticFile
from folio.render.index import order_posts


class SiteCollection:
    """Posts (newest first), pages and static files."""

    def __init__(
        self,
        *,
        posts: Iterable[Post] = (),
        pages: Iterable[Page] = (),
        static_files: Iterable[StaticFile] = (),
    ) -> None:
        self._posts = order_posts(posts)
        self._pages = sorted(pages, key=lambda p: p.url)
        self._static_files = sorted(static_files, key=lambda f: f.url)

        self._by_url: dict[str, ContentItem] = {}
        claimed: dict[str, ContentItem | StaticFile] = {}
        for item in [*self._posts, *self._pages, *self._static_files]:
            existing = claimed.get(item.url)
            if existing is not None:
                raise DuplicateUrlError(
                    f"{item.url} is claimed by both {existing.source_path.as_posix()} and {item.source_path.as_posix()}"
                )
            claimed[item.url] = item
            if isinstance(item, ContentItem):
                self._by_url[item.url] = item

    @property
    def posts(self) -> list[Post]:
        return list(self._posts)

    @property
    def pages(self) -> list[Page]:
        return list(self._pages)

    @property
    def static_files(self) -> list[StaticFile]:
        return list(self._static_files)

    def by_url(self, url: str) -> ContentItem | None:
        return self._by_url.get(url)

    def tags(self) -> dict[str, list[Post]]:
        """Tag -> posts, newest first. Tags in alphabetical order."""

        out: dict[str, list[Post]] = {}
        for post in self._posts:
            for tag in post.tags:
                out.setdefault(tag, []).append(post)
        return {t: out[t] for t in sorted(out)}

    def __len__(self) -> int:
        return len(self._posts) + len(self._pages)
