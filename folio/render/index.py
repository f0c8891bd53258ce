"""folio.render.index

The post index: every post as (date, title, link), newest first.

Pure transformation. No filtering, no escaping, no errors.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from folio.core.models import Post
from folio.core.time import date_to_string
from folio.core.types import IndexEntry


def _sort_key(post: Post) -> tuple:
    # The calendar date shown in the index leads; the instant only orders posts within it.
    return (post.date.date(), post.date, post.url)


def order_posts(items: Iterable[Post]) -> list[Post]:
    """Descending by calendar date, then instant, then URL, so input order never matters."""

    return sorted(items, key=_sort_key, reverse=True)


def render_index(items: Iterable[Post]) -> list[IndexEntry]:
    return [IndexEntry(date=p.date.date(), title=p.title, url=p.url) for p in order_posts(items)]


def format_index_text(entries: Sequence[IndexEntry]) -> str:
    if not entries:
        return ""
    return "".join(f"{date_to_string(e.date)}  {e.title}  {e.url}\n" for e in entries)


def format_index_json(entries: Sequence[IndexEntry]) -> str:
    """Canonical JSON: sorted keys, compact separators."""

    return json.dumps([e.as_dict() for e in entries], sort_keys=True, separators=(",", ":"), ensure_ascii=False)
