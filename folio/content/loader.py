"""folio.content.loader

Turns files under the site source into posts, pages and static files.

Post filenames carry the date: `_posts/2013-08-14-attribute-whitelisting.md`.
A `date` in the metadata block wins over the filename.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Any

from folio.content.collection import SiteCollection
from folio.content.frontmatter import has_front_matter, split_front_matter
from folio.core.config import Config
from folio.core.exceptions import ContentError, FilenameError, FrontMatterError
from folio.core.models import Page, Post, StaticFile
from folio.core.time import parse_datetime

logger = logging.getLogger(__name__)

POST_FILENAME_RE = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")
_PLACEHOLDER_RE = re.compile(r":([a-z_]+)")


def slug_title(slug: str) -> str:
    """`storing-currency` -> `Storing Currency`."""

    words = [w for w in re.split(r"[-_\s]+", slug) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def normalize_labels(value: Any) -> list[str]:
    """Tags/categories as a list, or a whitespace-separated string. First-seen order, no repeats."""

    if value is None:
        return []
    if isinstance(value, str):
        raw = value.split()
    elif isinstance(value, (list, tuple, set)):
        raw = [str(v).strip() for v in value]
    else:
        raw = [str(value).strip()]

    out: list[str] = []
    for label in raw:
        if label and label not in out:
            out.append(label)
    return out


def expand_permalink(template: str, values: dict[str, str]) -> str:
    """Substitute `:name` placeholders and collapse empty path segments."""

    url = _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)
    url = re.sub(r"/{2,}", "/", url)
    if not url.startswith("/"):
        url = "/" + url
    return url


def _permalink_values(*, date: datetime | None, slug: str, categories: list[str]) -> dict[str, str]:
    values = {"title": slug, "slug": slug, "categories": "/".join(c.lower() for c in categories)}
    if date is None:
        return values
    values.update(
        {
            "year": f"{date.year:04d}",
            "month": f"{date.month:02d}",
            "day": f"{date.day:02d}",
            "i_month": str(date.month),
            "i_day": str(date.day),
            "short_year": f"{date.year % 100:02d}",
            "y_day": f"{date.timetuple().tm_yday:03d}",
        }
    )
    return values


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContentError(f"{path}: cannot read: {e}") from e


def is_published(meta: dict[str, Any]) -> bool:
    return meta.get("published", True) is not False


def load_post(path: Path, config: Config) -> Post:
    """Load one post file.

    Raises:
        FilenameError: the filename does not start with `YYYY-MM-DD-`.
        FrontMatterError: the metadata block or its `date` is malformed.
    """

    rel = path.relative_to(config.source_dir)
    m = POST_FILENAME_RE.match(path.stem)
    if m is None:
        raise FilenameError(f"{rel}: post filename must look like YYYY-MM-DD-slug{path.suffix}")

    try:
        file_date = parse_datetime(m.group("date"))
    except ValueError as e:
        raise FilenameError(f"{rel}: invalid date in filename: {e}") from e

    meta, body = split_front_matter(_read(path), source=str(rel))

    date = file_date
    if meta.get("date") is not None:
        try:
            date = parse_datetime(meta["date"])
        except (TypeError, ValueError) as e:
            raise FrontMatterError(f"{rel}: invalid date {meta['date']!r}") from e

    slug = str(meta.get("slug") or m.group("slug"))
    categories = normalize_labels(meta.get("categories", meta.get("category")))
    title = str(meta.get("title") or "").strip() or slug_title(slug)

    values = _permalink_values(date=date, slug=slug, categories=categories)
    template = str(meta.get("permalink") or config.content.permalink_template())
    url = expand_permalink(template, values)

    return Post(
        source_path=rel,
        url=url,
        title=title,
        body=body,
        layout=meta.get("layout"),
        date=date,
        slug=slug,
        tags=normalize_labels(meta.get("tags")),
        categories=categories,
        front_matter=meta,
    )


def page_url(rel: PurePosixPath, markdown_extensions: list[str]) -> str:
    if rel.suffix.lower().lstrip(".") in markdown_extensions:
        rel = rel.with_suffix(".html")
    if rel.name == "index.html":
        parent = rel.parent.as_posix()
        return "/" if parent == "." else f"/{parent}/"
    return "/" + rel.as_posix()


def load_page(path: Path, config: Config) -> Page:
    rel = path.relative_to(config.source_dir)
    meta, body = split_front_matter(_read(path), source=str(rel))

    date = None
    if meta.get("date") is not None:
        try:
            date = parse_datetime(meta["date"])
        except (TypeError, ValueError) as e:
            raise FrontMatterError(f"{rel}: invalid date {meta['date']!r}") from e

    if meta.get("permalink"):
        slug = PurePosixPath(rel.as_posix()).stem
        values = _permalink_values(date=date, slug=slug, categories=normalize_labels(meta.get("categories", meta.get("category"))))
        url = expand_permalink(str(meta["permalink"]), values)
    else:
        url = page_url(PurePosixPath(rel.as_posix()), config.content.markdown_extensions)

    return Page(
        source_path=rel,
        url=url,
        title=str(meta.get("title") or "").strip(),
        body=body,
        layout=meta.get("layout"),
        date=date,
        tags=normalize_labels(meta.get("tags")),
        front_matter=meta,
    )


def _excluded(rel: PurePosixPath, patterns: list[str]) -> bool:
    posix = rel.as_posix()
    return any(fnmatch.fnmatch(posix, p) or any(fnmatch.fnmatch(part, p) for part in rel.parts) for p in patterns)


def _is_hidden(rel: PurePosixPath) -> bool:
    return any(part.startswith(("_", ".")) for part in rel.parts)


def _content_dirs(config: Config) -> list[Path]:
    return [p.resolve() for p in (config.posts_path, config.layouts_path, config.includes_path)]


def _iter_source_files(config: Config):
    source = config.source_dir
    dest = config.destination_dir.resolve()
    content_dirs = _content_dirs(config)
    for path in sorted(source.rglob("*")):
        if not path.is_file():
            continue
        resolved = path.resolve()
        if resolved.is_relative_to(dest) or any(resolved.is_relative_to(d) for d in content_dirs):
            continue
        rel = PurePosixPath(path.relative_to(source).as_posix())
        if _is_hidden(rel) or _excluded(rel, config.content.exclude):
            continue
        yield path, rel


def _iter_post_files(config: Config):
    posts_dir = config.posts_path
    if not posts_dir.is_dir():
        return
    for path in sorted(posts_dir.rglob("*")):
        if not path.is_file() or path.name.startswith("."):
            continue
        if path.suffix.lower().lstrip(".") not in config.content.markdown_extensions:
            continue
        if _excluded(PurePosixPath(path.relative_to(config.source_dir).as_posix()), config.content.exclude):
            continue
        yield path


def load_site(config: Config) -> SiteCollection:
    """Walk the source directory and build the site-wide collection.

    Raises:
        ContentError: the source is missing, or any file fails to load.
    """

    if not config.source_dir.is_dir():
        raise ContentError(f"Source directory not found: {config.source_dir}")

    posts: list[Post] = []
    for path in _iter_post_files(config):
        post = load_post(path, config)
        if not is_published(post.front_matter) and not config.content.include_unpublished:
            logger.debug("post_skipped_unpublished", extra={"path": str(post.source_path)})
            continue
        posts.append(post)

    pages: list[Page] = []
    static_files: list[StaticFile] = []
    for path, rel in _iter_source_files(config):
        if has_front_matter(_read_head(path)):
            page = load_page(path, config)
            if not is_published(page.front_matter) and not config.content.include_unpublished:
                logger.debug("page_skipped_unpublished", extra={"path": str(rel)})
                continue
            pages.append(page)
        else:
            static_files.append(StaticFile(source_path=Path(rel), url="/" + rel.as_posix()))

    collection = SiteCollection(posts=posts, pages=pages, static_files=static_files)
    logger.info(
        "site_loaded",
        extra={"posts": len(posts), "pages": len(pages), "static_files": len(static_files)},
    )
    return collection


def _read_head(path: Path) -> str:
    # Binary assets are never pages.
    try:
        with path.open("r", encoding="utf-8") as fh:
            return fh.readline()
    except UnicodeDecodeError:
        return ""
