from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path, PurePosixPath

import pytest

from folio.content.loader import (
    expand_permalink,
    load_page,
    load_post,
    load_site,
    normalize_labels,
    page_url,
    slug_title,
)
from folio.core.config import Config
from folio.core.exceptions import ContentError, DuplicateUrlError, FilenameError, FrontMatterError
from tests._helpers import write_post


def _with_content(cfg: Config, **update: object) -> Config:
    return cfg.model_copy(update={"content": cfg.content.model_copy(update=update)})


def test_load_post_reads_filename_date_and_metadata(site_dir: Path, test_config: Config) -> None:
    post = load_post(site_dir / "_posts" / "2013-08-14-attribute-whitelisting.md", test_config)

    assert post.title == "Attribute whitelisting"
    assert post.date == datetime(2013, 8, 14, tzinfo=UTC)
    assert post.slug == "attribute-whitelisting"
    assert post.url == "/2013/08/14/attribute-whitelisting.html"
    assert post.tags == ["rails", "security"]
    assert post.layout == "post"
    assert post.source_path == Path("_posts/2013-08-14-attribute-whitelisting.md")
    assert post.body == "Body.\n"


def test_tags_as_whitespace_separated_string(site_dir: Path, test_config: Config) -> None:
    post = load_post(site_dir / "_posts" / "2013-08-01-storing-currency.md", test_config)
    assert post.tags == ["rails", "money"]


def test_missing_title_falls_back_to_slug(site_dir: Path, test_config: Config) -> None:
    p = write_post(site_dir, "2014-02-03-what-is-money.md")
    assert load_post(p, test_config).title == "What Is Money"


def test_filename_without_date_raises(site_dir: Path, test_config: Config) -> None:
    p = write_post(site_dir, "hello.md", title="Hello")
    with pytest.raises(FilenameError, match="YYYY-MM-DD"):
        load_post(p, test_config)


def test_filename_with_impossible_date_raises(site_dir: Path, test_config: Config) -> None:
    p = write_post(site_dir, "2013-13-45-nope.md", title="Nope")
    with pytest.raises(FilenameError, match="invalid date"):
        load_post(p, test_config)


def test_metadata_date_overrides_filename(site_dir: Path, test_config: Config) -> None:
    p = write_post(site_dir, "2013-08-01-moved.md", title="Moved", extra='date: "2013-08-20 10:30:00 +0200"')
    post = load_post(p, test_config)

    assert post.date.utcoffset() == timedelta(hours=2)
    assert (post.date.year, post.date.month, post.date.day, post.date.hour) == (2013, 8, 20, 10)
    assert post.url == "/2013/08/20/moved.html"


def test_malformed_metadata_date_raises(site_dir: Path, test_config: Config) -> None:
    p = write_post(site_dir, "2013-08-01-bad.md", title="Bad", extra="date: not-a-date")
    with pytest.raises(FrontMatterError, match="invalid date"):
        load_post(p, test_config)


def test_pretty_permalink_with_categories(site_dir: Path, test_config: Config) -> None:
    cfg = _with_content(test_config, permalink="pretty")
    p = write_post(site_dir, "2013-08-14-cats.md", title="Cats", extra="categories: Rails Notes")

    assert load_post(p, cfg).url == "/rails/notes/2013/08/14/cats/"


def test_custom_permalink_template(site_dir: Path, test_config: Config) -> None:
    cfg = _with_content(test_config, permalink="/blog/:year/:title.html")
    post = load_post(site_dir / "_posts" / "2013-08-01-storing-currency.md", cfg)
    assert post.url == "/blog/2013/storing-currency.html"


def test_metadata_permalink_overrides_style(site_dir: Path, test_config: Config) -> None:
    p = write_post(site_dir, "2013-08-14-money.md", title="Money", extra="permalink: /about-money/")
    assert load_post(p, test_config).url == "/about-money/"


def test_metadata_permalink_expands_placeholders(site_dir: Path, test_config: Config) -> None:
    p = write_post(site_dir, "2013-08-14-money.md", title="Money", extra="permalink: /:year/:title/")
    assert load_post(p, test_config).url == "/2013/money/"

    (site_dir / "about.md").write_text("---\ntitle: About\npermalink: /:title/\n---\nHi.\n", encoding="utf-8")
    assert load_page(site_dir / "about.md", test_config).url == "/about/"


def test_expand_permalink_collapses_empty_segments() -> None:
    assert expand_permalink("/:categories/:year/", {"categories": "", "year": "2013"}) == "/2013/"
    assert expand_permalink("no-slash", {}) == "/no-slash"
    assert expand_permalink("/:unknown/x", {}) == "/:unknown/x"


@pytest.mark.parametrize(
    ("rel", "url"),
    [
        ("index.html", "/"),
        ("about.md", "/about.html"),
        ("blog/index.html", "/blog/"),
        ("feed.xml", "/feed.xml"),
    ],
)
def test_page_url(rel: str, url: str) -> None:
    assert page_url(PurePosixPath(rel), ["md", "markdown"]) == url


def test_load_page(site_dir: Path, test_config: Config) -> None:
    page = load_page(site_dir / "index.html", test_config)
    assert page.kind == "page"
    assert page.url == "/"
    assert page.title == "Home"
    assert page.date is None
    assert "{% for post in site.posts %}" in page.body


def test_normalize_labels() -> None:
    assert normalize_labels(None) == []
    assert normalize_labels("a b a") == ["a", "b"]
    assert normalize_labels([1, "x", "x", ""]) == ["1", "x"]
    assert normalize_labels(2013) == ["2013"]


def test_slug_title() -> None:
    assert slug_title("storing-currency") == "Storing Currency"
    assert slug_title("attribute_whitelisting") == "Attribute Whitelisting"


def test_load_site_sorts_posts_and_classifies_files(site_dir: Path, test_config: Config) -> None:
    site = load_site(test_config)

    assert [p.title for p in site.posts] == ["Attribute whitelisting", "Storing currency"]
    assert [p.url for p in site.pages] == ["/"]
    assert [f.url for f in site.static_files] == ["/css/style.css"]


def test_load_site_skips_unpublished_posts(site_dir: Path, test_config: Config, caplog: pytest.LogCaptureFixture) -> None:
    write_post(site_dir, "2014-01-01-draft.md", title="Draft", extra="published: false")

    with caplog.at_level(logging.DEBUG, logger="folio"):
        site = load_site(test_config)
    assert "Draft" not in [p.title for p in site.posts]
    assert "post_skipped_unpublished" in caplog.messages

    site = load_site(_with_content(test_config, include_unpublished=True))
    assert site.posts[0].title == "Draft"


def test_load_site_honours_exclude(site_dir: Path, test_config: Config) -> None:
    (site_dir / "README.md").write_text("notes to self\n", encoding="utf-8")

    assert "/README.md" in [f.url for f in load_site(test_config).static_files]
    assert "/README.md" not in [f.url for f in load_site(_with_content(test_config, exclude=["README.md"])).static_files]


def test_load_site_applies_exclude_to_posts(site_dir: Path, test_config: Config) -> None:
    write_post(site_dir, "2014-01-01-draft-ideas.md", title="Ideas")

    assert len(load_site(test_config).posts) == 3
    site = load_site(_with_content(test_config, exclude=["*draft*"]))
    assert [p.title for p in site.posts] == ["Attribute whitelisting", "Storing currency"]


def test_load_site_skips_content_dirs_without_underscore(site_dir: Path, test_config: Config) -> None:
    (site_dir / "_posts").rename(site_dir / "posts")
    (site_dir / "_layouts").rename(site_dir / "layouts")
    cfg = _with_content(test_config, posts_dir="posts", layouts_dir="layouts")

    site = load_site(cfg)

    assert [p.url for p in site.pages] == ["/"]
    assert [f.url for f in site.static_files] == ["/css/style.css"]
    assert len(site.posts) == 2


def test_load_site_ignores_destination_inside_source(site_dir: Path, test_config: Config) -> None:
    out = site_dir / "public"
    out.mkdir()
    (out / "old.html").write_text("old", encoding="utf-8")
    cfg = test_config.model_copy(update={"destination_dir": out})

    assert "/public/old.html" not in [f.url for f in load_site(cfg).static_files]


def test_load_site_without_source_raises(tmp_path: Path, test_config: Config) -> None:
    cfg = test_config.model_copy(update={"source_dir": tmp_path / "missing"})
    with pytest.raises(ContentError, match="not found"):
        load_site(cfg)


def test_load_site_without_posts_dir_is_empty(tmp_path: Path, test_config: Config) -> None:
    src = tmp_path / "bare"
    src.mkdir()
    cfg = test_config.model_copy(update={"source_dir": src})

    site = load_site(cfg)
    assert site.posts == []
    assert len(site) == 0


def test_load_site_rejects_page_claiming_static_file_url(site_dir: Path, test_config: Config) -> None:
    (site_dir / "about.md").write_text("---\ntitle: About\npermalink: /css/style.css\n---\nHi.\n", encoding="utf-8")
    with pytest.raises(DuplicateUrlError, match="css/style.css"):
        load_site(test_config)
