from __future__ import annotations

from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_LAYOUT = """<html><body>
{{ content }}
</body></html>
"""

POST_LAYOUT = """---
layout: default
---
<article><h1>{{ page.title }}</h1><time>{{ page.date | date_to_string }}</time>
{{ content }}
</article>
"""

INDEX_PAGE = """---
layout: default
title: Home
---
<ul>
{% for post in site.posts %}<li>{{ post.date | date_to_string }} <a href="{{ post.url }}">{{ post.title }}</a></li>
{% endfor %}</ul>
"""


def write_post(
    site_dir: Path,
    name: str,
    *,
    title: str | None = None,
    tags: str | None = None,
    extra: str = "",
    body: str = "Body.\n",
) -> Path:
    lines = ["---", "layout: post"]
    if title is not None:
        lines.append(f"title: {title}")
    if tags is not None:
        lines.append(f"tags: {tags}")
    if extra:
        lines.append(extra.rstrip("\n"))
    lines.append("---")
    path = site_dir / "_posts" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
    return path
