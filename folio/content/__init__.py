"""folio.content

Reading the site source: metadata blocks, posts, pages, static files.
"""

from .collection import SiteCollection
from .frontmatter import has_front_matter, split_front_matter
from .loader import load_page, load_post, load_site

__all__ = [
    "SiteCollection",
    "has_front_matter",
    "load_page",
    "load_post",
    "load_site",
    "split_front_matter",
]
