"""folio.render

Index ordering, markup, templates.
"""

from .index import format_index_json, format_index_text, order_posts, render_index
from .markup import markdownify

__all__ = [
    "format_index_json",
    "format_index_text",
    "markdownify",
    "order_posts",
    "render_index",
]
