"""folio.core

Core primitives.

If a module needs to exist, it should probably depend only on this package.
"""

from .config import Config
from .exceptions import FolioError
from .models import ContentItem, Page, Post, StaticFile
from .time import parse_datetime, utc_now
from .types import BuildResult, IndexEntry

__all__ = [
    "BuildResult",
    "Config",
    "ContentItem",
    "FolioError",
    "IndexEntry",
    "Page",
    "Post",
    "StaticFile",
    "parse_datetime",
    "utc_now",
]
