"""folio — a small static-site builder for a personal blog.

Posts in, pages out. The home page lists everything, newest first.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
