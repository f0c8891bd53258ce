"""folio.core.exceptions

Errors are part of the interface.

Authoring mistakes surface at build time, not at read time.
"""

from __future__ import annotations


class FolioError(Exception):
    """Base exception for folio."""


class ConfigError(FolioError):
    """Configuration is missing, invalid, or inconsistent."""


class ContentError(FolioError):
    """A content file cannot be turned into a content item."""


class FrontMatterError(ContentError):
    """Metadata block is malformed."""


class FilenameError(ContentError):
    """Post filename does not encode a date and slug."""


class DuplicateUrlError(ContentError):
    """Two content items claim the same URL."""


class TemplateError(FolioError):
    """Layout missing, cyclic, or failed to render."""


class BuildError(FolioError):
    """Build output cannot be written."""
