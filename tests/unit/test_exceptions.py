from __future__ import annotations

from folio.core.exceptions import (
    BuildError,
    ConfigError,
    ContentError,
    DuplicateUrlError,
    FilenameError,
    FolioError,
    FrontMatterError,
    TemplateError,
)


def test_exception_hierarchy_is_structural() -> None:
    assert issubclass(ConfigError, FolioError)
    assert issubclass(ContentError, FolioError)
    assert issubclass(TemplateError, FolioError)
    assert issubclass(BuildError, FolioError)


def test_content_errors_share_a_parent() -> None:
    for cls in (FrontMatterError, FilenameError, DuplicateUrlError):
        assert issubclass(cls, ContentError)
