from __future__ import annotations

import sys
from pathlib import Path

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from folio.core.config import Config  # noqa: E402
from tests._helpers import DEFAULT_LAYOUT, INDEX_PAGE, POST_LAYOUT, write_post  # noqa: E402


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def site_dir(temp_dir: Path) -> Path:
    """A small site: two posts, a home page, two layouts, one stylesheet."""

    root = temp_dir / "site"
    (root / "_layouts").mkdir(parents=True)
    (root / "_layouts" / "default.html").write_text(DEFAULT_LAYOUT, encoding="utf-8")
    (root / "_layouts" / "post.html").write_text(POST_LAYOUT, encoding="utf-8")
    (root / "index.html").write_text(INDEX_PAGE, encoding="utf-8")
    (root / "css").mkdir()
    (root / "css" / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")

    write_post(root, "2013-08-01-storing-currency.md", title="Storing currency", tags="rails money")
    write_post(root, "2013-08-14-attribute-whitelisting.md", title="Attribute whitelisting", tags="[rails, security]")
    return root


@pytest.fixture()
def test_config(site_dir: Path) -> Config:
    """Config for `site_dir`, repo defaults underneath, output next to the source."""

    return Config.for_site(site_dir, repo_root=REPO_ROOT)


@pytest.fixture(autouse=True)
def _reset_folio_logging():
    """The CLI installs a handler bound to the current stderr; drop it between tests."""

    yield
    import logging

    logger = logging.getLogger("folio")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
