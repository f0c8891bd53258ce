"""folio.content.frontmatter

A metadata block is YAML between two `---` lines at the very top of a file.
"""

from __future__ import annotations

from typing import Any

import yaml

from folio.core.exceptions import FrontMatterError

DELIMITER = "---"


def _lines(text: str) -> list[str]:
    return text.removeprefix("\ufeff").splitlines(keepends=True)


def has_front_matter(text: str) -> bool:
    lines = _lines(text)
    return bool(lines) and lines[0].rstrip() == DELIMITER


def split_front_matter(text: str, *, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Return `(metadata, body)`.

    Text without a leading delimiter has no metadata; the whole text is the body.

    Raises:
        FrontMatterError: unterminated block, invalid YAML, or a non-mapping block.
    """

    lines = _lines(text)
    if not lines or lines[0].rstrip() != DELIMITER:
        return {}, text

    for i in range(1, len(lines)):
        if lines[i].rstrip() == DELIMITER:
            block = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            break
    else:
        raise FrontMatterError(f"{source}: metadata block is not terminated")

    try:
        meta = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"{source}: invalid YAML in metadata block: {e}") from e

    if meta is None:
        return {}, body
    if not isinstance(meta, dict):
        raise FrontMatterError(f"{source}: metadata block must be a mapping, got {type(meta).__name__}")
    return {str(k): v for k, v in meta.items()}, body
