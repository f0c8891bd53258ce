"""folio.core.types

Lightweight dataclasses for hot-path objects.

Pydantic models own IO boundaries; dataclasses keep runtime lean.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """One line of the post index: (date, title, link)."""

    date: date
    title: str
    url: str

    def as_dict(self) -> dict[str, str]:
        return {"date": self.date.isoformat(), "title": self.title, "url": self.url}


@dataclass(frozen=True, slots=True)
class BuildResult:
    posts: int
    pages: int
    static_files: int
    written: list[Path] = field(default_factory=list)
    duration_ms: int = 0
