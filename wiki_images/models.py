from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class NormalizationMapping:
    from_title: str
    to_title: str


@dataclass(frozen=True)
class ImageInfoRecord:
    title: str
    width: Optional[int]
    height: Optional[int]
    size: Optional[int]
    mime: Optional[str]
    url: Optional[str]
    thumb_url_prefix: Optional[str] = None
    thumb_url_suffix: Optional[str] = None

    @property
    def has_thumbnail_template(self) -> bool:
        return self.thumb_url_prefix is not None and self.thumb_url_suffix is not None

    def as_row(self) -> tuple:
        """Return the values in `wiki_images` column order."""
        return (
            self.title,
            self.width,
            self.height,
            self.size,
            self.mime,
            self.url,
            self.thumb_url_prefix,
            self.thumb_url_suffix,
        )


@dataclass(frozen=True)
class ChunkResult:
    records: list[ImageInfoRecord]
    mappings: list[NormalizationMapping]


@dataclass(frozen=True)
class AnomalyReport:
    """A chunk that produced no usable records. Mappings may still apply."""

    kind: str
    message: str
    payload: Any = None
    mappings: list[NormalizationMapping] = field(default_factory=list)


@dataclass
class RunState:
    remaining: deque[str]
    seen: set[str] = field(default_factory=set)

    @classmethod
    def from_titles(cls, titles) -> RunState:
        return cls(remaining=deque(titles))

    def next_chunk(self, size: int) -> list[str]:
        chunk = []
        while self.remaining and len(chunk) < size:
            chunk.append(self.remaining.popleft())
        return chunk

    def mark_seen(self, title: str) -> bool:
        """Record the title; return False if it was already seen in this run."""
        if title in self.seen:
            return False
        self.seen.add(title)
        return True


@dataclass
class RunStats:
    titles: int = 0
    requests: int = 0
    anomalies: int = 0
    mappings: int = 0
    renamed_rows: int = 0
    inserted: int = 0
    duplicates: int = 0
    without_thumbnail: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "titles": self.titles,
            "requests": self.requests,
            "anomalies": self.anomalies,
            "mappings": self.mappings,
            "renamed_rows": self.renamed_rows,
            "inserted": self.inserted,
            "duplicates": self.duplicates,
            "without_thumbnail": self.without_thumbnail,
        }
