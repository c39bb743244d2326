"""Data models used throughout the estimation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from urllib.parse import urlsplit

from .errors import InvalidCategoryError

UNKNOWN_SIZE = -1


class Category(Enum):
    """Resource category derived from a declared content type."""

    IMAGES = "images"
    DOCUMENTS = "documents"
    MEDIA = "media"
    OTHER = "other"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["Category"]:
        """Turn a filter name into a category; an empty name means no filter."""
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise InvalidCategoryError(name) from None


@dataclass(frozen=True)
class EstimationRequest:
    """Input of a single run."""

    target_url: str
    category_filter: Optional[Category] = None


@dataclass(frozen=True)
class PageContext:
    """Scheme and host of the root page, used to resolve relative references."""

    scheme: str
    host: str

    @classmethod
    def from_url(cls, url: str) -> "PageContext":
        parts = urlsplit(url)
        return cls(scheme=parts.scheme, host=parts.netloc)


@dataclass(frozen=True)
class ResolvedResource:
    """Absolute, validated resource URL."""

    absolute_url: str


@dataclass(frozen=True)
class ProbeResult:
    """Declared size and content type of a probed resource."""

    size_bytes: int
    raw_content_type: str = ""

    @classmethod
    def unknown(cls) -> "ProbeResult":
        return cls(size_bytes=UNKNOWN_SIZE)

    @property
    def is_known(self) -> bool:
        return self.size_bytes >= 0


@dataclass(frozen=True)
class AggregationState:
    """Running totals; every update returns a new state."""

    total_size_bytes: int = 0
    matched_resource_count: int = 0

    def add(self, size_bytes: int) -> "AggregationState":
        if size_bytes < 0:
            raise ValueError(f"Cannot add a negative size ({size_bytes})")
        return AggregationState(
            total_size_bytes=self.total_size_bytes + size_bytes,
            matched_resource_count=self.matched_resource_count + 1,
        )


@dataclass(frozen=True)
class MatchedResource:
    """Resource that contributed to the total."""

    url: str
    size_bytes: int
    category: Optional[Category] = None


@dataclass
class EstimationReport:
    """Outcome of a completed run."""

    target_url: str
    root_size_bytes: int
    state: AggregationState
    resources: List[MatchedResource] = field(default_factory=list)
    skipped_references: int = 0
    failed_probes: int = 0
