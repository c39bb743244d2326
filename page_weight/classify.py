"""Content-type classification."""

from __future__ import annotations

from typing import Optional

from .models import Category


def _contains(value: str, needle: str, legacy: bool) -> bool:
    if legacy:
        # Older releases treated a match at offset 0 as a miss.
        return value.find(needle) > 0
    return needle in value


def classify_content_type(raw_content_type: Optional[str], legacy: bool = False) -> Category:
    """Map a raw ``Content-Type`` header value to a category.

    Checks run in priority order and the first match wins. With ``legacy``
    set, the ``text`` and ``video`` checks only match past the start of the
    value, so ``text/css`` is "other" and ``video/mp4`` is never "media".
    Legacy matching is also case-sensitive.
    """
    value = raw_content_type or ""
    if not legacy:
        value = value.lower()

    if "image" in value:
        return Category.IMAGES
    if "application" in value or _contains(value, "text", legacy):
        return Category.DOCUMENTS
    if "audio" in value or _contains(value, "video", legacy):
        return Category.MEDIA
    return Category.OTHER
