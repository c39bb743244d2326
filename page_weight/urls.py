"""Resolution and validation of resource references."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

import validators

from .models import PageContext, ResolvedResource

logger = logging.getLogger("page_weight.urls")

ABSOLUTE_PREFIXES = ("http://", "https://")

# Characters left untouched when encoding a path segment. "%" is kept so
# already-encoded paths are not encoded twice.
_SEGMENT_SAFE = "%!$&'()*+,;=:@"


def is_absolute(reference: str) -> bool:
    return reference.startswith(ABSOLUTE_PREFIXES)


def join_with_root(reference: str, context: PageContext) -> str:
    """Attach a relative reference to the root of the page's host.

    Only root-relative resolution is supported: ``../`` segments and
    protocol-relative references are joined verbatim.
    """
    return f"{context.scheme}://{context.host}/{reference.lstrip('/')}"


def encode_path(url: str) -> str:
    """Percent-encode the path of ``url`` one segment at a time."""
    parts = urlsplit(url)
    segments = parts.path.split("/")
    encoded = "/".join(quote(segment, safe=_SEGMENT_SAFE) for segment in segments)
    return urlunsplit((parts.scheme, parts.netloc, encoded, parts.query, parts.fragment))


def is_valid_url(url: str) -> bool:
    """Return True when ``url`` is syntactically a URL with a scheme and host."""
    # simple_host admits single-label hosts such as "localhost";
    # strict_query=False admits query strings without "key=value" pairs.
    return bool(validators.url(url, simple_host=True, strict_query=False))


def validate_url(url: str) -> Optional[str]:
    """Encode the path of ``url`` and return it if the result is a valid URL."""
    try:
        candidate = encode_path(url)
    except ValueError:
        return None
    return candidate if is_valid_url(candidate) else None


def resolve_reference(reference: str, context: PageContext) -> Optional[ResolvedResource]:
    """Resolve a raw markup reference against the page root.

    Returns ``None`` for references that do not produce a valid URL.
    """
    if not reference:
        return None
    candidate = reference if is_absolute(reference) else join_with_root(reference, context)
    absolute_url = validate_url(candidate)
    if absolute_url is None:
        logger.debug("Skipping invalid reference %r", reference)
        return None
    return ResolvedResource(absolute_url=absolute_url)
