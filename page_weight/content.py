"""Pattern-based extraction of resource references from raw markup."""

from __future__ import annotations

import re
from typing import Iterator, Tuple

# The href value stops at its closing quote so that a second attribute or
# tag later on the same line is not swallowed into the capture.
LINK_HREF_PATTERN = re.compile(
    r"""<link\b[^>]*?\bhref\s*=\s*(?P<quote>["'])(?P<ref>.*?)(?P=quote)[^>]*/?>""",
    re.IGNORECASE | re.DOTALL,
)
SRC_ATTRIBUTE_PATTERN = re.compile(
    r"""src\s*=\s*['"](?P<ref>[^'"]+)['"]""",
    re.IGNORECASE,
)

REFERENCE_PATTERNS: Tuple[re.Pattern, ...] = (LINK_HREF_PATTERN, SRC_ATTRIBUTE_PATTERN)


def _iter_matches(pattern: re.Pattern, html: str) -> Iterator[str]:
    for match in pattern.finditer(html):
        reference = match.group("ref")
        if reference:
            yield reference


def extract_references(html: str) -> Iterator[str]:
    """Yield resource references found in ``html``.

    ``<link href>`` values come first, then every ``src`` attribute, each in
    document order. A reference matched by both patterns is yielded twice.
    """
    for pattern in REFERENCE_PATTERNS:
        yield from _iter_matches(pattern, html)
