"""Metadata-only size probing of embedded resources."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import EstimatorConfig
from .models import ProbeResult

logger = logging.getLogger("page_weight.probe")


def build_session(
    config: EstimatorConfig,
    max_redirects: Optional[int] = None,
) -> requests.Session:
    """Create a session carrying the browser User-Agent and a redirect cap.

    The cap defaults to the probe limit, ``config.max_redirects``.
    """
    session = requests.Session()
    session.headers["User-Agent"] = config.user_agent
    session.max_redirects = config.max_redirects if max_redirects is None else max_redirects
    return session


def parse_content_length(value: Optional[str]) -> Optional[int]:
    """Return the declared length, or None when it is absent or malformed."""
    if value is None:
        return None
    try:
        length = int(value.strip())
    except ValueError:
        return None
    return length if length >= 0 else None


class ResourceProbe:
    """Issues HEAD requests and reports declared size and content type."""

    def __init__(
        self,
        config: EstimatorConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or build_session(config)

    def probe(self, url: str, want_content_type: bool = False) -> ProbeResult:
        """Probe ``url`` without transferring its body.

        Never raises; any failure yields ``ProbeResult.unknown()``.
        """
        try:
            resp = self.session.head(
                url,
                allow_redirects=True,
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            logger.debug("Failed to probe %s: %s", url, exc)
            return ProbeResult.unknown()

        try:
            if not 200 <= resp.status_code < 300:
                logger.debug("Skipping %s: HTTP %s", url, resp.status_code)
                return ProbeResult.unknown()

            size = parse_content_length(resp.headers.get("Content-Length"))
            if size is None:
                logger.debug("Skipping %s: no usable Content-Length", url)
                return ProbeResult.unknown()

            content_type = ""
            if want_content_type:
                content_type = resp.headers.get("Content-Type", "")
            return ProbeResult(size_bytes=size, raw_content_type=content_type)
        finally:
            resp.close()
