"""High-level orchestration for estimating the weight of a page."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List, Optional, Tuple

import requests

from .classify import classify_content_type
from .config import EstimatorConfig
from .content import extract_references
from .errors import MissingUrlError, SiteUnreachableError
from .models import (
    AggregationState,
    Category,
    EstimationReport,
    EstimationRequest,
    MatchedResource,
    PageContext,
    ProbeResult,
    ResolvedResource,
)
from .probe import ResourceProbe, build_session
from .urls import resolve_reference

logger = logging.getLogger("page_weight")

MatchCallback = Callable[[MatchedResource], None]


def fold_result(
    state: AggregationState,
    resource: ResolvedResource,
    result: ProbeResult,
    category_filter: Optional[Category],
    legacy_classification: bool = False,
) -> Tuple[AggregationState, Optional[MatchedResource]]:
    """Fold one probe result into the totals.

    Returns the new state and the matched resource, or the unchanged state
    and ``None`` when the resource failed to probe or is filtered out.
    """
    if not result.is_known:
        return state, None
    category: Optional[Category] = None
    if category_filter is not None:
        category = classify_content_type(result.raw_content_type, legacy_classification)
        if category is not category_filter:
            return state, None
    matched = MatchedResource(
        url=resource.absolute_url,
        size_bytes=result.size_bytes,
        category=category,
    )
    return state.add(result.size_bytes), matched


def resolve_references(html: str, context: PageContext) -> Tuple[List[ResolvedResource], int]:
    """Extract and resolve references, returning them with the skipped count."""
    resolved: List[ResolvedResource] = []
    skipped = 0
    for reference in extract_references(html):
        resource = resolve_reference(reference, context)
        if resource is None:
            skipped += 1
            continue
        resolved.append(resource)
    return resolved, skipped


class Estimator:
    """Fetches a page, probes its resources and aggregates their sizes."""

    def __init__(
        self,
        config: Optional[EstimatorConfig] = None,
        session: Optional[requests.Session] = None,
        probe_session: Optional[requests.Session] = None,
    ) -> None:
        """Root page and probes use separate sessions with their own redirect caps.

        A caller-supplied ``session`` is also used for probing unless
        ``probe_session`` is given.
        """
        self.config = config or EstimatorConfig()
        if session is None:
            session = build_session(self.config, self.config.root_max_redirects)
            probe_session = probe_session or build_session(self.config)
        self.session = session
        self.probe = ResourceProbe(self.config, probe_session or session)

    def fetch_root(self, url: str) -> Tuple[bytes, str]:
        """Download the root page and return its raw bytes and decoded text."""
        logger.info("Loading %s", url)
        try:
            resp = self.session.get(url, timeout=self.config.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.debug("Failed to load %s: %s", url, exc)
            raise SiteUnreachableError() from exc
        return resp.content, resp.text

    def _iter_probes(
        self,
        resources: List[ResolvedResource],
        want_content_type: bool,
    ) -> Iterator[ProbeResult]:
        """Yield probe results in the same order as ``resources``."""
        if self.config.workers <= 1 or len(resources) <= 1:
            for resource in resources:
                yield self.probe.probe(resource.absolute_url, want_content_type)
            return

        with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
            yield from pool.map(
                lambda resource: self.probe.probe(resource.absolute_url, want_content_type),
                resources,
            )

    def run(
        self,
        request: EstimationRequest,
        on_match: Optional[MatchCallback] = None,
    ) -> EstimationReport:
        """Estimate the size of ``request.target_url`` and its resources."""
        if not request.target_url:
            raise MissingUrlError()

        context = PageContext.from_url(request.target_url)
        body, html = self.fetch_root(request.target_url)
        state = AggregationState(total_size_bytes=len(body))

        resources, skipped = resolve_references(html, context)
        logger.debug(
            "Found %d resources on %s (%d references skipped)",
            len(resources),
            request.target_url,
            skipped,
        )

        want_content_type = request.category_filter is not None
        matched_resources: List[MatchedResource] = []
        failed = 0
        for resource, result in zip(resources, self._iter_probes(resources, want_content_type)):
            if not result.is_known:
                failed += 1
            state, matched = fold_result(
                state,
                resource,
                result,
                request.category_filter,
                self.config.legacy_classification,
            )
            if matched is None:
                continue
            matched_resources.append(matched)
            if on_match is not None:
                on_match(matched)

        return EstimationReport(
            target_url=request.target_url,
            root_size_bytes=len(body),
            state=state,
            resources=matched_resources,
            skipped_references=skipped,
            failed_probes=failed,
        )
