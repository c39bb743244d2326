"""Command-line entry point for the page weight estimator."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Sequence

from .config import DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT, EstimatorConfig
from .errors import EstimationError, InvalidCategoryError
from .estimator import Estimator
from .models import Category, EstimationRequest, MatchedResource
from .utils import format_resource_line, format_summary_lines

logger = logging.getLogger("page_weight.cli")


def _category_argument(value: str) -> Optional[Category]:
    try:
        return Category.parse(value)
    except InvalidCategoryError as exc:
        raise argparse.ArgumentTypeError(exc.message) from exc


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'") from None
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: '{value}'")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"cannot be negative: '{value}'")
    return number


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Estimate the transfer size of a web page and the resources it embeds."
        ),
    )
    parser.add_argument("url", nargs="?", default="", help="URL of the page to measure")
    parser.add_argument(
        "category",
        nargs="?",
        default=None,
        type=_category_argument,
        help="Only count resources of this category (images, documents, media, other)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--max-redirects",
        type=_non_negative_int,
        default=DEFAULT_MAX_REDIRECTS,
        help="Maximum number of redirects followed per resource probe",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of resources probed in parallel",
    )
    parser.add_argument(
        "--legacy-classification",
        action="store_true",
        help="Reproduce the content-type classification of older releases",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def _print_resource(resource: MatchedResource) -> None:
    sys.stdout.write(format_resource_line(resource) + "\n")
    sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = EstimatorConfig(
        timeout=args.timeout,
        max_redirects=args.max_redirects,
        workers=max(1, args.workers),
        legacy_classification=args.legacy_classification,
    )
    request = EstimationRequest(target_url=args.url, category_filter=args.category)

    overall_start = time.perf_counter()
    try:
        report = Estimator(config).run(request, on_match=_print_resource)
    except EstimationError as exc:
        sys.stdout.write(exc.message + "\n")
        sys.stdout.flush()
        raise SystemExit(1) from exc
    total_elapsed = time.perf_counter() - overall_start

    for line in format_summary_lines(report):
        sys.stdout.write(line + "\n")
    sys.stdout.flush()

    logger.debug(
        "Finished in %.2fs (%d matched, %d failed probes, %d skipped references)",
        total_elapsed,
        report.state.matched_resource_count,
        report.failed_probes,
        report.skipped_references,
    )


if __name__ == "__main__":
    main()
