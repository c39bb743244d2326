"""MCP server exposing the page weight estimator."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from .config import EstimatorConfig
from .errors import EstimationError
from .estimator import Estimator
from .models import Category, EstimationRequest
from .utils import format_report

logger = logging.getLogger("page_weight.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="page-weight")


def _estimate_once(url: str, category: str, config: EstimatorConfig) -> str:
    try:
        request = EstimationRequest(target_url=url, category_filter=Category.parse(category))
        report = Estimator(config).run(request)
    except EstimationError as exc:
        raise RuntimeError(exc.message) from exc
    return format_report(report)


@mcp.tool()
def estimate(
    url: str,
    category: str = "",
) -> str:
    """Estimate the transfer size of a web page and its embedded resources.

    ``category`` optionally restricts the total to images, documents, media
    or other resources.
    """
    return _estimate_once(url, category, EstimatorConfig())


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
