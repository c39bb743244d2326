"""Formatting helpers for the text report."""

from __future__ import annotations

from typing import List

from .models import EstimationReport, MatchedResource


def format_kilobytes(size_bytes: int) -> str:
    """Render a byte count as kilobytes with two decimals and thousands separators."""
    return f"{size_bytes / 1024:,.2f}"


def format_resource_line(resource: MatchedResource) -> str:
    return f"URL: {resource.url} Size={resource.size_bytes} bytes"


def format_summary_lines(report: EstimationReport) -> List[str]:
    return [
        "Full size of page and embedded resourses: "
        f"{format_kilobytes(report.state.total_size_bytes)}kb",
        f"Total external links number: {report.state.matched_resource_count}",
    ]


def format_report(report: EstimationReport) -> str:
    """Render the complete report, resource lines first."""
    lines = [format_resource_line(resource) for resource in report.resources]
    lines.extend(format_summary_lines(report))
    return "\n".join(lines) + "\n"
