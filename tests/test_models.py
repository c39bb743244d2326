"""Data model tests."""

import pytest

from page_weight.errors import InvalidCategoryError
from page_weight.models import AggregationState, Category, PageContext, ProbeResult


@pytest.mark.parametrize(
    "name, expected",
    [
        ("images", Category.IMAGES),
        ("Documents", Category.DOCUMENTS),
        (" media ", Category.MEDIA),
        ("other", Category.OTHER),
        ("", None),
        (None, None),
    ],
)
def test_category_parse(name, expected):
    assert Category.parse(name) is expected


def test_category_parse_unknown():
    with pytest.raises(InvalidCategoryError):
        Category.parse("fonts")


def test_page_context_from_url():
    context = PageContext.from_url("https://example.com:8443/path/index.html?x=1")
    assert context == PageContext(scheme="https", host="example.com:8443")


def test_probe_result_unknown():
    assert ProbeResult.unknown().size_bytes == -1
    assert not ProbeResult.unknown().is_known


def test_aggregation_state_is_immutable_and_monotonic():
    start = AggregationState(total_size_bytes=100)
    after = start.add(50).add(0)
    assert start == AggregationState(100, 0)
    assert after == AggregationState(150, 2)


def test_aggregation_state_rejects_negative_size():
    with pytest.raises(ValueError):
        AggregationState().add(-1)
