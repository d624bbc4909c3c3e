import pytest

from propeval.domain.market import (
    MARKET_SEGMENTS,
    MarketSegment,
    classify_segment,
    compare_market,
    rate_competitiveness,
)


def test_plain_address_uses_default_segment():
    mc = compare_market(5.49, "123 Main St, Springfield")
    assert mc.average_cap_rate == pytest.approx(6.5)
    assert mc.market_trend == "stable"
    assert mc.competitive_rating == "below-average"


@pytest.mark.parametrize("address", ["10 Park Ave, New York City", "4 CITY HALL PLAZA", "Cityview Apts"])
def test_city_substring_is_urban_case_insensitive(address):
    assert classify_segment(address) == "urban"
    mc = compare_market(5.49, address)
    assert mc.average_cap_rate == pytest.approx(5.5)
    assert mc.market_trend == "rising"
    assert mc.competitive_rating == "average"


def test_suburban_and_rural_are_configured_but_never_selected():
    assert MARKET_SEGMENTS["suburban"] == MarketSegment(7.2, "stable")
    assert MARKET_SEGMENTS["rural"] == MarketSegment(8.1, "declining")
    for address in ["12 Elm St, Suburbia", "Rural Route 5, Farmland"]:
        assert classify_segment(address) == "default"


def test_segment_table_is_read_only():
    with pytest.raises(TypeError):
        MARKET_SEGMENTS["urban"] = MarketSegment(1.0, "declining")  # type: ignore[index]


@pytest.mark.parametrize(
    "cap_rate, expected",
    [
        (8.5, "excellent"),   # avg + 2, inclusive
        (8.49, "good"),
        (6.5, "good"),        # avg, inclusive
        (6.49, "average"),
        (5.5, "average"),     # avg - 1, inclusive
        (5.49, "below-average"),
        (-3.0, "below-average"),
    ],
)
def test_rating_boundaries(cap_rate, expected):
    assert rate_competitiveness(cap_rate, 6.5) == expected


def test_segments_can_be_injected():
    custom = {"urban": MarketSegment(3.0, "declining"), "default": MarketSegment(9.0, "rising")}
    mc = compare_market(5.0, "Somewhere", segments=custom)
    assert mc.average_cap_rate == pytest.approx(9.0)
    assert mc.market_trend == "rising"
    assert mc.competitive_rating == "below-average"

    mc_urban = compare_market(5.0, "Capital City", segments=custom)
    assert mc_urban.competitive_rating == "excellent"
