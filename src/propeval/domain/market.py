# src/propeval/domain/market.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from propeval.domain.analysis import CompetitiveRating, MarketComparison, MarketTrend


@dataclass(frozen=True)
class MarketSegment:
    average_cap_rate: float  # percent
    trend: MarketTrend


# Static stand-in for live market data.
# classify_segment() only ever picks "urban" or "default"; "suburban" and
# "rural" are kept as policy data for a finer classifier (e.g. geocoding).
MARKET_SEGMENTS: Mapping[str, MarketSegment] = MappingProxyType(
    {
        "urban": MarketSegment(average_cap_rate=5.5, trend="rising"),
        "suburban": MarketSegment(average_cap_rate=7.2, trend="stable"),
        "rural": MarketSegment(average_cap_rate=8.1, trend="declining"),
        "default": MarketSegment(average_cap_rate=6.5, trend="stable"),
    }
)


def classify_segment(address: str) -> str:
    """Crude substring heuristic: anything mentioning "city" is urban."""
    if "city" in address.lower():
        return "urban"
    return "default"


def rate_competitiveness(cap_rate: float, average_cap_rate: float) -> CompetitiveRating:
    if cap_rate >= average_cap_rate + 2:
        return "excellent"
    if cap_rate >= average_cap_rate:
        return "good"
    if cap_rate >= average_cap_rate - 1:
        return "average"
    return "below-average"


def compare_market(
    cap_rate: float,
    address: str,
    segments: Mapping[str, MarketSegment] = MARKET_SEGMENTS,
) -> MarketComparison:
    """
    Place a property's cap rate against the average of its market segment.
    """
    key = classify_segment(address)
    segment = segments.get(key) or segments["default"]

    return MarketComparison(
        average_cap_rate=segment.average_cap_rate,
        market_trend=segment.trend,
        competitive_rating=rate_competitiveness(cap_rate, segment.average_cap_rate),
    )
