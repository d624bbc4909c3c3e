from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Tuple

from propeval.domain.property import PropertyInput

MarketTrend = Literal["rising", "stable", "declining"]
CompetitiveRating = Literal["excellent", "good", "average", "below-average"]
RiskLevel = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class CalculatedMetrics:
    cap_rate: float                      # annual income / price, percent
    cash_on_cash: float                  # annual income / down payment, percent
    monthly_cash_flow: float             # rent - operating expenses
    annual_income: float                 # (rent - expenses) * 12
    roi: float                           # alias of cash_on_cash
    break_even_ratio: float              # expenses / rent
    one_percent_rule: bool               # rent >= 1% of price
    debt_service_coverage: float | None  # cash flow / loan payment; None when nothing is financed
    gross_rent_multiplier: float         # price / annual rent
    price_per_square_foot: float | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "capRate": self.cap_rate,
            "cashOnCash": self.cash_on_cash,
            "monthlyCashFlow": self.monthly_cash_flow,
            "annualIncome": self.annual_income,
            "roi": self.roi,
            "breakEvenRatio": self.break_even_ratio,
            "onePercentRule": self.one_percent_rule,
            "debtServiceCoverage": self.debt_service_coverage,
            "grossRentMultiplier": self.gross_rent_multiplier,
        }
        if self.price_per_square_foot is not None:
            out["pricePerSquareFoot"] = self.price_per_square_foot
        return out


@dataclass(frozen=True)
class MarketComparison:
    average_cap_rate: float
    market_trend: MarketTrend
    competitive_rating: CompetitiveRating

    def to_dict(self) -> dict[str, Any]:
        return {
            "averageCapRate": self.average_cap_rate,
            "marketTrend": self.market_trend,
            "competitiveRating": self.competitive_rating,
        }


@dataclass(frozen=True)
class RiskAssessment:
    level: RiskLevel
    factors: Tuple[str, ...]
    score: int  # 0-100

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "factors": list(self.factors),
            "score": self.score,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the engine returns for one property, built once per call."""

    property_id: str
    address: str
    input_data: PropertyInput
    calculated_metrics: CalculatedMetrics
    market_comparison: MarketComparison
    recommendations: Tuple[str, ...]
    risk_assessment: RiskAssessment
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "propertyId": self.property_id,
            "address": self.address,
            "inputData": self.input_data.to_dict(),
            "calculatedMetrics": self.calculated_metrics.to_dict(),
            "marketComparison": self.market_comparison.to_dict(),
            "recommendations": list(self.recommendations),
            "riskAssessment": self.risk_assessment.to_dict(),
            "timestamp": self.timestamp,
        }
