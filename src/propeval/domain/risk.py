from __future__ import annotations

from datetime import date

from propeval.domain.analysis import CalculatedMetrics, RiskAssessment, RiskLevel
from propeval.domain.property import PropertyInput

BASE_RISK_SCORE = 50

LOW_CAP_RATE = 4.0
HIGH_CAP_RATE = 12.0
MIN_DEBT_SERVICE_COVERAGE = 1.2
MAX_BREAK_EVEN_RATIO = 0.85
OLD_PROPERTY_AGE_YEARS = 50


def _risk_level(score: int) -> RiskLevel:
    if score <= 40:
        return "low"
    if score <= 70:
        return "medium"
    return "high"


def assess_risk(
    metrics: CalculatedMetrics,
    prop: PropertyInput,
    current_year: int | None = None,
) -> RiskAssessment:
    """
    Additive risk score starting from a neutral 50.

    Each triggered adjustment appends its factor in evaluation order.
    The final score is clamped to [0, 100].
    """
    year = current_year if current_year is not None else date.today().year

    score = BASE_RISK_SCORE
    factors: list[str] = []

    # 1. Cap rate, either too thin or suspiciously rich
    if metrics.cap_rate < LOW_CAP_RATE:
        score += 20
        factors.append("Low cap rate increases investment risk")
    elif metrics.cap_rate > HIGH_CAP_RATE:
        score += 15
        factors.append("Very high cap rate may indicate market or property issues")

    # 2. Cash flow
    if metrics.monthly_cash_flow < 0:
        score += 25
        factors.append("Negative cash flow requires ongoing capital injection")

    # 3. Debt coverage (no loan -> nothing to cover)
    dsc = metrics.debt_service_coverage
    if dsc is not None and dsc < MIN_DEBT_SERVICE_COVERAGE:
        score += 15
        factors.append("Low debt service coverage increases financial risk")

    # 4. Expense load
    if metrics.break_even_ratio > MAX_BREAK_EVEN_RATIO:
        score += 10
        factors.append("High expense ratio reduces profit margins")

    # 5. Property age
    if prop.year_built is not None and year - prop.year_built > OLD_PROPERTY_AGE_YEARS:
        score += 10
        factors.append("Older property may require significant maintenance")

    score = min(100, max(0, score))

    return RiskAssessment(level=_risk_level(score), factors=tuple(factors), score=score)
