from __future__ import annotations

from propeval.domain.analysis import CalculatedMetrics
from propeval.domain.property import PropertyInput


def generate_recommendations(metrics: CalculatedMetrics, prop: PropertyInput) -> tuple[str, ...]:
    """
    Rule-based advice. Every rule is checked on its own, so several can fire;
    output keeps rule order. An empty tuple means nothing was flagged.
    """
    recs: list[str] = []

    # 1. Cap rate
    if metrics.cap_rate < 4:
        recs.append(
            "Consider negotiating a lower purchase price. Cap rate below 4% indicates potential overvaluation."
        )
    if metrics.cap_rate > 10:
        recs.append("Excellent cap rate! Verify property condition and local market stability.")

    # 2. Cash flow
    if metrics.monthly_cash_flow < 0:
        recs.append(
            "Negative cash flow detected. Consider increasing rent, reducing expenses, or renegotiating purchase price."
        )
    if metrics.monthly_cash_flow > 500:
        recs.append("Strong positive cash flow. This property shows excellent income potential.")

    # 3. 1% rule
    if not metrics.one_percent_rule:
        recs.append(
            "Property does not meet the 1% rule. Consider if the location justifies lower rental yield."
        )

    # 4. Debt service coverage
    dsc = metrics.debt_service_coverage
    if dsc is not None and dsc < 1.2:
        recs.append(
            "Low debt service coverage ratio. Consider larger down payment or better financing terms."
        )

    # 5. Price per square foot
    ppsf = metrics.price_per_square_foot
    if ppsf is not None and ppsf > 200:
        recs.append(
            "High price per square foot. Verify this is justified by location and property quality."
        )

    # 6. Break-even ratio
    if metrics.break_even_ratio > 0.8:
        recs.append("High expense ratio. Look for opportunities to reduce operating costs.")

    return tuple(recs)
