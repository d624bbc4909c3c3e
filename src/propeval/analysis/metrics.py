import math

from propeval.domain.analysis import CalculatedMetrics
from propeval.domain.errors import ComputationFault
from propeval.domain.finance import (
    ASSUMED_LOAN_TERM_YEARS,
    ASSUMED_MORTGAGE_RATE,
    monthly_mortgage_payment,
)
from propeval.domain.property import PropertyInput


def compute_metrics(prop: PropertyInput) -> CalculatedMetrics:
    """
    Core underwriting math. Pure function of the validated input.

    Expects price, rent and down payment > 0 (PropertyInput enforces this).
    """
    price = prop.price
    rent = prop.monthly_rent
    expenses = prop.monthly_expenses

    # --- income side ---
    annual_rent = rent * 12
    annual_expenses = expenses * 12
    annual_income = annual_rent - annual_expenses
    monthly_cash_flow = rent - expenses

    # --- return ratios (percent) ---
    cap_rate = annual_income / price * 100
    cash_on_cash = annual_income / prop.down_payment * 100
    roi = cash_on_cash  # simplified: no separate ROI model

    break_even_ratio = expenses / rent
    one_percent_rule = rent >= price * 0.01

    # --- debt service ---
    # Coverage here is cash flow / loan payment, not NOI / debt service.
    loan_amount = price - prop.down_payment
    monthly_loan_payment = monthly_mortgage_payment(
        principal=loan_amount,
        annual_rate=ASSUMED_MORTGAGE_RATE,
        years=ASSUMED_LOAN_TERM_YEARS,
    )
    debt_service_coverage = None
    if monthly_loan_payment > 0:
        debt_service_coverage = monthly_cash_flow / monthly_loan_payment

    gross_rent_multiplier = price / annual_rent

    price_per_square_foot = None
    if prop.square_feet is not None:
        price_per_square_foot = price / prop.square_feet

    return CalculatedMetrics(
        cap_rate=cap_rate,
        cash_on_cash=cash_on_cash,
        monthly_cash_flow=monthly_cash_flow,
        annual_income=annual_income,
        roi=roi,
        break_even_ratio=break_even_ratio,
        one_percent_rule=one_percent_rule,
        debt_service_coverage=debt_service_coverage,
        gross_rent_multiplier=gross_rent_multiplier,
        price_per_square_foot=price_per_square_foot,
    )


def assert_metrics_finite(metrics: CalculatedMetrics) -> CalculatedMetrics:
    """Fail loudly instead of handing NaN/inf to the caller."""
    bad = []
    for name, value in vars(metrics).items():
        if isinstance(value, bool) or value is None:
            continue
        if not math.isfinite(value):
            bad.append(name)
    if bad:
        raise ComputationFault(f"non-finite metrics: {', '.join(sorted(bad))}")
    return metrics
