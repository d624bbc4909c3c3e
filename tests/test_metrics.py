import math

import pytest

from propeval.analysis.metrics import assert_metrics_finite, compute_metrics
from propeval.domain.errors import ComputationFault
from propeval.domain.finance import monthly_mortgage_payment
from propeval.domain.property import PropertyInput
from fixtures.properties import all_cash_clean_payload, baseline_payload


def test_baseline_formulas():
    m = compute_metrics(PropertyInput(**baseline_payload()))

    assert m.annual_income == pytest.approx(19_200.0)
    assert m.monthly_cash_flow == pytest.approx(1600.0)
    assert m.cap_rate == pytest.approx(19_200 / 350_000 * 100)
    assert m.cap_rate == pytest.approx(5.4857, abs=1e-4)
    assert m.cash_on_cash == pytest.approx(27.4286, abs=1e-4)
    assert m.roi == m.cash_on_cash
    assert m.break_even_ratio == pytest.approx(1200 / 2800)
    assert m.gross_rent_multiplier == pytest.approx(350_000 / (2800 * 12))
    assert m.one_percent_rule is False
    assert m.price_per_square_foot is None


def test_debt_service_coverage_uses_cash_flow_over_payment():
    m = compute_metrics(PropertyInput(**baseline_payload()))
    payment = monthly_mortgage_payment(280_000.0, 0.065, 30)
    assert m.debt_service_coverage == pytest.approx(1600.0 / payment)
    assert m.debt_service_coverage < 1.2


def test_one_percent_rule_boundary_is_inclusive():
    payload = baseline_payload() | {"price": 250_000, "monthlyRent": 2500}
    m = compute_metrics(PropertyInput(**payload))
    assert m.one_percent_rule is True

    payload["monthlyRent"] = 2499.99
    assert compute_metrics(PropertyInput(**payload)).one_percent_rule is False


def test_price_per_square_foot_only_when_area_given():
    payload = baseline_payload() | {"squareFeet": 1750}
    m = compute_metrics(PropertyInput(**payload))
    assert m.price_per_square_foot == pytest.approx(200.0)
    assert "pricePerSquareFoot" in m.to_dict()

    m2 = compute_metrics(PropertyInput(**baseline_payload()))
    assert "pricePerSquareFoot" not in m2.to_dict()


def test_all_cash_purchase_has_no_coverage_ratio():
    m = compute_metrics(PropertyInput(**all_cash_clean_payload()))
    assert m.debt_service_coverage is None
    assert m.to_dict()["debtServiceCoverage"] is None


def test_negative_cash_flow_is_allowed():
    payload = baseline_payload() | {"monthlyExpenses": 3000}
    m = compute_metrics(PropertyInput(**payload))
    assert m.monthly_cash_flow == pytest.approx(-200.0)
    assert m.cap_rate < 0
    assert m.debt_service_coverage < 0


def test_recompute_is_identical():
    prop = PropertyInput(**baseline_payload())
    assert compute_metrics(prop) == compute_metrics(prop)


def test_assert_metrics_finite_rejects_nan():
    m = compute_metrics(PropertyInput(**baseline_payload()))
    broken = type(m)(**{**vars(m), "cap_rate": math.nan})

    assert assert_metrics_finite(m) is m
    with pytest.raises(ComputationFault, match="cap_rate"):
        assert_metrics_finite(broken)
