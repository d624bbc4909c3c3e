from __future__ import annotations

import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Callable

from propeval.adapters.logging_utils import get_logger, log_event
from propeval.analysis.metrics import assert_metrics_finite, compute_metrics
from propeval.domain.analysis import AnalysisResult
from propeval.domain.errors import ComputationFault, PropertyValidationError
from propeval.domain.market import compare_market
from propeval.domain.risk import assess_risk
from propeval.domain.rules import generate_recommendations
from propeval.services.validation import validate_and_prepare_payload

logger = get_logger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LEN = 9


def new_property_id(now_ms: int | None = None) -> str:
    """
    prop_<unix millis>_<9 random base36 chars>.

    Clock + CSPRNG suffix, no counters: safe to call from any thread.
    """
    ms = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LEN))
    return f"prop_{ms}_{suffix}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def analyze_property(
    raw_payload: Any,
    *,
    clock: Callable[[], datetime] | None = None,
    id_factory: Callable[[], str] | None = None,
    current_year: int | None = None,
) -> AnalysisResult:
    """
    Main analysis entrypoint.

    Validation runs first; on bad input PropertyValidationError is raised and
    no metric is computed. clock / id_factory / current_year are injection
    points for reproducible runs.
    """
    try:
        prop = validate_and_prepare_payload(raw_payload)
    except PropertyValidationError as e:
        log_event(logger, "analysis_rejected", logging.WARNING, error=e.message, fields=e.fields)
        raise

    try:
        metrics = assert_metrics_finite(compute_metrics(prop))
    except ComputationFault as e:
        log_event(logger, "analysis_failed", logging.ERROR, address=prop.address, error=str(e))
        raise

    # independent of each other given the metrics
    market = compare_market(metrics.cap_rate, prop.address)
    risk = assess_risk(metrics, prop, current_year=current_year)
    recommendations = generate_recommendations(metrics, prop)

    now = (clock or _utc_now)()
    if id_factory is not None:
        property_id = id_factory()
    else:
        property_id = new_property_id(int(now.timestamp() * 1000))

    result = AnalysisResult(
        property_id=property_id,
        address=prop.address,
        input_data=prop,
        calculated_metrics=metrics,
        market_comparison=market,
        recommendations=recommendations,
        risk_assessment=risk,
        timestamp=iso_timestamp(now),
    )

    log_event(
        logger,
        "analysis_completed",
        property_id=property_id,
        address=prop.address,
        cap_rate=round(metrics.cap_rate, 4),
        risk_level=risk.level,
        risk_score=risk.score,
        n_recommendations=len(recommendations),
    )
    return result
