# kerbside/services/fallback_chain.py
"""
Fallback Chain — the only entry point the web layer uses for estimates.

Stages, richest first:
  (a) reference    restriction-aware estimate from the CSV tables
                   (or the zone-filter strategy when ESTIMATION_STRATEGY=zone_filter)
  (b) time_curve   secondary time-of-day curve, when the tables aren't loaded
  (c) emergency    base curve × street nudge, rounded to a whole number,
                   when a stage above raised

Every stage reports a StrategyOutcome; an exception inside a stage is logged and
turned into a failed outcome. predict() therefore always returns a number.
"""

from typing import Callable, Optional

import pandas as pd

from kerbside.config import settings
from kerbside.models.estimate import (
    AvailabilityEstimate, Confidence, StrategyOutcome, clamp_availability,
)
from kerbside.services.estimator import (
    STRATEGY_RESTRICTION_TABLE, base_availability, estimate, time_based_availability,
)
from kerbside.services.reference_store import PARKING_ZONES, SIGN_PLATES, load_datasets
from kerbside.services.zone_filter_estimator import STRATEGY_ZONE_FILTER, estimate_zone_filtered
from kerbside.utils.logger import get_logger
from kerbside.utils.street_matcher import NudgeTable

logger = get_logger(__name__)

STAGE_REFERENCE = "reference"
STAGE_TIME_CURVE = "time_curve"
STAGE_EMERGENCY = "emergency"

# Returned only if the emergency curve itself cannot be evaluated (e.g. hour=None)
TERMINAL_AVAILABILITY = 50.0

REFERENCE_STRATEGIES = {
    STRATEGY_RESTRICTION_TABLE: estimate,
    STRATEGY_ZONE_FILTER: estimate_zone_filtered,
}


def has_reference_tables(datasets: Optional[dict[str, pd.DataFrame]]) -> bool:
    return bool(datasets) and datasets.get(SIGN_PLATES) is not None and datasets.get(PARKING_ZONES) is not None


def _attempt(stage: str, run: Callable[[], StrategyOutcome]) -> StrategyOutcome:
    try:
        return run()
    except Exception as e:
        logger.error(f"[FALLBACK] Stage '{stage}' failed: {e}", exc_info=True)
        return StrategyOutcome.failed(stage, f"{type(e).__name__}: {e}")


def _reference_stage(street: str, hour: int, day: int, datasets: Optional[dict]) -> StrategyOutcome:
    if datasets is None:
        datasets = load_datasets()
    if not has_reference_tables(datasets):
        return StrategyOutcome.skipped(STAGE_REFERENCE, "sign plates or parking zones not loaded")

    strategy = settings.ESTIMATION_STRATEGY
    estimator = REFERENCE_STRATEGIES.get(strategy)
    if estimator is None:
        logger.warning(f"Unknown ESTIMATION_STRATEGY '{strategy}', using {STRATEGY_RESTRICTION_TABLE}")
        estimator = estimate
    return StrategyOutcome.success(STAGE_REFERENCE, estimator(street, hour, day, datasets))


def _time_curve_stage(hour: int, day: int) -> StrategyOutcome:
    return StrategyOutcome.success(STAGE_TIME_CURVE, AvailabilityEstimate(
        availability_pct=time_based_availability(hour, day),
        confidence=Confidence.LOW,
        strategy=STAGE_TIME_CURVE,
    ))


def emergency_estimate(street: str, hour: int, day: int) -> AvailabilityEstimate:
    """Poorest-fidelity estimate. Never raises."""
    try:
        value = base_availability(hour, day) * NudgeTable(settings.EMERGENCY_STREET_NUDGES).factor_for(street)
        availability = float(round(clamp_availability(value)))
    except Exception as e:
        logger.error(f"[FALLBACK] Emergency curve unavailable for hour={hour!r} day={day!r}: {e}", exc_info=True)
        availability = TERMINAL_AVAILABILITY
    return AvailabilityEstimate(
        availability_pct=availability,
        confidence=Confidence.LOW,
        strategy=STAGE_EMERGENCY,
    )


def estimate_with_detail(
    street: str, hour: int, day: int, datasets: Optional[dict[str, pd.DataFrame]] = None
) -> AvailabilityEstimate:
    """
    Run the chain and return the full estimate. Pass datasets to skip reading
    the CSVs (tests, or a caller that already loaded them this request).
    """
    outcome = _attempt(STAGE_REFERENCE, lambda: _reference_stage(street, hour, day, datasets))

    if not outcome.ok and not outcome.error:
        logger.info(f"[FALLBACK] {outcome.reason} — using time-of-day curve")
        outcome = _attempt(STAGE_TIME_CURVE, lambda: _time_curve_stage(hour, day))

    if not outcome.ok:
        logger.warning(f"[FALLBACK] {outcome.strategy} failed ({outcome.reason}) — using emergency curve")
        return emergency_estimate(street, hour, day)

    return outcome.estimate


def predict(street: str, hour: int, day: int, datasets: Optional[dict[str, pd.DataFrame]] = None) -> float:
    """Availability percentage for a street at hour (0–23) on ISO weekday day (1–7)."""
    return estimate_with_detail(street, hour, day, datasets).availability_pct
