# kerbside/routers/predict.py
"""Availability prediction endpoints — thin wrappers over the fallback chain."""

from datetime import datetime
from fastapi import APIRouter, HTTPException
from kerbside.config import settings
from kerbside.schemas.prediction import (
    AvailabilityPredictionOut, CurrentPredictionOut, EstimateDetailOut,
)
from kerbside.services.fallback_chain import estimate_with_detail, predict
from kerbside.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def recommendation_for(availability: float) -> str:
    if availability >= 60:
        return "Excellent time to find parking"
    if availability >= 40:
        return "Good chance of finding parking"
    if availability >= 20:
        return "Challenging but possible to find parking"
    return "Very difficult to find parking - consider alternative times"


def validate_hour_day(hour: int, day: int) -> str | None:
    """Returns an error message, or None if both are in range."""
    if hour < 0 or hour > 23:
        return "Hour must be between 0-23"
    if day < 1 or day > 7:
        return "Day must be between 1-7 (1=Monday)"
    return None


@router.get("/predict/availability", response_model=AvailabilityPredictionOut,
            response_model_exclude_none=True, summary="Predict availability for a street, hour and day")
def predict_availability(street: str = settings.DEFAULT_STREET, hour: int = 14, day: int = 1):
    """hour: 0–23, day: 1=Monday … 7=Sunday."""
    error = validate_hour_day(hour, day)
    if error:
        return {"status": "error", "message": error}

    availability = predict(street, hour, day)
    return {
        "status": "success",
        "prediction": {
            "street": street,
            "day": DAY_NAMES[day - 1],
            "time": f"{hour:02d}:00",
            "predicted_availability_percentage": availability,
            "recommendation": recommendation_for(availability),
        },
    }


@router.get("/predict/detail", response_model=EstimateDetailOut,
            summary="Prediction with confidence, zones analysed and restriction factor")
def predict_detail(street: str = settings.DEFAULT_STREET, hour: int = 14, day: int = 1):
    error = validate_hour_day(hour, day)
    if error:
        raise HTTPException(status_code=400, detail=error)
    result = estimate_with_detail(street, hour, day)
    return {"street": street, "hour": hour, "day": day, **result.to_dict()}


@router.get("/predict/now", response_model=CurrentPredictionOut, summary="Prediction for the current local time")
def predict_now(street: str = settings.DEFAULT_STREET):
    now = datetime.now()
    availability = predict(street, now.hour, now.isoweekday())
    logger.debug(f"[PREDICT] now={now:%a %H:%M} street='{street}' → {availability}%")
    return {
        "status": "success",
        "current_prediction": {
            "street": street,
            "current_time": now.strftime("%Y-%m-%d %H:%M"),
            "current_availability": availability,
            "recommendation": (
                "Good time to look for parking" if availability >= 40
                else "Parking will be challenging right now"
            ),
        },
    }
