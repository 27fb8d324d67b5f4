# kerbside/schemas/prediction.py
from pydantic import BaseModel
from typing import Optional


class AvailabilityPrediction(BaseModel):
    street: str
    day: str
    time: str
    predicted_availability_percentage: float
    recommendation: str


class AvailabilityPredictionOut(BaseModel):
    status: str
    prediction: Optional[AvailabilityPrediction] = None
    message: Optional[str] = None


class CurrentPrediction(BaseModel):
    street: str
    current_time: str
    current_availability: float
    recommendation: str


class CurrentPredictionOut(BaseModel):
    status: str
    current_prediction: CurrentPrediction


class EstimateDetailOut(BaseModel):
    street: str
    hour: int
    day: int
    availability_pct: float
    confidence: str           # very_high | high | medium | low
    zones_analyzed: int
    restriction_factor: float
    strategy: Optional[str]
