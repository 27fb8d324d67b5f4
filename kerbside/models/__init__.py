# Kerbside domain models
# Import all models here so callers can use `from kerbside.models import ...`

from kerbside.models.zone import LimitClass, ZoneRestriction, StreetZoneMapping       # noqa
from kerbside.models.estimate import (                                                 # noqa
    AvailabilityEstimate, Confidence, StrategyOutcome, clamp_availability,
)
from kerbside.models.sensor import SensorRecord, SensorSnapshot                         # noqa
