# kerbside/schemas/sensor_data.py
from pydantic import BaseModel
from typing import Optional, Union


class CacheInfo(BaseModel):
    records_in_cache: int
    cache_age_minutes: Union[float, str]      # "no cache" when empty
    last_fetched: Optional[str] = None        # local ISO time of the last successful fetch


class CacheStatusOut(BaseModel):
    status: str
    cache_info: CacheInfo


class CacheRefreshOut(BaseModel):
    status: str
    message: str
    records: Optional[int] = None
