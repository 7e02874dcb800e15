"""Pydantic schemas for weather and weather-driven pairings."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

WeatherCondition = Literal["sunny", "cloudy", "rainy", "hot", "cold"]


class WeatherData(BaseModel):
    """Current conditions for a location."""

    temperature: int
    humidity: int
    description: str
    icon: str
    condition: WeatherCondition
    city: str
    country: str
    timestamp: datetime
    is_mock: bool = False


class ForecastEntry(BaseModel):
    date: datetime
    temperature: int
    description: str
    icon: str


class WinePairing(BaseModel):
    """Wines suited to the current weather."""

    condition: WeatherCondition
    description: str
    recommendations: list[str]
    tips: str
    serving_temp: str
    temperature: int


class WeatherPairingResponse(BaseModel):
    weather: WeatherData
    pairing: WinePairing
