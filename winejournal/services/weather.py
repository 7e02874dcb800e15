"""OpenWeatherMap client with weather-driven wine pairings.

Without an API key the service runs in demo mode and returns mock data.
Upstream failures are logged and also fall back to mock data.
"""

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from winejournal.config import settings
from winejournal.constants import WEATHER_WINE_PAIRINGS
from winejournal.schemas.weather import ForecastEntry, WeatherData, WinePairing

logger = logging.getLogger(__name__)

_MOCK_CONDITIONS = [
    (25, "sunny", "01d"),
    (18, "cloudy", "03d"),
    (12, "rainy", "10d"),
    (32, "hot", "01d"),
    (8, "cold", "13d"),
]


def determine_condition(temperature: float, description: str) -> str:
    """Classify weather into one of the pairing conditions."""
    description = description.lower()
    if temperature >= 30:
        return "hot"
    if temperature <= 10:
        return "cold"
    if "rain" in description or "drizzle" in description:
        return "rainy"
    if "cloud" in description or "overcast" in description:
        return "cloudy"
    return "sunny"


def get_wine_pairing(weather: WeatherData) -> WinePairing:
    """Wines suited to the given weather."""
    pairing = WEATHER_WINE_PAIRINGS[weather.condition]
    return WinePairing(
        condition=weather.condition,
        description=pairing["description"],
        recommendations=list(pairing["recommendations"]),
        tips=pairing["tips"],
        serving_temp=pairing["serving_temp"],
        temperature=weather.temperature,
    )


def _seed(city: str) -> int:
    return int(hashlib.sha256(city.strip().lower().encode()).hexdigest(), 16)


def _split_city(city: str) -> tuple[str, str]:
    name, _, country = city.partition(",")
    return name.strip(), country.strip() or "South Africa"


def mock_weather(city: str) -> WeatherData:
    """Deterministic demo weather for a city."""
    seed = _seed(city)
    temperature, description, icon = _MOCK_CONDITIONS[seed % len(_MOCK_CONDITIONS)]
    name, country = _split_city(city)
    return WeatherData(
        temperature=temperature,
        humidity=40 + (seed // 7) % 40,
        description=description,
        icon=icon,
        condition=determine_condition(temperature, description),
        city=name,
        country=country,
        timestamp=datetime.now(timezone.utc),
        is_mock=True,
    )


def mock_forecast(city: str, days: int = 5) -> list[ForecastEntry]:
    """Deterministic demo forecast, one entry per day starting today."""
    seed = _seed(city)
    now = datetime.now(timezone.utc)
    return [
        ForecastEntry(
            date=now + timedelta(days=i),
            temperature=20 + ((seed >> (i * 4)) % 11) - 5,
            description="partly cloudy",
            icon="02d",
        )
        for i in range(days)
    ]


class WeatherService:
    """Current weather and forecasts from OpenWeatherMap."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    def is_available(self) -> bool:
        return bool(settings.openweather_api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=settings.weather_base_url,
            timeout=settings.weather_timeout_seconds,
            transport=self._transport,
        )

    async def _get(self, path: str, city: str) -> dict[str, Any]:
        params = {
            "q": city,
            "appid": settings.openweather_api_key,
            "units": settings.weather_units,
        }
        async with self._client() as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()

    async def get_current_weather(self, city: str | None = None) -> WeatherData:
        """Current weather for a location string such as ``"Paris, FR"``."""
        city = city or settings.weather_default_city
        if not self.is_available():
            return mock_weather(city)

        try:
            data = await self._get("/weather", city)
            temperature = data["main"]["temp"]
            description = data["weather"][0]["description"]
            return WeatherData(
                temperature=round(temperature),
                humidity=int(data["main"]["humidity"]),
                description=description,
                icon=data["weather"][0]["icon"],
                condition=determine_condition(temperature, description),
                city=data.get("name") or _split_city(city)[0],
                country=data.get("sys", {}).get("country", ""),
                timestamp=datetime.now(timezone.utc),
            )
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("Weather lookup failed for %s: %s", city, e)
            return mock_weather(city)

    async def get_forecast(self, city: str | None = None, days: int = 5) -> list[ForecastEntry]:
        """Forecast entries for a location (3-hourly upstream, daily in demo mode).

        Upstream entries are limited to the first ``days`` days of the forecast.
        """
        city = city or settings.weather_default_city
        if not self.is_available():
            return mock_forecast(city, days)

        try:
            data = await self._get("/forecast", city)
            entries = [
                ForecastEntry(
                    date=datetime.fromtimestamp(item["dt"], tz=timezone.utc),
                    temperature=round(item["main"]["temp"]),
                    description=item["weather"][0]["description"],
                    icon=item["weather"][0]["icon"],
                )
                for item in data["list"]
            ]
            if not entries:
                return entries
            cutoff = entries[0].date + timedelta(days=days)
            return [entry for entry in entries if entry.date < cutoff]
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("Weather forecast failed for %s: %s", city, e)
            return mock_forecast(city, days)


weather_service = WeatherService()
