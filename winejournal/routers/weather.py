"""Weather lookups and weather-driven wine pairings."""

from fastapi import APIRouter, Query

from winejournal.schemas.weather import ForecastEntry, WeatherData, WeatherPairingResponse
from winejournal.services.auth import RequireAuth
from winejournal.services.weather import get_wine_pairing, weather_service

router = APIRouter()

CityQuery = Query(None, max_length=100, description='Location such as "Paris, FR"')


@router.get("/current", response_model=WeatherData)
async def current_weather(current_user: RequireAuth, city: str | None = CityQuery) -> WeatherData:
    return await weather_service.get_current_weather(city)


@router.get("/forecast", response_model=list[ForecastEntry])
async def forecast(
    current_user: RequireAuth,
    city: str | None = CityQuery,
    days: int = Query(5, ge=1, le=5),
) -> list[ForecastEntry]:
    return await weather_service.get_forecast(city, days)


@router.get("/pairing", response_model=WeatherPairingResponse)
async def weather_pairing(
    current_user: RequireAuth,
    city: str | None = CityQuery,
) -> WeatherPairingResponse:
    """Current weather with the wines that suit it."""
    weather = await weather_service.get_current_weather(city)
    return WeatherPairingResponse(weather=weather, pairing=get_wine_pairing(weather))
