"""Services for Wine Journal."""

from winejournal.services.ai import SommelierService
from winejournal.services.image_storage import ImageStorageService
from winejournal.services.weather import WeatherService

__all__ = ["ImageStorageService", "SommelierService", "WeatherService"]
