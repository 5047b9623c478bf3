"""状態を持たない検索 (上流へのGET 1回 + レコード変換)"""
import logging
from typing import Any, Callable, Dict, List, TypeVar

from ..config import Settings
from ..errors import MalformedResponse
from ..models.schemas import Business, Coordinates, Movie, WeatherDay
from ..utils.record_mapper import map_business, map_movie, map_weather_day
from .provider_client import ProviderClient

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


def _map_list(body: Any, path: List[str], mapper: Callable[[Dict[str, Any]], RecordT]) -> List[RecordT]:
    items: Any = body
    for key in path:
        if not isinstance(items, dict) or key not in items:
            raise MalformedResponse(f"Missing '{'.'.join(path)}' in provider response")
        items = items[key]
    if not isinstance(items, list):
        raise MalformedResponse(f"'{'.'.join(path)}' is not a list")
    return [mapper(item) for item in items]


class WeatherService:
    def __init__(self, provider_client: ProviderClient, settings: Settings):
        self.provider_client = provider_client
        self.settings = settings

    async def search(self, coordinates: Coordinates) -> List[WeatherDay]:
        url = (
            f"{self.settings.WEATHER_API_URL}/{self.settings.DARKSKY_API_KEY}/"
            f"{coordinates.latitude},{coordinates.longitude}"
        )
        body = await self.provider_client.get_json(url)
        days = _map_list(body, ["daily", "data"], map_weather_day)
        logger.info(f"Weather retrieved: {len(days)} days")
        return days


class YelpService:
    def __init__(self, provider_client: ProviderClient, settings: Settings):
        self.provider_client = provider_client
        self.settings = settings

    async def search(self, coordinates: Coordinates) -> List[Business]:
        body = await self.provider_client.get_json(
            self.settings.YELP_API_URL,
            params={
                "term": "restaurants",
                "latitude": str(coordinates.latitude),
                "longitude": str(coordinates.longitude),
            },
            headers={"Authorization": f"Bearer {self.settings.YELP_API_KEY}"},
        )
        businesses = _map_list(body, ["businesses"], map_business)
        logger.info(f"Yelp businesses retrieved: {len(businesses)}")
        return businesses


class MovieService:
    def __init__(self, provider_client: ProviderClient, settings: Settings):
        self.provider_client = provider_client
        self.settings = settings

    async def search(self, city: str) -> List[Movie]:
        body = await self.provider_client.get_json(
            self.settings.MOVIES_API_URL,
            params={"api_key": self.settings.MOVIES_DB_API_KEY, "query": city},
        )
        movies = _map_list(body, ["results"], map_movie)
        logger.info(f"Movies retrieved for '{city}': {len(movies)}")
        return movies
