"""プロバイダのJSONを正規化されたレコードに変換する純粋関数群"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from pydantic import ValidationError

from ..errors import MalformedResponse
from ..models.schemas import Business, LocationRecord, Movie, WeatherDay

logger = logging.getLogger(__name__)

MOVIE_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w185/"


def _require(data: Dict[str, Any], *path: str) -> Any:
    """ネストしたキーを辿り、欠けていれば MalformedResponse を送出する"""
    current: Any = data
    for key in path:
        if not isinstance(current, dict) or current.get(key) is None:
            raise MalformedResponse(f"Missing field '{'.'.join(path)}' in provider response")
        current = current[key]
    return current


def _build(model, **fields):
    try:
        return model(**fields)
    except ValidationError as e:
        logger.warning(f"Provider record rejected for {model.__name__}: {e}")
        raise MalformedResponse(f"Invalid {model.__name__} fields in provider response") from e


def format_unix_date(timestamp: float) -> str:
    # JavaScriptの Date#toDateString と同じ形式 (例: "Mon Oct 19 2026")
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%a %b %d %Y")


def map_location(result: Dict[str, Any], search_query: str) -> LocationRecord:
    return _build(
        LocationRecord,
        search_query=search_query,
        formatted_query=_require(result, "formatted_address"),
        latitude=_require(result, "geometry", "location", "lat"),
        longitude=_require(result, "geometry", "location", "lng"),
    )


def map_weather_day(day: Dict[str, Any]) -> WeatherDay:
    try:
        time = format_unix_date(_require(day, "time"))
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise MalformedResponse(f"Invalid forecast timestamp: {day.get('time')!r}") from e
    return _build(WeatherDay, forecast=_require(day, "summary"), time=time)


def map_business(business: Dict[str, Any]) -> Business:
    return _build(
        Business,
        name=_require(business, "name"),
        image_url=business.get("image_url"),
        price=business.get("price"),
        rating=business.get("rating"),
        url=business.get("url"),
    )


def movie_image_url(poster_path: Optional[str]) -> Optional[str]:
    """poster_path があれば画像ホストの接頭辞 + poster_path、なければ None"""
    if not poster_path:
        return None
    return f"{MOVIE_IMAGE_BASE_URL}{poster_path}"


def map_movie(movie: Dict[str, Any]) -> Movie:
    return _build(
        Movie,
        title=_require(movie, "title"),
        overview=movie.get("overview"),
        average_votes=movie.get("vote_average"),
        total_votes=movie.get("vote_count"),
        popularity=movie.get("popularity"),
        image_url=movie_image_url(movie.get("poster_path")),
        released_on=movie.get("release_date"),
    )
