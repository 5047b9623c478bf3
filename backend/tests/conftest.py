"""
全テスト共通のフィクスチャ
"""
import pytest
from unittest.mock import AsyncMock

from city_explorer.config import Settings
from city_explorer.models.schemas import LocationRecord
from city_explorer.services.google_maps_service import GoogleMapsService


@pytest.fixture
def database_url(tmp_path):
    """テストごとに新しいSQLiteファイルDB"""
    return f"sqlite:///{tmp_path / 'locations.db'}"


@pytest.fixture
def test_settings(database_url):
    return Settings(
        DATABASE_URL=database_url,
        DARKSKY_API_KEY="darksky-key",
        YELP_API_KEY="yelp-key",
        MOVIES_DB_API_KEY="tmdb-key",
        WEATHER_API_URL="https://weather.test/forecast",
        YELP_API_URL="https://yelp.test/v3/businesses/search",
        MOVIES_API_URL="https://tmdb.test/3/search/movie",
    )


@pytest.fixture
def seattle_geocode_result():
    """'Seattle' に対する Google ジオコーディング結果の先頭要素"""
    return {
        "formatted_address": "Seattle, WA, USA",
        "geometry": {"location": {"lat": 47.6062, "lng": -122.3321}},
        "place_id": "ChIJVTPokywQkFQRmtVEaUZlJRA",
    }


@pytest.fixture
def seattle_record():
    return LocationRecord(
        search_query="Seattle",
        formatted_query="Seattle, WA, USA",
        latitude=47.6062,
        longitude=-122.3321,
    )


@pytest.fixture
def mock_maps_service(seattle_geocode_result):
    """常に Seattle を返すジオコーダのモック"""
    maps_service = AsyncMock(spec=GoogleMapsService)
    maps_service.geocode.return_value = [seattle_geocode_result]
    return maps_service
