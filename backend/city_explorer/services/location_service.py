import logging

from ..errors import InvalidQuery, NotFound
from ..models.schemas import LocationRecord
from ..repositories.location_repository import LocationRepository
from ..utils.record_mapper import map_location
from .google_maps_service import GoogleMapsService

logger = logging.getLogger(__name__)

class LocationService:
    """検索文字列を緯度経度に解決し、結果をDBにキャッシュするサービス"""
    def __init__(self, maps_service: GoogleMapsService, location_repository: LocationRepository):
        self.maps_service = maps_service
        self.location_repository = location_repository

    async def resolve_location(self, search_query: str) -> LocationRecord:
        """DBに同じ検索文字列があればそれを返し、なければジオコーディングして保存する

        検索文字列は正規化せず完全一致で比較する。
        """
        if not search_query or not search_query.strip():
            raise InvalidQuery("Search query must not be empty")

        # まずDBから検索
        cached = await self.location_repository.get_by_search_query(search_query)
        if cached is not None:
            logger.info("Location retrieved from database")
            return cached

        # DBになければ Google に問い合わせる
        results = await self.maps_service.geocode(search_query)
        if not results:
            logger.warning(f"No geocoding results for '{search_query}'")
            raise NotFound(f"No geocoding results for '{search_query}'")

        logger.info("Location retrieved from google")
        location = map_location(results[0], search_query)

        # 保存が終わってから返す
        await self.location_repository.create(location)
        return location
