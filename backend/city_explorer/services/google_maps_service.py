import asyncio
import googlemaps
import logging
from functools import partial
from typing import Any, Dict, List

from ..errors import MalformedResponse, NetworkFailure

logger = logging.getLogger(__name__)


def _fail_on_server_error(response, *args, **kwargs):
    """5xx をその場で例外にし、googlemaps 側の再試行ループに渡さない"""
    if response.status_code >= 500:
        raise googlemaps.exceptions.HTTPError(response.status_code)
    return response


class GoogleMapsService:
    """Google Maps Geocoding API とのやり取りを担当するサービスクラス

    ジオコーディングは1回のHTTPリクエストで完結し、再試行はしない。
    """
    def __init__(self, api_key: str):
        if not api_key:
            logger.error("Google Maps API Key is not provided.")
            # キーがない場合はクライアントを作らず、呼び出し時にエラーにする
            self.client = None
            logger.warning("GoogleMapsService initialized without a client due to missing API key.")
        else:
            self.client = googlemaps.Client(
                key=api_key,
                retry_over_query_limit=False,
                requests_kwargs={"hooks": {"response": _fail_on_server_error}},
            )
            logger.info("GoogleMapsService initialized successfully.")

    def _check_client(self):
        """APIクライアントが初期化されているかチェックするヘルパーメソッド"""
        if self.client is None:
            logger.error("Google Maps client is not initialized. Check API Key.")
            raise NetworkFailure("Google Maps client is not available due to missing API key.")

    async def geocode(self, address: str) -> List[Dict[str, Any]]:
        """住所から候補の一覧を取得する (ブロッキング呼び出しはexecutorで実行)"""
        self._check_client()
        logger.info(f"Geocoding address: {address}")
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, partial(self.client.geocode, address))
        except googlemaps.exceptions.ApiError as e:
            logger.error(f"Google Maps Geocoding API error for '{address}': {e}")
            raise NetworkFailure(f"Geocoding API error: {e.status}") from e
        except (googlemaps.exceptions.TransportError, googlemaps.exceptions.Timeout) as e:
            logger.error(f"Google Maps Geocoding request failed for '{address}': {e}")
            raise NetworkFailure("Geocoding request failed") from e

        if not isinstance(result, list):
            raise MalformedResponse("Geocoding response is not a list of results")
        logger.debug(f"Geocode result for {address}: {len(result)} candidates")
        return result
