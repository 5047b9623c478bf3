import asyncio
import aiohttp
import logging
from typing import Any, Dict, Optional

from ..errors import MalformedResponse, NetworkFailure

logger = logging.getLogger(__name__)

class ProviderClient:
    """上流APIへのGETリクエストを担当するクライアント"""
    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self.session = session

    async def connect(self):
        if self.session is None or self.session.closed:
            # 上流呼び出しにタイムアウトは設けない
            self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None))

    async def close(self):
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None

    async def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        if self.session is None:
            raise NetworkFailure("ProviderClient is not connected")

        logger.info(f"GET {url}")
        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    logger.error(f"Provider returned {response.status} for {url}: {body[:200]}")
                    raise NetworkFailure(f"Provider returned HTTP {response.status}")
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    logger.error(f"Provider returned a non-JSON body for {url}: {e}")
                    raise MalformedResponse("Provider returned a non-JSON body") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Provider request to {url} failed: {e}")
            raise NetworkFailure(f"Provider request failed: {e}") from e
