"""
Bitly Link Shortener
"""

from typing import Optional

import httpx

from config import BITLY_ACCESS_TOKEN, BITLY_SHORTEN_URL, HTTP_TIMEOUT_SECONDS
from core.errors import ProviderError
from tracing import tracer

PROVIDER = "bitly"


class BitlyShortener:
    """Shortens place links so a directions line fits in an SMS"""

    def __init__(self, access_token: str = BITLY_ACCESS_TOKEN,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.access_token = access_token
        self.http = http_client or httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)

    @tracer.tool(name="shorten", description="Shorten a directions link")
    async def shorten(self, url: str) -> str:
        """
        Shorten a URL

        Returns:
            Short link without scheme, e.g. "bit.ly/3abcDEF"

        Raises:
            ProviderError: request failed or the response had no link
        """
        try:
            resp = await self.http.post(
                BITLY_SHORTEN_URL,
                json={"long_url": url},
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(PROVIDER, f"shorten failed for {url}: {e}") from e

        short = data.get("id") or data.get("link")
        if not short:
            raise ProviderError(PROVIDER, f"no link in response for {url}")
        return short

    async def aclose(self):
        await self.http.aclose()
