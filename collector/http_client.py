import asyncio
import logging
import httpx
from typing import Optional
from fake_useragent import UserAgent

from collector.errors import FetchFailure

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 15000


class HTTPClient:
    def __init__(self, timeout_ms: int = DEFAULT_TIMEOUT_MS, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.ua = UserAgent()
        self.timeout_s = timeout_ms / 1000
        self.timeout = httpx.Timeout(self.timeout_s)
        self.client = httpx.AsyncClient(
            http2=False,
            follow_redirects=True,
            timeout=self.timeout,
            transport=transport,
        )

    def _get_headers(self):
        return {
            "User-Agent": self.ua.chrome,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "ko-KR,ko;q=0.9,en;q=0.8",
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
        }

    async def fetch(self, url: str, source_id: Optional[str] = None) -> str:
        """
        Fetches one page and returns its body.
        Raises FetchFailure on timeout, network error or a non-2xx status.
        No retries here, the pipeline moves on to the next page instead.
        """
        source_id = source_id or url
        try:
            # httpx timeouts are per phase, wait_for bounds the whole request
            response = await asyncio.wait_for(
                self.client.get(url, headers=self._get_headers()), self.timeout_s
            )
            response.raise_for_status()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise FetchFailure(source_id, e, f"timed out after {self.timeout_s}s") from e
        except httpx.HTTPStatusError as e:
            raise FetchFailure(source_id, e, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchFailure(source_id, e) from e

        logger.info(f"Successfully fetched {url} ({len(response.text)} chars)")
        return response.text

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
