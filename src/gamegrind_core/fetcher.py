import asyncio
import json
import time
from typing import Any
from urllib.parse import urlencode

import aiohttp

from .constants import FAILED_ERROR_CODE, STATUS_FAILED, STATUS_SUCCESS
from .context import LookupContext
from .exceptions import APIError, GameNotFound, NetworkError, ParsingError, RateLimitExceeded
from .request_log import sanitize_endpoint

HEADERS = {
    "User-Agent": "GameGrind/1.0 (desktop collection manager)",
    "Accept": "application/json",
}


def _parse_retry_after(value: str | None) -> float | None:
    # Only the delta-seconds form is reported; HTTP-date values are dropped.
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class MetadataFetchClient:
    """
    Issues rate-limited GET requests against the MobyGames v1 API.
    Every call, successful or not, leaves one request-log record.
    """

    def __init__(self, session: aiohttp.ClientSession, context: LookupContext):
        self.session = session
        self.context = context

    # URL builders

    def _url(self, path: str, **params: Any) -> str:
        query = urlencode({"api_key": self.context.api_key, **params})
        return f"{self.context.base_url.rstrip('/')}/{path}?{query}"

    def search_url(self, query: str) -> str:
        return self._url("games", title=query, format="normal")

    def game_url(self, game_id: int) -> str:
        return self._url(f"games/{game_id}", format="normal")

    def platforms_url(self, game_id: int) -> str:
        return self._url(f"games/{game_id}/platforms")

    def platform_url(self, game_id: int, platform_id: int) -> str:
        return self._url(f"games/{game_id}/platforms/{platform_id}")

    # Transport

    async def send_get_request(self, url: str) -> str:
        """Performs the raw GET. No retries: a failed call is terminal for that item."""
        try:
            async with self.session.get(url, headers=HEADERS) as resp:
                if resp.status == 404:
                    raise GameNotFound(sanitize_endpoint(url))
                if resp.status == 429:
                    raise RateLimitExceeded(retry_after=_parse_retry_after(resp.headers.get("Retry-After")))
                if resp.status != 200:
                    raise APIError(status_code=resp.status, message=await resp.text(errors="replace"))
                try:
                    return await resp.text()
                except UnicodeDecodeError as e:
                    raise ParsingError(sanitize_endpoint(url), f"body is not valid text: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"MobyGames connection failed: {e}", e) from e

    async def fetch_json(self, url: str) -> str:
        """
        Returns the raw response body for `url`.

        Waits for the shared rate limiter first, then records the call's
        latency and outcome through the context's request logger.
        """
        await self.context.rate_limiter.acquire()

        start = time.perf_counter()
        status, error_code = STATUS_FAILED, FAILED_ERROR_CODE
        try:
            body = await self.send_get_request(url)
            if not body:
                raise APIError(message="Empty response body")
            status, error_code = STATUS_SUCCESS, None
            return body
        finally:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            await self.context.request_logger.log_api_request(
                self.context.current_user_id(), url, elapsed_ms, status, error_code
            )

    async def get_json(self, url: str) -> dict[str, Any]:
        """Like fetch_json, but decodes the body and insists on a JSON object."""
        body = await self.fetch_json(url)
        try:
            data = json.loads(body)
        except ValueError as e:
            raise ParsingError(sanitize_endpoint(url), str(e)) from e

        if not isinstance(data, dict):
            raise ParsingError(sanitize_endpoint(url), f"expected a JSON object, got {type(data).__name__}")
        return data
