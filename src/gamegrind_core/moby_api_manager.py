import asyncio
import logging
from typing import Any

import aiohttp

from .assembler import assemble
from .constants import MAX_CONCURRENT_DETAILS, AlertCategory
from .context import LookupContext
from .exceptions import TRANSPORT_ERRORS, GameGrindException
from .fetcher import MetadataFetchClient
from .models import CandidateGame, FetchResult
from .resolver import PlatformResolver, coerce_id

logger = logging.getLogger(__name__)


def unique_game_ids(games: Any) -> list[int]:
    """Game IDs from a search response in first-seen order, duplicates dropped."""
    seen: set[int] = set()
    ordered = []
    for entry in games if isinstance(games, list) else []:
        game_id = coerce_id(entry.get("game_id")) if isinstance(entry, dict) else None
        if game_id is None or game_id in seen:
            continue
        seen.add(game_id)
        ordered.append(game_id)
    return ordered


class MobyAPIManager:
    """
    Searches MobyGames by title and turns every hit into a CandidateGame.

    Per-game lookups run concurrently on the context's worker pool, with at
    most two detail chains in flight per search. All requests still queue on
    the context's single rate limiter.
    """

    def __init__(self, session: aiohttp.ClientSession, context: LookupContext):
        self.context = context
        self.client = MetadataFetchClient(session, context)
        self.resolver = PlatformResolver(self.client)

    async def search_by_title(self, query: str) -> list[CandidateGame]:
        """
        Returns the candidates that could be built, in search-response order.
        Failed lookups are alerted and left out rather than raised.
        """
        results = await self.search_results(query)
        return [result.game for result in results if result.ok]

    async def search_results(self, query: str) -> list[FetchResult]:
        """Like search_by_title, but keeps a FetchResult for every unique hit, failed ones included."""
        try:
            data = await self.client.get_json(self.client.search_url(query))
        except GameGrindException as e:
            logger.error(f"Error fetching game data for '{query}': {e}")
            self.context.alerts.raise_category(AlertCategory.API_ERROR)
            return []

        game_ids = unique_game_ids(data.get("games"))
        logger.info(f"Search '{query}' returned {len(game_ids)} unique games")

        in_flight = asyncio.Semaphore(MAX_CONCURRENT_DETAILS)
        return list(await asyncio.gather(*(self._fetch_bounded(game_id, in_flight) for game_id in game_ids)))

    async def fetch_game_details(self, game_id: int) -> CandidateGame | None:
        """Looks up a single game, using the same cache and alerts as a search."""
        async with self.context.worker_pool:
            result = await self._fetch_result(game_id)
        return result.game

    async def _fetch_bounded(self, game_id: int, in_flight: asyncio.Semaphore) -> FetchResult:
        async with self.context.worker_pool:
            async with in_flight:
                return await self._fetch_result(game_id)

    async def _fetch_result(self, game_id: int) -> FetchResult:
        try:
            game = await self._load_game(game_id)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error fetching game details for {game_id}: {e}")
            self.context.alerts.raise_category(AlertCategory.API_ERROR)
            return FetchResult(game_id, error=e)
        except Exception as e:
            logger.exception(f"Error parsing game details for {game_id}: {e}")
            self.context.alerts.raise_category(AlertCategory.PARSING_ERROR)
            return FetchResult(game_id, error=e)

        return FetchResult(game_id, game=game)

    async def _load_game(self, game_id: int) -> CandidateGame:
        raw_game = self.context.cache.get_game(game_id)
        if raw_game is None:
            raw_game = await self.client.get_json(self.client.game_url(game_id))
            self.context.cache.put_game(game_id, raw_game)

        platforms = await self.resolver.resolve_platforms(game_id)
        game = assemble(raw_game, platforms)
        if not game.game_id:
            game.game_id = game_id
        return game
