import asyncio
import json
from urllib.parse import urlsplit

from gamegrind_core.exceptions import GameNotFound

BASE_URL = "https://api.test/v1/"
API_KEY = "moby_secret_key"


def game_routes(game_id: int, title: str | None = None, platforms: dict[int, dict] | None = None) -> dict:
    """Routes for one game: detail, platform list and one detail per platform."""
    detail = {"game_id": game_id}
    if title:
        detail["title"] = title
    platforms = platforms or {}
    routes = {
        f"games/{game_id}": detail,
        f"games/{game_id}/platforms": {
            "platforms": [{"platform_id": pid, "platform_name": p.get("platform_name", "")} for pid, p in platforms.items()]
        },
    }
    for pid, payload in platforms.items():
        routes[f"games/{game_id}/platforms/{pid}"] = {"platform_id": pid, **payload}
    return routes


def search_payload(*game_ids: int) -> dict:
    return {"games": [{"game_id": gid, "title": f"Game {gid}"} for gid in game_ids]}


class FakeMoby:
    """
    Stands in for MetadataFetchClient.send_get_request.
    Routes are keyed by the path below /v1/; values are payloads or exceptions.
    """

    def __init__(self, routes: dict | None = None, delay: float = 0.0, fail_with: Exception | None = None):
        self.routes = routes or {}
        self.delay = delay
        self.fail_with = fail_with
        self.calls: list[str] = []
        self.active = 0
        self.peak = 0

    async def __call__(self, url: str) -> str:
        path = urlsplit(url).path.removeprefix("/v1/")
        self.calls.append(path)
        is_detail = path != "games"

        if is_detail:
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.fail_with:
                raise self.fail_with
            response = self.routes.get(path)
            if response is None:
                raise GameNotFound(path)
            if isinstance(response, Exception):
                raise response
            return response if isinstance(response, str) else json.dumps(response)
        finally:
            if is_detail:
                self.active -= 1

    def count(self, path: str) -> int:
        return self.calls.count(path)
