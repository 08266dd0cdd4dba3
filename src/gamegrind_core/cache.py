from typing import Any


class ResponseCache:
    """
    Process-lifetime cache of fetched records, keyed by MobyGames ID.

    Entries are written once and never refreshed. Insert-if-absent is not
    atomic across awaits, so two tasks racing on the same ID may both fetch;
    the second write simply replaces an equal value.
    """

    def __init__(self):
        self.games: dict[int, dict[str, Any]] = {}
        self.platforms: dict[int, dict[str, Any]] = {}

    def get_game(self, game_id: int) -> dict[str, Any] | None:
        return self.games.get(game_id)

    def put_game(self, game_id: int, data: dict[str, Any]):
        self.games[game_id] = data

    def get_platform(self, platform_id: int) -> dict[str, Any] | None:
        return self.platforms.get(platform_id)

    def put_platform(self, platform_id: int, data: dict[str, Any]):
        self.platforms[platform_id] = data
