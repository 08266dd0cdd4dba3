import datetime
import re
from typing import Any

from .constants import DEFAULT_COMPLETION_STATUS, UNKNOWN, UNKNOWN_TITLE
from .models import CandidateGame, PlatformDetail
from .resolver import coerce_id

YEAR_ONLY_REGEX = re.compile(r"^\d{4}$")


def parse_release_date(value: Any) -> datetime.date | None:
    """
    Parses a MobyGames release date.
    A bare year becomes January 1st of that year; anything else must be an
    ISO date. Unparseable input gives None.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        if YEAR_ONLY_REGEX.match(text):
            return datetime.date(int(text), 1, 1)
        return datetime.date.fromisoformat(text)
    except ValueError:
        return None


def _first_genre(raw_game: dict[str, Any]) -> str:
    genres = raw_game.get("genres")
    if isinstance(genres, list) and genres and isinstance(genres[0], dict):
        name = genres[0].get("genre_name")
        if name:
            return str(name)
    return UNKNOWN


def _cover_url(raw_game: dict[str, Any]) -> str:
    cover = raw_game.get("sample_cover")
    if isinstance(cover, dict) and cover.get("image"):
        return str(cover["image"])
    return ""


def assemble(raw_game: dict[str, Any], platforms: list[PlatformDetail]) -> CandidateGame:
    """Builds a CandidateGame from a game record and its resolved platforms."""
    title = raw_game.get("title")

    developer = UNKNOWN
    publisher = UNKNOWN
    release_date = None
    names = []

    # Each platform with a known value overwrites the last, so the final
    # platform carrying a developer/publisher/date is the one reported.
    for platform in platforms:
        if platform.platform_name:
            names.append(platform.platform_name)
        if platform.developer and platform.developer != UNKNOWN:
            developer = platform.developer
        if platform.publisher and platform.publisher != UNKNOWN:
            publisher = platform.publisher
        parsed = parse_release_date(platform.release_date)
        if parsed:
            release_date = parsed

    return CandidateGame(
        game_id=coerce_id(raw_game.get("game_id")) or 0,
        title=str(title) if title else UNKNOWN_TITLE,
        developer=developer,
        publisher=publisher,
        release_date=release_date,
        genre=_first_genre(raw_game),
        platforms=", ".join(names) if names else UNKNOWN,
        completion_status=DEFAULT_COMPLETION_STATUS,
        notes="",
        cover_image_url=_cover_url(raw_game),
    )
