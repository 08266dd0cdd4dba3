import logging
from typing import Any

from .alerts import AlertSink
from .cache import ResponseCache
from .constants import COMPANY_ROLES, UNKNOWN, AlertCategory, CompanyRole
from .exceptions import TRANSPORT_ERRORS
from .fetcher import MetadataFetchClient
from .models import PlatformDetail

logger = logging.getLogger(__name__)


def coerce_id(value: Any) -> int | None:
    """Returns a positive integer ID, or None for anything unusable."""
    if isinstance(value, bool):
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def map_role(role: Any) -> CompanyRole | None:
    """Maps a MobyGames company role string to an internal role (None when unmapped)."""
    if not isinstance(role, str):
        return None
    return COMPANY_ROLES.get(role.strip().casefold())


def resolve_companies(platform: dict[str, Any]) -> tuple[str, str]:
    """
    Scans releases[*].companies[*] for the developer and publisher.
    Matching is case-insensitive and the last match for a role wins.
    """
    found = {CompanyRole.DEVELOPER: UNKNOWN, CompanyRole.PUBLISHER: UNKNOWN}

    for release in platform.get("releases") or []:
        if not isinstance(release, dict):
            continue
        for company in release.get("companies") or []:
            if not isinstance(company, dict):
                continue
            role = map_role(company.get("role"))
            name = company.get("company_name")
            if role is None:
                logger.debug(f"Unmapped company role: {company.get('role')!r}")
                continue
            if name:
                found[role] = str(name)

    return found[CompanyRole.DEVELOPER], found[CompanyRole.PUBLISHER]


class PlatformResolver:
    """Fetches a game's platform list and the release details for each platform."""

    def __init__(self, client: MetadataFetchClient):
        self.client = client

    @property
    def cache(self) -> ResponseCache:
        return self.client.context.cache

    @property
    def alerts(self) -> AlertSink:
        return self.client.context.alerts

    async def resolve_platforms(self, game_id: int) -> list[PlatformDetail]:
        """
        Returns one PlatformDetail per platform, in API order.
        Platforms whose detail could not be fetched are left out.
        """
        try:
            data = await self.client.get_json(self.client.platforms_url(game_id))
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error fetching game platforms for {game_id}: {e}")
            self.alerts.raise_category(AlertCategory.PLATFORM_FETCH_ERROR)
            return []

        results = []
        for entry in data.get("platforms") or []:
            platform_id = coerce_id(entry.get("platform_id")) if isinstance(entry, dict) else None
            if platform_id is None:
                logger.debug(f"Skipping platform entry without an ID for game {game_id}: {entry!r}")
                continue

            detail = await self.fetch_platform_details(game_id, platform_id)
            if detail:
                results.append(detail)
        return results

    async def fetch_platform_details(self, game_id: int, platform_id: int) -> PlatformDetail | None:
        # Keyed by platform only: the first game to resolve a platform fills it for every game.
        cached = self.cache.get_platform(platform_id)
        if cached is not None:
            return PlatformDetail.from_dict(cached)

        try:
            data = await self.client.get_json(self.client.platform_url(game_id, platform_id))
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error fetching platform details {platform_id} for game {game_id}: {e}")
            self.alerts.raise_category(AlertCategory.PLATFORM_DETAILS_ERROR)
            return None

        developer, publisher = resolve_companies(data)
        record = dict(data)
        record["platform_id"] = platform_id
        record["developer"] = developer
        record["publisher"] = publisher

        self.cache.put_platform(platform_id, record)
        return PlatformDetail.from_dict(record)
