import pytest
from moby_fakes import FakeMoby, game_routes

from gamegrind_core.constants import CompanyRole
from gamegrind_core.exceptions import NetworkError
from gamegrind_core.resolver import coerce_id, map_role, resolve_companies


def _release(*companies):
    return {"companies": [{"role": role, "company_name": name} for role, name in companies]}


def test_map_role_case_insensitive():
    assert map_role("Developed by") is CompanyRole.DEVELOPER
    assert map_role("DEVELOPED BY") is CompanyRole.DEVELOPER
    assert map_role("  published BY ") is CompanyRole.PUBLISHER


def test_map_role_unmapped():
    assert map_role("Distributed by") is None
    assert map_role("") is None
    assert map_role(None) is None


def test_resolve_companies_matches_roles():
    platform = {"releases": [_release(("developed by", "Nintendo R&D1"), ("PUBLISHED BY", "Nintendo"))]}
    assert resolve_companies(platform) == ("Nintendo R&D1", "Nintendo")


def test_resolve_companies_unmatched_roles_stay_unknown():
    platform = {"releases": [_release(("Ported by", "Someone"), ("Licensed by", "Elorg"))]}
    assert resolve_companies(platform) == ("Unknown", "Unknown")


def test_resolve_companies_without_releases():
    assert resolve_companies({"platform_name": "NES"}) == ("Unknown", "Unknown")
    assert resolve_companies({"releases": [{"countries": ["Japan"]}]}) == ("Unknown", "Unknown")


def test_resolve_companies_last_match_wins():
    platform = {
        "releases": [
            _release(("Developed by", "Early Dev"), ("Published by", "Early Pub")),
            _release(("Developed by", "Late Dev")),
        ]
    }
    assert resolve_companies(platform) == ("Late Dev", "Early Pub")


def test_coerce_id():
    assert coerce_id(7) == 7
    assert coerce_id("7") == 7
    for value in [None, "", "x", 0, -3, True]:
        assert coerce_id(value) is None


@pytest.mark.asyncio
async def test_resolve_platforms_in_api_order(manager):
    fake = FakeMoby(
        game_routes(
            100,
            "Tetris",
            {
                4: {"platform_name": "Game Boy", "first_release_date": "1989", "releases": [_release(("Developed by", "Nintendo"))]},
                22: {"platform_name": "NES", "first_release_date": "1989-11-17"},
            },
        )
    )
    manager.client.send_get_request = fake

    platforms = await manager.resolver.resolve_platforms(100)

    assert [p.platform_id for p in platforms] == [4, 22]
    assert platforms[0].platform_name == "Game Boy"
    assert platforms[0].developer == "Nintendo"
    assert platforms[0].publisher == "Unknown"
    assert platforms[1].release_date == "1989-11-17"
    assert platforms[1].developer == "Unknown"


@pytest.mark.asyncio
async def test_platform_detail_without_releases_does_not_raise(manager):
    manager.client.send_get_request = FakeMoby(game_routes(1, "X", {7: {"platform_name": "DOS"}}))

    detail = await manager.resolver.fetch_platform_details(1, 7)

    assert detail.developer == "Unknown"
    assert detail.publisher == "Unknown"
    assert manager.context.cache.get_platform(7)["developer"] == "Unknown"


@pytest.mark.asyncio
async def test_platform_detail_is_cached(manager):
    fake = FakeMoby(game_routes(1, "X", {7: {"platform_name": "DOS"}}))
    manager.client.send_get_request = fake

    await manager.resolver.resolve_platforms(1)
    await manager.resolver.resolve_platforms(1)

    assert fake.count("games/1/platforms/7") == 1
    # The platform list itself is not cached
    assert fake.count("games/1/platforms") == 2


@pytest.mark.asyncio
async def test_platform_list_failure_alerts_and_returns_empty(manager):
    manager.client.send_get_request = FakeMoby(fail_with=NetworkError("down"))

    assert await manager.resolver.resolve_platforms(1) == []
    assert manager.context.alerts.count("Platform Fetch Error") == 1


@pytest.mark.asyncio
async def test_platform_detail_failure_skips_that_platform(manager):
    routes = game_routes(1, "X", {7: {"platform_name": "DOS"}, 8: {"platform_name": "Amiga"}})
    routes["games/1/platforms/7"] = NetworkError("reset")
    manager.client.send_get_request = FakeMoby(routes)

    platforms = await manager.resolver.resolve_platforms(1)

    assert [p.platform_id for p in platforms] == [8]
    assert manager.context.alerts.count("Platform Details Error") == 1
    assert manager.context.cache.get_platform(7) is None


@pytest.mark.asyncio
async def test_platform_entries_without_id_are_skipped(manager):
    routes = {"games/1/platforms": {"platforms": [{"platform_name": "???"}, "junk", {"platform_id": 9}]}}
    routes["games/1/platforms/9"] = {"platform_id": 9, "platform_name": "PC"}
    manager.client.send_get_request = FakeMoby(routes)

    platforms = await manager.resolver.resolve_platforms(1)
    assert [p.platform_name for p in platforms] == ["PC"]
