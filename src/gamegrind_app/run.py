import argparse
import asyncio

import aiohttp

from gamegrind_core.alerts import AlertSink
from gamegrind_core.context import LookupContext
from gamegrind_core.db.engine import Database
from gamegrind_core.moby_api_manager import MobyAPIManager
from gamegrind_core.rate_limiter import RateLimiter
from gamegrind_core.request_log import APIRequestLogger
from gamegrind_core.store import Store

from .config import DATABASE_URL, HTTP_TIMEOUT, MOBY_API_BASE_URL, MOBY_API_KEY, RATE_LIMIT, USER_ID
from .console import format_candidate, format_request_log, print_alert
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_context(store: Store | None) -> LookupContext:
    return LookupContext(
        api_key=MOBY_API_KEY,
        base_url=MOBY_API_BASE_URL,
        rate_limiter=RateLimiter(RATE_LIMIT),
        request_logger=APIRequestLogger(store),
        alerts=AlertSink(listener=print_alert),
        current_user_id=lambda: USER_ID,
    )


async def search(title: str) -> int:
    if not MOBY_API_KEY:
        logger.error("MOBY_API_KEY not set")
        return 1

    store = Store(Database(DATABASE_URL))
    await store.setup()
    try:
        context = build_context(store)
        timeout = aiohttp.ClientTimeout(total=HTTP_TIMEOUT)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            manager = MobyAPIManager(session, context)
            games = await manager.search_by_title(title)
    finally:
        await store.close()

    if not games:
        print(f"No games found for '{title}'.")
        return 0

    for game in games:
        print(format_candidate(game))
    return 0


async def show_requests(limit: int) -> int:
    store = Store(Database(DATABASE_URL))
    await store.setup()
    try:
        logs = await store.get_api_request_logs(limit=limit)
        total = await store.count_api_requests()
        failed = await store.count_api_requests(status="Failed")
        average = await store.average_response_time()
    finally:
        await store.close()

    for log in logs:
        print(format_request_log(log))
    print(f"{total} requests, {failed} failed, {average:.0f}ms average")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gamegrind", description="Look up games on MobyGames.")
    commands = parser.add_subparsers(dest="command", required=True)

    search_cmd = commands.add_parser("search", help="Search MobyGames by title")
    search_cmd.add_argument("title", nargs="+")

    requests_cmd = commands.add_parser("requests", help="Show recent API request logs")
    requests_cmd.add_argument("--limit", type=int, default=20)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        if args.command == "search":
            return asyncio.run(search(" ".join(args.title)))
        return asyncio.run(show_requests(args.limit))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
