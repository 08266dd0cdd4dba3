import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

from .alerts import AlertSink
from .cache import ResponseCache
from .constants import API_BASE_URL_V1, WORKER_POOL_SIZE
from .rate_limiter import RateLimiter
from .request_log import APIRequestLogger


def _no_user() -> int:
    return 0


@dataclass
class LookupContext:
    """
    Shared state for one MobyGames key: limiter, caches, worker slots and sinks.

    Everything that used to be process-wide lives here, so separate contexts
    (for example one per test) never see each other's cache or quota.
    """

    api_key: str
    base_url: str = API_BASE_URL_V1
    rate_limiter: RateLimiter = field(default_factory=RateLimiter)
    cache: ResponseCache = field(default_factory=ResponseCache)
    request_logger: APIRequestLogger = field(default_factory=APIRequestLogger)
    alerts: AlertSink = field(default_factory=AlertSink)
    current_user_id: Callable[[], int] = _no_user
    worker_pool: asyncio.Semaphore = field(default_factory=lambda: asyncio.Semaphore(WORKER_POOL_SIZE))
