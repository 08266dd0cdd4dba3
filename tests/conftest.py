from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from moby_fakes import API_KEY, BASE_URL

from gamegrind_core.context import LookupContext
from gamegrind_core.db.engine import Database
from gamegrind_core.moby_api_manager import MobyAPIManager
from gamegrind_core.rate_limiter import RateLimiter
from gamegrind_core.request_log import APIRequestLogger
from gamegrind_core.store import Store

load_dotenv()


@pytest_asyncio.fixture
async def memory_store():
    # In-memory SQLite for fast testing
    store = Store(Database("sqlite+aiosqlite:///:memory:"))
    await store.setup()
    yield store
    await store.close()


@pytest.fixture
def context():
    return LookupContext(api_key=API_KEY, base_url=BASE_URL, rate_limiter=RateLimiter(interval=0))


@pytest.fixture
def logged_context(memory_store):
    return LookupContext(
        api_key=API_KEY,
        base_url=BASE_URL,
        rate_limiter=RateLimiter(interval=0),
        request_logger=APIRequestLogger(memory_store),
        current_user_id=lambda: 42,
    )


@pytest.fixture
def manager(context):
    # The session is never touched: tests replace send_get_request with a FakeMoby
    return MobyAPIManager(MagicMock(), context)
