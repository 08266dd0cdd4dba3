import os

from dotenv import load_dotenv

from gamegrind_core.constants import API_BASE_URL_V1, RATE_LIMIT_INTERVAL

load_dotenv()

MOBY_API_KEY = os.getenv("MOBY_API_KEY", "")
MOBY_API_BASE_URL = os.getenv("MOBY_API_BASE_URL", API_BASE_URL_V1)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/gamegrind.db")
RATE_LIMIT = float(os.getenv("RATE_LIMIT_INTERVAL", str(RATE_LIMIT_INTERVAL)))  # seconds
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))  # seconds
USER_ID = int(os.getenv("USER_ID", "0"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
