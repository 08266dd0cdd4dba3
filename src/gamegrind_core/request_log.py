import datetime
import logging
import re
import uuid

from .store import Store

logger = logging.getLogger(__name__)

API_KEY_PARAM_REGEX = re.compile(r"([?&])api_key=[^&]*", re.IGNORECASE)
MASK = "***"


def sanitize_endpoint(url: str) -> str:
    """Masks the value of the api_key query parameter."""
    return API_KEY_PARAM_REGEX.sub(rf"\1api_key={MASK}", url)


class APIRequestLogger:
    """
    Records one row per outbound API call for later reporting.
    Without a store the record only goes to the log.
    """

    def __init__(self, store: Store | None = None):
        self.store = store

    async def log_api_request(
        self,
        user_id: int,
        endpoint: str,
        response_time: int,
        status: str,
        error_code: int | None = None,
    ) -> bool:
        request_id = str(uuid.uuid4())
        sanitized = sanitize_endpoint(endpoint)
        timestamp = datetime.datetime.now(datetime.UTC).isoformat()

        logger.debug(
            f"Request ID: {request_id}, User ID: {user_id}, Endpoint: {sanitized}, "
            f"Response Time: {response_time}ms, Status: {status}, "
            f"Error Code: {error_code if error_code is not None else 'N/A'}"
        )

        if not self.store:
            return True

        success = await self.store.insert_api_request_log(
            request_id, user_id, timestamp, sanitized, response_time, status, error_code
        )
        if not success:
            logger.error("Failed to log API request to the database.")
        return success
