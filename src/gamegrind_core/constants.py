from enum import Enum

API_BASE_URL_V1 = "https://api.mobygames.com/v1/"

# MobyGames allows roughly one request per second per key.
RATE_LIMIT_INTERVAL = 1.2
WORKER_POOL_SIZE = 3
MAX_CONCURRENT_DETAILS = 2

UNKNOWN = "Unknown"
UNKNOWN_TITLE = "Unknown Title"
DEFAULT_COMPLETION_STATUS = "Not Started"

STATUS_SUCCESS = "Success"
STATUS_FAILED = "Failed"
FAILED_ERROR_CODE = 500


class CompanyRole(Enum):
    DEVELOPER = "developer"
    PUBLISHER = "publisher"


# Keys are casefolded MobyGames role strings. Anything else is unmapped.
COMPANY_ROLES = {
    "developed by": CompanyRole.DEVELOPER,
    "published by": CompanyRole.PUBLISHER,
}


class AlertCategory(Enum):
    API_ERROR = "API Error"
    PARSING_ERROR = "Parsing Error"
    PLATFORM_FETCH_ERROR = "Platform Fetch Error"
    PLATFORM_DETAILS_ERROR = "Platform Details Error"


# (header, remediation hint) shown to the user for each category
ALERT_MESSAGES = {
    AlertCategory.API_ERROR: (
        "Unable to retrieve games from MobyGames.",
        "Please try searching again or consider adding the game manually.",
    ),
    AlertCategory.PARSING_ERROR: (
        "An unexpected error occurred while loading game data.",
        "Try searching again or manually add the game if the issue persists.",
    ),
    AlertCategory.PLATFORM_FETCH_ERROR: (
        "Unable to load platform data for the game.",
        "Retrying may help, or manually complete the missing details.",
    ),
    AlertCategory.PLATFORM_DETAILS_ERROR: (
        "Could not load detailed platform information.",
        "Please try again or manually add publisher/developer if needed.",
    ),
}
