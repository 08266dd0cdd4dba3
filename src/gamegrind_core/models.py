import datetime
from dataclasses import dataclass, field

from .constants import DEFAULT_COMPLETION_STATUS, UNKNOWN, UNKNOWN_TITLE


@dataclass
class PlatformDetail:
    """Release metadata for one game on one platform."""

    platform_id: int
    platform_name: str = ""
    developer: str = UNKNOWN
    publisher: str = UNKNOWN
    release_date: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "PlatformDetail":
        return cls(
            platform_id=int(data.get("platform_id") or 0),
            platform_name=data.get("platform_name") or "",
            developer=data.get("developer") or UNKNOWN,
            publisher=data.get("publisher") or UNKNOWN,
            release_date=data.get("first_release_date") or "",
        )


@dataclass
class CandidateGame:
    """A normalized, not-yet-persisted game built from a search hit."""

    game_id: int = 0
    title: str = UNKNOWN_TITLE
    developer: str = UNKNOWN
    publisher: str = UNKNOWN
    release_date: datetime.date | None = None
    genre: str = UNKNOWN
    platforms: str = UNKNOWN
    completion_status: str = DEFAULT_COMPLETION_STATUS
    notes: str = ""
    cover_image_url: str = ""


@dataclass
class FetchResult:
    """Outcome of one per-game task inside a search."""

    game_id: int
    game: CandidateGame | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.game is not None


@dataclass
class Alert:
    category: str
    header: str
    content: str
    raised_at: datetime.datetime = field(default_factory=lambda: datetime.datetime.now(datetime.UTC))
