# core package for GameGrind metadata lookups
from .context import LookupContext
from .moby_api_manager import MobyAPIManager
from .models import Alert, CandidateGame, FetchResult, PlatformDetail

__all__ = ["Alert", "CandidateGame", "FetchResult", "LookupContext", "MobyAPIManager", "PlatformDetail"]
