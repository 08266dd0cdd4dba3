from .engine import Database
from .models import APIRequestLog, Base

__all__ = ["APIRequestLog", "Base", "Database"]
