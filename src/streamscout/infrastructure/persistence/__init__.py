from .progress_cache import CacheProgressRepository
from .search_history_cache import CacheSearchHistory

__all__ = ["CacheProgressRepository", "CacheSearchHistory"]
