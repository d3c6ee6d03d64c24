from .cache import CachePort
from .page_fetcher import PageFetcherPort
from .progress_store import ProgressStorePort
from .search_history import SearchHistoryPort

__all__ = [
    "CachePort",
    "PageFetcherPort",
    "ProgressStorePort",
    "SearchHistoryPort",
]
