"""Services module"""

from .cache_service import (
    load_cached_dataset,
    save_dataset_cache,
    clear_dataset_cache,
)
from .labels_service import LabelMakerService
from .price_service import PriceSearchService

__all__ = [
    "load_cached_dataset",
    "save_dataset_cache",
    "clear_dataset_cache",
    "LabelMakerService",
    "PriceSearchService",
]
