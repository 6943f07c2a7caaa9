"""Domain entities for internal representation.

These are pure dataclasses used by the cache service and repositories.
They are NOT used for API contracts - use DTOs from the dto package for
that.
"""

from .body_state import BodyState
from .cache_metrics import CacheMetrics
from .cache_stats import CacheStats
from .helio_vector import HelioVector

__all__ = ["BodyState", "CacheMetrics", "CacheStats", "HelioVector"]
