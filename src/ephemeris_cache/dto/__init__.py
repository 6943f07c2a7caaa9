"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal logic should use entities from the entities package.
"""

from .requests import JumpToDateRequest
from .responses import (
    BodyStateItem,
    BodyDetailResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    HelioVectorItem,
    PositionsResponse,
    SnapshotResponse,
)

__all__ = [
    "JumpToDateRequest",
    "BodyStateItem",
    "BodyDetailResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
    "HelioVectorItem",
    "PositionsResponse",
    "SnapshotResponse",
]
