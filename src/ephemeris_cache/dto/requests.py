"""Request DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class JumpToDateRequest(BaseModel):
    """Request DTO for a discontinuous jump of the simulated instant.

    The handler clears every cache before computing the new snapshot.
    """

    date: datetime = Field(..., description="Target instant (ISO 8601; naive values are UTC)")
