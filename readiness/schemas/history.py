"""
History response schemas.

GET /checkins/history → HistoryResponse
"""
from typing import Optional
from pydantic import BaseModel, Field


class HistoryPointOut(BaseModel):
    date: str = Field(description="ISO timestamp of the check-in.")
    score: int
    zone: str
    recommendation: str


class HistoryResponse(BaseModel):
    count: int = Field(description="Number of points returned.")
    average_score: Optional[float] = Field(
        default=None, description="Mean score over the returned points, one decimal."
    )
    latest: Optional[HistoryPointOut] = None
    points: list[HistoryPointOut] = Field(description="Oldest first.")
