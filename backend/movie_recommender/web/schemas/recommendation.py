"""
Schemas for the recommendation API.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from movie_recommender.recommender.resolver import RecommendationSource


class RecommendRequest(BaseModel):
    """
    Request schema for POST /recommend.

    preference is optional here so that a missing value can be answered
    with 400 instead of the framework's 422.
    """
    preference: Optional[str] = Field(None, description="Free-text movie preference")


class RecommendResponse(BaseModel):
    """
    Response schema for POST /recommend.

    Attributes:
        movies: Comma-joined titles (the client splits them for display)
        source: "openai" or "fallback"
    """
    movies: str = Field(..., description="Comma-separated movie titles")
    source: RecommendationSource = Field(..., description="Which recommender answered")


class ErrorResponse(BaseModel):
    error: str


class LogEntry(BaseModel):
    """
    One row of the request log.

    Attributes:
        id: Auto-assigned row id
        user_input: Preference as received
        recommended_movies: Comma-joined titles as returned
        timestamp: Creation time
    """
    id: int
    user_input: str
    recommended_movies: str
    timestamp: Optional[datetime] = None

    class Config:
        from_attributes = True
