"""
Recommendation API routes
=========================

POST /recommend: free-text preference in, comma-joined titles and their
source out.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from movie_recommender.recommender.resolver import RecommendationResolver
from movie_recommender.web.schemas.recommendation import (
    ErrorResponse,
    RecommendRequest,
    RecommendResponse,
)
from movie_recommender.web.services.recommendation_service import get_recommendation_resolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])

PREFERENCE_REQUIRED = "Preference is required"


@router.post(
    "/recommend",
    response_model=RecommendResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Recommend movies for a preference",
    description="""
    Asks the generative service for five titles; if that fails for any
    reason the curated keyword fallback answers instead. Every answer is
    logged in the background.
    """
)
async def recommend(
    request: RecommendRequest,
    resolver: RecommendationResolver = Depends(get_recommendation_resolver)
):
    preference = (request.preference or "").strip()
    if not preference:
        logger.warning("Rejected recommendation request without a preference")
        return JSONResponse(status_code=400, content={"error": PREFERENCE_REQUIRED})

    try:
        result = await resolver.resolve(preference)
    except Exception as e:
        logger.exception(f"Error in recommend endpoint: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to generate recommendations"
        )

    return RecommendResponse(movies=result.raw, source=result.source)
