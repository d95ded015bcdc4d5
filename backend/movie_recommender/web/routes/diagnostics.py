"""
Diagnostics API routes
======================

GET /test-openai: one probe request to the generative service, reported
with the upstream status so operators can tell a bad key from an outage.
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from movie_recommender.recommender.generative import GenerativeRecommender
from movie_recommender.web.services.recommendation_service import get_generative_recommender

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diagnostics"])


@router.get("/test-openai", summary="Check connectivity to the generative service")
async def test_openai(
    generative: GenerativeRecommender = Depends(get_generative_recommender)
):
    report = await generative.diagnose()
    return JSONResponse(status_code=report.status_code, content=report.body)
