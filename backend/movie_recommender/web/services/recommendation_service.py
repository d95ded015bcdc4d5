"""
Recommendation Service
======================

Builds the long-lived recommendation components once per process and hands
them to the routes as FastAPI dependencies.
"""

import logging
from typing import Optional

from movie_recommender.config import settings
from movie_recommender.recommender.fallback import KeywordFallbackRecommender
from movie_recommender.recommender.generative import GenerativeRecommender
from movie_recommender.recommender.resolver import RecommendationResolver
from movie_recommender.web.services.request_log_service import RequestLog, RequestLogWriter
from movie_recommender.web.utils.database import AsyncSessionLocal

logger = logging.getLogger(__name__)


_generative_recommender_instance: Optional[GenerativeRecommender] = None
_request_log_writer_instance: Optional[RequestLogWriter] = None
_recommendation_resolver_instance: Optional[RecommendationResolver] = None


def get_generative_recommender() -> GenerativeRecommender:
    """Get singleton instance of GenerativeRecommender."""
    global _generative_recommender_instance

    if _generative_recommender_instance is None:
        _generative_recommender_instance = GenerativeRecommender(settings)
        logger.info(
            f"GenerativeRecommender initialized: model={settings.openai_model}, "
            f"timeout={settings.openai_timeout_seconds}s, "
            f"api_key_configured={bool(settings.openai_api_key)}"
        )

    return _generative_recommender_instance


def get_request_log_writer() -> RequestLogWriter:
    """Get singleton instance of RequestLogWriter."""
    global _request_log_writer_instance

    if _request_log_writer_instance is None:
        _request_log_writer_instance = RequestLogWriter(RequestLog(AsyncSessionLocal))

    return _request_log_writer_instance


def get_recommendation_resolver() -> RecommendationResolver:
    """
    Get singleton instance of RecommendationResolver.

    Returns:
        RecommendationResolver instance
    """
    global _recommendation_resolver_instance

    if _recommendation_resolver_instance is None:
        _recommendation_resolver_instance = RecommendationResolver(
            settings=settings,
            generative=get_generative_recommender(),
            fallback=KeywordFallbackRecommender(),
            request_log=get_request_log_writer()
        )

    return _recommendation_resolver_instance
