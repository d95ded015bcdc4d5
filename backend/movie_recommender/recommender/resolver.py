"""
Recommendation Resolver
=======================

Decides which source answers a request:

1. GenerativeRecommender (single attempt)
2. KeywordFallbackRecommender when step 1 fails for any reason

The chosen result is tagged with its source, then handed to the request log
writer without waiting for the write.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from movie_recommender.config import Settings
from movie_recommender.recommender.errors import UpstreamError
from movie_recommender.recommender.fallback import KeywordFallbackRecommender
from movie_recommender.recommender.generative import GenerativeRecommender

if TYPE_CHECKING:
    from movie_recommender.web.services.request_log_service import RequestLogWriter

logger = logging.getLogger(__name__)


class RecommendationSource(str, Enum):
    """Where a result came from. Values are the wire form."""
    GENERATIVE = "openai"
    FALLBACK = "fallback"


@dataclass
class RecommendationResult:
    """
    Resolved recommendation.

    Attributes:
        movies: Trimmed, non-empty titles in source order
        source: RecommendationSource
        raw: Unsplit comma-joined string (wire and log form)
    """
    movies: List[str]
    source: RecommendationSource
    raw: str


def split_movies(raw: str) -> List[str]:
    """Split on commas, trim each title, drop empty fragments, keep order."""
    return [title.strip() for title in raw.split(",") if title.strip()]


class RecommendationResolver:
    """
    Generative-then-fallback policy.

    resolve() does not raise for generative failures; only a broken
    fallback or an empty preference (a caller bug) surfaces as an exception.
    """

    def __init__(
        self,
        settings: Settings,
        generative: GenerativeRecommender,
        fallback: KeywordFallbackRecommender,
        request_log: Optional["RequestLogWriter"] = None
    ):
        self.settings = settings
        self.generative = generative
        self.fallback = fallback
        self.request_log = request_log

    async def resolve(self, preference: str) -> RecommendationResult:
        """
        Resolve a preference into recommendations.

        Args:
            preference: Non-empty free-text preference (validated by the caller)

        Returns:
            RecommendationResult from the generative service or the fallback
        """
        if not preference or not preference.strip():
            raise ValueError("preference must be non-empty")

        logger.info(f"🎬 New recommendation request: {preference}")

        result = await self._resolve_generative(preference)
        if result is None:
            logger.warning("Attempting fallback recommendations...")
            result = self._resolve_fallback(preference)

        logger.info(f"Source: {result.source.value.upper()}")
        logger.info(f"Movies: {result.raw[:60]}...")

        if self.request_log is not None:
            self.request_log.submit(preference, result.raw)

        return result

    async def _resolve_generative(self, preference: str) -> Optional[RecommendationResult]:
        logger.info("⏳ Attempting OpenAI API...")
        outcome = await self.generative.fetch(preference)
        if not outcome.ok:
            logger.warning(
                f"FAILED: OpenAI API error ({outcome.error.kind.value}) - {outcome.error.message}"
            )
            return None

        movies = split_movies(outcome.text)
        error = self._check_titles(movies)
        if error is not None:
            logger.warning(f"FAILED: OpenAI API error ({error.kind.value}) - {error.message}")
            return None

        logger.info("SUCCESS: OpenAI API generated recommendations")
        return RecommendationResult(
            movies=movies,
            source=RecommendationSource.GENERATIVE,
            raw=outcome.text
        )

    def _check_titles(self, movies: List[str]) -> Optional[UpstreamError]:
        """
        Reject replies with no titles, or the wrong count in strict mode.

        Titles are counted as comma fragments, so a title containing a comma
        counts twice.
        """
        if not movies:
            return UpstreamError("OpenAI reply contained no movie titles")

        expected = self.settings.expected_title_count
        if self.settings.strict_title_count and len(movies) != expected:
            return UpstreamError(
                f"OpenAI reply had {len(movies)} titles, expected {expected}",
                payload=movies
            )
        return None

    def _resolve_fallback(self, preference: str) -> RecommendationResult:
        raw = self.fallback.recommend(preference)
        movies = split_movies(raw)
        if not movies:
            raise RuntimeError(f"Fallback recommender returned no titles for: {preference!r}")

        logger.info("SUCCESS: Fallback recommendations generated")
        return RecommendationResult(
            movies=movies,
            source=RecommendationSource.FALLBACK,
            raw=raw
        )
