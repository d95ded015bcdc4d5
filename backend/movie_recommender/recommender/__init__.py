"""
Core recommendation package.

- genre_table.py: curated genre -> titles table
- fallback.py: keyword matching over the genre table (always answers)
- generative.py: single-attempt call to the text generation service
- resolver.py: generative first, fallback otherwise, tagged with the source
"""

from movie_recommender.recommender.errors import (
    ConfigError,
    ErrorKind,
    ExternalServiceError,
    GenerationTimeoutError,
    PersistenceError,
    RecommenderError,
    UpstreamError,
)
from movie_recommender.recommender.fallback import KeywordFallbackRecommender
from movie_recommender.recommender.generative import GenerationOutcome, GenerativeRecommender
from movie_recommender.recommender.resolver import (
    RecommendationResolver,
    RecommendationResult,
    RecommendationSource,
    split_movies,
)

__all__ = [
    "ConfigError",
    "ErrorKind",
    "ExternalServiceError",
    "GenerationOutcome",
    "GenerationTimeoutError",
    "GenerativeRecommender",
    "KeywordFallbackRecommender",
    "PersistenceError",
    "RecommendationResolver",
    "RecommendationResult",
    "RecommendationSource",
    "RecommenderError",
    "UpstreamError",
    "split_movies",
]
