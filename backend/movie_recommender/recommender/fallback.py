"""
Keyword Fallback Recommender
============================

Deterministic recommender used whenever the generative service cannot
answer. Maps free text to one of the curated lists in GENRE_TABLE by
substring matching on the genre keys.
"""

import logging
from typing import Mapping, Tuple

from movie_recommender.recommender.genre_table import (
    DEFAULT_GENRE,
    GENRE_TABLE,
    KEY_SEPARATOR,
)

logger = logging.getLogger(__name__)


class KeywordFallbackRecommender:
    """
    Total, pure recommender over a static genre table.

    Same input always yields the same output; no I/O.
    """

    def __init__(
        self,
        genre_table: Mapping[str, Tuple[str, ...]] = GENRE_TABLE,
        default_genre: str = DEFAULT_GENRE
    ):
        if default_genre not in genre_table:
            raise ValueError(f"Default genre '{default_genre}' is not in the genre table")
        self.genre_table = genre_table
        self.default_genre = default_genre

    def match_genre(self, preference: str) -> str:
        """
        Find the genre key for a preference.

        Keys are tried in table order; a key matches if the lower-cased
        preference contains it verbatim or with its separator replaced by a
        space ("sci_fi" also matches "sci fi").

        Returns:
            First matching genre key, or the default genre
        """
        preference_lower = preference.lower()
        for key in self.genre_table:
            if key in preference_lower or key.replace(KEY_SEPARATOR, " ") in preference_lower:
                return key
        return self.default_genre

    def recommend(self, preference: str) -> str:
        """
        Recommend the curated list for a preference.

        Returns:
            Comma-separated titles of the matched genre
        """
        genre = self.match_genre(preference)
        logger.debug(f"Fallback matched genre '{genre}' for preference: {preference!r}")
        return ", ".join(self.genre_table[genre])
