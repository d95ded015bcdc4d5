"""
Curated fallback titles, five per genre.

Declaration order is the match order used by KeywordFallbackRecommender:
an input naming several genres resolves to the first one listed here.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

DEFAULT_GENRE = "drama"

# Separator inside multi-word genre keys; matched as a space as well
KEY_SEPARATOR = "_"

GENRE_TABLE: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "action": (
        "John Wick", "Mission Impossible", "Fast & Furious",
        "Top Gun Maverick", "The Matrix Resurrections",
    ),
    "comedy": (
        "The Grand Budapest Hotel", "Superbad", "Knives Out", "Juno", "Bridesmaids",
    ),
    "romance": (
        "The Notebook", "Titanic", "La La Land", "Pride and Prejudice", "Me Before You",
    ),
    "horror": (
        "The Shining", "Get Out", "A Quiet Place", "Hereditary", "Insidious",
    ),
    "drama": (
        "Forrest Gump", "The Shawshank Redemption", "Parasite", "Moonlight", "Oppenheimer",
    ),
    "sci_fi": (
        "Inception", "Interstellar", "Blade Runner 2049", "Dune", "The Matrix Resurrections",
    ),
    "animation": (
        "Spider-Man: Across the Spider-Verse", "Spirited Away", "Coco",
        "Inside Out 2", "Frozen",
    ),
    "thriller": (
        "Zodiac", "The Sixth Sense", "Se7en", "Shutter Island", "Gone Girl",
    ),
    "adventure": (
        "Indiana Jones", "Avatar", "Pirates of the Caribbean",
        "The Lord of the Rings", "Jurassic World",
    ),
    "fantasy": (
        "The Lord of the Rings", "Harry Potter", "Game of Thrones", "The Witcher", "Dune",
    ),
})
