"""
Unit tests for the keyword fallback recommender.
"""

import unittest

from movie_recommender.recommender.fallback import KeywordFallbackRecommender
from movie_recommender.recommender.genre_table import DEFAULT_GENRE, GENRE_TABLE


class TestGenreTable(unittest.TestCase):

    def test_every_genre_has_five_titles(self):
        for genre, titles in GENRE_TABLE.items():
            self.assertEqual(len(titles), 5, genre)
            self.assertTrue(all(title.strip() == title and title for title in titles))

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            GENRE_TABLE["western"] = ("Unforgiven",)

    def test_default_genre_is_drama(self):
        self.assertEqual(DEFAULT_GENRE, "drama")
        self.assertIn(DEFAULT_GENRE, GENRE_TABLE)


class TestKeywordFallbackRecommender(unittest.TestCase):

    def setUp(self):
        self.recommender = KeywordFallbackRecommender()

    def test_action_list(self):
        self.assertEqual(
            self.recommender.recommend("action"),
            "John Wick, Mission Impossible, Fast & Furious, Top Gun Maverick, The Matrix Resurrections"
        )

    def test_matching_is_case_insensitive_substring(self):
        self.assertEqual(self.recommender.match_genre("Some scary HORROR flicks please"), "horror")
        self.assertEqual(self.recommender.match_genre("romantic romances"), "romance")

    def test_first_declared_genre_wins(self):
        """Action is declared before comedy, whatever order the input uses."""
        self.assertEqual(self.recommender.match_genre("action comedy"), "action")
        self.assertEqual(self.recommender.match_genre("comedy with some action"), "action")
        self.assertEqual(
            self.recommender.recommend("action comedy"),
            ", ".join(GENRE_TABLE["action"])
        )

    def test_separator_matches_space(self):
        self.assertEqual(self.recommender.match_genre("sci fi thriller"), "sci_fi")
        self.assertEqual(self.recommender.match_genre("SCI_FI"), "sci_fi")
        self.assertEqual(
            self.recommender.recommend("sci fi thriller"),
            "Inception, Interstellar, Blade Runner 2049, Dune, The Matrix Resurrections"
        )

    def test_no_match_uses_default_genre(self):
        self.assertEqual(self.recommender.match_genre("banana"), "drama")
        self.assertEqual(
            self.recommender.recommend("banana"),
            "Forrest Gump, The Shawshank Redemption, Parasite, Moonlight, Oppenheimer"
        )

    def test_deterministic(self):
        for preference in ("action", "banana", "sci fi", "animated fantasy"):
            self.assertEqual(
                self.recommender.recommend(preference),
                self.recommender.recommend(preference)
            )

    def test_custom_table(self):
        recommender = KeywordFallbackRecommender(
            genre_table={"film_noir": ("The Maltese Falcon",), "any": ("Casablanca",)},
            default_genre="any"
        )
        self.assertEqual(recommender.recommend("film noir classics"), "The Maltese Falcon")
        self.assertEqual(recommender.recommend("something"), "Casablanca")

    def test_unknown_default_genre_rejected(self):
        with self.assertRaises(ValueError):
            KeywordFallbackRecommender(default_genre="western")


if __name__ == '__main__':
    unittest.main()
