"""
Tests de l'objet valeur Query.
"""

from src.core.value_objects.query import FilterKey, MediaScope, Query


class TestQueryScope:
    def test_movie_aliases(self):
        assert Query("x", {FilterKey.TYPE: "film"}).scope == MediaScope.MOVIE

    def test_tv_aliases(self):
        for value in ("tv", "television", "series", "show"):
            assert Query("x", {FilterKey.TYPE: value}).scope == MediaScope.TV

    def test_default_multi(self):
        assert Query("x").scope == MediaScope.MULTI


class TestQueryAccessors:
    def test_numbers(self):
        query = Query(
            "x", {FilterKey.YEAR: "1979", FilterKey.SEASON: "0", FilterKey.EPISODE: "12"}
        )

        assert (query.year, query.season, query.episode) == (1979, 0, 12)

    def test_missing_numbers(self):
        query = Query("x")

        assert query.year is None
        assert query.season is None
        assert query.language is None

    def test_language_region_uppercased(self):
        assert Query("x", {FilterKey.LANGUAGE: "pt-br"}).language == "pt-BR"

    def test_flags(self):
        query = Query("x", {FilterKey.ALL_SEASONS: "yes", FilterKey.ALL_EPISODES: "no"})

        assert query.flag(FilterKey.ALL_SEASONS)
        assert not query.flag(FilterKey.ALL_EPISODES)
