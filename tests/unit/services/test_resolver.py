"""
Tests du resolveur de metadonnees (resolution de requetes et rafraichissement).

Le client TMDB est remplace par un AsyncMock de IMetadataClient.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from src.adapters.api.retry import RateLimitError
from src.core.entities.media import ErrorKind, ErrorResult, MediaKind, RecordType
from src.core.ports.api_clients import SearchResult
from src.core.value_objects.query import MediaScope
from src.services.query_parser import parse_query
from src.services.resolver import (
    DETAILS_FAILED,
    EPISODE_FAILED,
    NO_RESULTS,
    REFRESH_FAILED,
    SEARCH_FAILED,
    SEASON_FAILED,
    FetchRequest,
    MetadataResolver,
    kind_of_result,
    request_for_query,
)
from tests.fixtures.records import ALIEN, make_episode, make_season, make_show


def _serve_show(client: AsyncMock, show, seasons: dict, failing_seasons=()) -> None:
    """Configure le mock pour servir une serie, ses saisons et leurs episodes."""
    client.get_show.return_value = show

    def get_season(show_id, season_number, language=None):
        if season_number in failing_seasons:
            raise httpx.ConnectError("boom")
        return seasons[season_number]

    def get_episode(show_id, season_number, episode_number, language=None):
        return make_episode(season_number, episode_number, show_id=show_id)

    client.get_season.side_effect = get_season
    client.get_episode.side_effect = get_episode


@pytest.fixture
def resolver(mock_metadata_client: AsyncMock) -> MetadataResolver:
    return MetadataResolver(mock_metadata_client, delimiter=";")


class TestRequestForQuery:
    def test_movie_ignores_season_filters(self):
        query = parse_query("Alien[s=1, e=2];")

        request = request_for_query(query, MediaKind.MOVIE, 348)

        assert request == FetchRequest(MediaKind.MOVIE, 348)

    def test_season_with_all_episodes(self):
        query = parse_query("Severance[s=2, all_episodes=true];")

        request = request_for_query(query, MediaKind.SHOW, 95396)

        assert request.kind == MediaKind.SEASON
        assert request.season_number == 2
        assert request.include_children is True

    def test_episode(self):
        request = request_for_query(parse_query("Severance[s=1, e=3];"), MediaKind.SHOW, 95396)

        assert request.kind == MediaKind.EPISODE
        assert (request.season_number, request.episode_number) == (1, 3)

    def test_show_all_episodes_implies_seasons(self):
        request = request_for_query(
            parse_query("Severance[all_episodes=yes, l=fr-fr];"), MediaKind.SHOW, 95396
        )

        assert request.include_children is True
        assert request.include_episodes is True
        assert request.language == "fr-FR"

    def test_kind_of_result(self):
        tv = SearchResult(id=1, title="x", media_type="tv")
        person = SearchResult(id=2, title="x", media_type="person")

        assert kind_of_result(MediaScope.MULTI, tv) == MediaKind.SHOW
        assert kind_of_result(MediaScope.MOVIE, tv) == MediaKind.MOVIE
        assert kind_of_result(MediaScope.MULTI, person) is None


class TestResolve:
    @pytest.mark.asyncio
    async def test_alien_movie_end_to_end(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [SearchResult(id=348, title="Alien", year=1979)]
        mock_metadata_client.get_movie.return_value = ALIEN

        outcome = await resolver.resolve("Alien[type=movie, year=1979];")

        mock_metadata_client.search.assert_awaited_once_with(
            "Alien", MediaScope.MOVIE, 1979, None
        )
        mock_metadata_client.get_movie.assert_awaited_once_with(348, None)
        assert outcome.type == RecordType.MOVIE
        assert outcome.title == "Alien"
        assert outcome.tmdb_id == 348
        assert outcome.director == "Ridley Scott"
        assert outcome.composer == "Jerry Goldsmith"
        assert outcome.trailer == "https://www.youtube.com/watch?v=early"
        assert outcome.runtime == 117

    @pytest.mark.asyncio
    async def test_invalid_query_skips_search(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        outcome = await resolver.resolve("Severance[e=2];")

        assert isinstance(outcome, ErrorResult)
        assert outcome.kind == ErrorKind.QUERY
        mock_metadata_client.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_results(self, resolver: MetadataResolver):
        outcome = await resolver.resolve("zzzzzz;")

        assert outcome == ErrorResult(NO_RESULTS)

    @pytest.mark.asyncio
    async def test_person_result_is_no_result(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [
            SearchResult(id=1, title="Ridley Scott", media_type="person")
        ]

        assert await resolver.resolve("Ridley Scott;") == ErrorResult(NO_RESULTS)

    @pytest.mark.asyncio
    async def test_search_failure(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.side_effect = RateLimitError(retry_after=10)

        assert await resolver.resolve("Alien;") == ErrorResult(SEARCH_FAILED)

    @pytest.mark.asyncio
    async def test_details_failure(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [
            SearchResult(id=348, title="Alien", media_type="movie")
        ]
        mock_metadata_client.get_movie.side_effect = httpx.ConnectError("down")

        assert await resolver.resolve("Alien;") == ErrorResult(DETAILS_FAILED)

    @pytest.mark.asyncio
    async def test_malformed_payload_becomes_error_result(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [
            SearchResult(id=348, title="Alien", media_type="movie")
        ]
        mock_metadata_client.get_movie.side_effect = ValueError("Expecting value")

        assert await resolver.resolve("Alien;") == ErrorResult(DETAILS_FAILED)

    @pytest.mark.asyncio
    async def test_invalid_season_number(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [
            SearchResult(id=95396, title="Severance", media_type="tv")
        ]
        _serve_show(mock_metadata_client, make_show(), {}, failing_seasons=(9,))

        assert await resolver.resolve("Severance[s=9];") == ErrorResult(SEASON_FAILED)

    @pytest.mark.asyncio
    async def test_invalid_episode_number(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [
            SearchResult(id=95396, title="Severance", media_type="tv")
        ]
        _serve_show(mock_metadata_client, make_show(), {1: make_season(1)})
        mock_metadata_client.get_episode.side_effect = httpx.ConnectError("404")

        assert await resolver.resolve("Severance[s=1, e=42];") == ErrorResult(EPISODE_FAILED)

    @pytest.mark.asyncio
    async def test_show_with_all_episodes(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [
            SearchResult(id=95396, title="Severance", media_type="tv")
        ]
        show = make_show(season_numbers=(0, 1, 2))
        _serve_show(
            mock_metadata_client,
            show,
            {1: make_season(1, episode_numbers=(1, 2)), 2: make_season(2, episode_numbers=(1,))},
        )

        outcome = await resolver.resolve("Severance[all_episodes=true];")

        assert outcome.type == RecordType.TELEVISION
        assert [s.season_number for s in outcome.seasons] == [1, 2]
        assert [e.episode_number for e in outcome.seasons[0].episodes] == [1, 2]
        assert len(outcome.seasons[1].episodes) == 1
        # La serie n'est recuperee qu'une fois, la saison 0 (speciaux) jamais
        mock_metadata_client.get_show.assert_awaited_once()
        fetched = sorted(c.args[1] for c in mock_metadata_client.get_season.await_args_list)
        assert fetched == [1, 2]

    @pytest.mark.asyncio
    async def test_show_without_flags_has_no_children(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.search.return_value = [
            SearchResult(id=95396, title="Severance", media_type="tv")
        ]
        _serve_show(mock_metadata_client, make_show(), {})

        outcome = await resolver.resolve("Severance;")

        assert outcome.seasons is None
        mock_metadata_client.get_season.assert_not_awaited()


class TestFetchChildren:
    @pytest.mark.asyncio
    async def test_incremental_only_fetches_missing_seasons(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        _serve_show(
            mock_metadata_client,
            make_show(season_numbers=(1, 2, 3)),
            {n: make_season(n) for n in (1, 2, 3)},
        )
        request = FetchRequest(
            MediaKind.SHOW, 95396, include_children=True, known_children=frozenset({1, 2})
        )

        record = await resolver.refresh(request)

        assert [s.season_number for s in record.seasons] == [3]
        assert [c.args[1] for c in mock_metadata_client.get_season.await_args_list] == [3]

    @pytest.mark.asyncio
    async def test_incremental_episodes_of_season(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        _serve_show(
            mock_metadata_client, make_show(), {1: make_season(1, episode_numbers=(1, 2, 3))}
        )
        request = FetchRequest(
            MediaKind.SEASON,
            95396,
            season_number=1,
            include_children=True,
            known_children=frozenset({1, 2}),
        )

        record = await resolver.refresh(request)

        assert [e.episode_number for e in record.episodes] == [3]

    @pytest.mark.asyncio
    async def test_failed_branch_becomes_warning(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        _serve_show(
            mock_metadata_client,
            make_show(season_numbers=(1, 2)),
            {1: make_season(1)},
            failing_seasons=(2,),
        )
        request = FetchRequest(MediaKind.SHOW, 95396, include_children=True)

        record = await resolver.refresh(request)

        assert [s.season_number for s in record.seasons] == [1]
        assert record.warnings == [f"Season 2: {SEASON_FAILED}"]

    @pytest.mark.asyncio
    async def test_episode_failures_lift_to_show(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        _serve_show(mock_metadata_client, make_show(season_numbers=(1,)), {1: make_season(1)})

        def get_episode(show_id, season_number, episode_number, language=None):
            if episode_number == 2:
                raise httpx.ConnectError("boom")
            return make_episode(season_number, episode_number)

        mock_metadata_client.get_episode.side_effect = get_episode
        request = FetchRequest(
            MediaKind.SHOW, 95396, include_children=True, include_episodes=True
        )

        record = await resolver.refresh(request)

        season = record.seasons[0]
        assert [e.episode_number for e in season.episodes] == [1]
        assert season.warnings == [f"Season 1 Episode 2: {EPISODE_FAILED}"]
        assert record.warnings == season.warnings

    @pytest.mark.asyncio
    async def test_refresh_failure_message(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.get_movie.side_effect = httpx.ConnectError("404")

        outcome = await resolver.refresh(FetchRequest(MediaKind.MOVIE, 999))

        assert outcome == ErrorResult(REFRESH_FAILED)

    @pytest.mark.asyncio
    async def test_episode_refresh(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        _serve_show(mock_metadata_client, make_show(), {1: make_season(1)})

        record = await resolver.refresh(
            FetchRequest(MediaKind.EPISODE, 95396, season_number=1, episode_number=2)
        )

        assert record.type == RecordType.EPISODE
        assert record.episode_number == 2
        mock_metadata_client.get_episode.assert_awaited_once_with(95396, 1, 2, None)

    @pytest.mark.asyncio
    async def test_missing_field_in_refresh_payload(
        self, resolver: MetadataResolver, mock_metadata_client: AsyncMock
    ):
        mock_metadata_client.get_show.side_effect = KeyError("id")

        outcome = await resolver.refresh(FetchRequest(MediaKind.SHOW, 95396))

        assert outcome == ErrorResult(REFRESH_FAILED)
