"""
Tests de conversion NormalizedRecord <-> proprietes Notion.
"""

from src.adapters.notion.blocks import (
    duplicate_callout,
    error_callout,
    is_annotation,
    warning_callout,
)
from src.adapters.notion.properties import (
    build_cover,
    build_icon,
    build_properties,
    parse_page,
    title_property,
)
from src.core.entities.media import NormalizedRecord, RecordType
from src.core.entities.page import Relation


def _record(**overrides) -> NormalizedRecord:
    fields = dict(
        title="Alien",
        type=RecordType.MOVIE,
        tmdb_id=348,
        tagline="In space no one can hear you scream.",
        genres=["Horror", "Science Fiction"],
        runtime=117,
        status="Released",
        release_date="1979-05-25",
        synopsis="Nostromo...",
        director="Ridley Scott",
        composer="Jerry Goldsmith",
        cast=["Sigourney Weaver", "Tom Skerritt"],
        poster="https://image.tmdb.org/t/p/w500/p.jpg",
        backdrop="",
        trailer="https://www.youtube.com/watch?v=early",
        rating=8.148,
    )
    fields.update(overrides)
    return NormalizedRecord(**fields)


class TestBuildProperties:
    def test_full_movie(self):
        props = build_properties(_record())

        assert props["Title"]["title"][0]["text"]["content"] == "Alien"
        assert props["Type"] == {"select": {"name": "Movie"}}
        assert props["TMDB ID"] == {"number": 348}
        assert props["Release Date"] == {"date": {"start": "1979-05-25"}}
        assert props["Release Status"] == {"status": {"name": "Released"}}
        assert props["Director"] == {"select": {"name": "Ridley Scott"}}
        assert props["Cast"]["multi_select"][1] == {"name": "Tom Skerritt"}
        assert props["TMDB Rating"] == {"number": 8.1}
        assert props["Trailer"] == {"url": "https://www.youtube.com/watch?v=early"}
        assert "Season Number" not in props
        assert "Refresh" not in props

    def test_empty_fields_are_not_written(self):
        props = build_properties(
            _record(tagline="", director="", trailer="", rating=None, cast=[], runtime=None)
        )

        for name in ("Tagline", "Director", "Trailer", "TMDB Rating", "Cast", "Runtime"):
            assert name not in props

    def test_commas_removed_from_option_names(self):
        props = build_properties(_record(cast=["Smith, Jr."], composer="A, B"))

        assert props["Cast"]["multi_select"] == [{"name": "Smith  Jr."}]
        assert props["Composer"] == {"select": {"name": "A  B"}}

    def test_long_text_truncated(self):
        props = build_properties(_record(synopsis="x" * 2500))

        assert len(props["Synopsis"]["rich_text"][0]["text"]["content"]) == 2000

    def test_relations_and_numbers(self):
        record = _record(
            type=RecordType.EPISODE, season_number=1, episode_number=0, title="Pilot"
        )

        props = build_properties(record, {Relation.SEASON: "season-page"})

        assert props["Season"] == {"relation": [{"id": "season-page"}]}
        assert props["Season Number"] == {"number": 1}
        assert props["Episode Number"] == {"number": 0}

    def test_clear_refresh(self):
        props = build_properties(_record(), clear_refresh=True)

        assert props["Refresh"] == {"checkbox": False}

    def test_title_property(self):
        assert title_property("Alien") == {
            "Title": {"title": [{"type": "text", "text": {"content": "Alien"}}]}
        }


class TestImages:
    def test_icon_from_poster(self):
        assert build_icon(_record()) == {
            "type": "external",
            "external": {"url": "https://image.tmdb.org/t/p/w500/p.jpg"},
        }

    def test_no_cover_without_backdrop(self):
        assert build_cover(_record()) is None


class TestParsePage:
    def test_parses_synced_page(self):
        raw = {
            "id": "page-1",
            "created_time": "2024-01-01T00:00:00.000Z",
            "properties": {
                "Title": {"title": [{"plain_text": "Season 1"}]},
                "TMDB ID": {"number": 9539601},
                "Type": {"select": {"name": "Television Season"}},
                "Release Date": {"date": {"start": "2022-02-17"}},
                "Release Status": {"status": {"name": "Released"}},
                "Season Number": {"number": 1},
                "Episode Number": {"number": None},
                "Show": {"relation": [{"id": "show-page"}]},
                "Season": {"relation": []},
                "Refresh": {"checkbox": True},
            },
        }

        page = parse_page(raw)

        assert page.title == "Season 1"
        assert page.tmdb_id == 9539601
        assert page.type == RecordType.SEASON
        assert page.release_date == "2022-02-17"
        assert page.status == "Released"
        assert page.season_number == 1
        assert page.episode_number is None
        assert page.parent(Relation.SHOW) == "show-page"
        assert page.parent(Relation.SEASON) is None
        assert page.refresh_requested is True
        assert page.created_time == "2024-01-01T00:00:00.000Z"

    def test_parses_pending_page(self):
        raw = {
            "id": "page-2",
            "properties": {
                "Title": {"title": [{"plain_text": "Alien"}, {"plain_text": "[y=1979];"}]},
                "TMDB ID": {"number": None},
                "Type": {"select": None},
            },
        }

        page = parse_page(raw)

        assert page.title == "Alien[y=1979];"
        assert page.tmdb_id is None
        assert page.type is None
        assert page.is_pending(";")


class TestAnnotationBlocks:
    def test_error_callout_contains_message_and_help(self):
        block = error_callout("No results found!")

        callout = block["callout"]
        assert callout["color"] == "red_background"
        assert callout["rich_text"][0]["text"]["content"].startswith("No results found!")
        assert callout["children"][0]["type"] == "code"
        assert is_annotation(block)

    def test_duplicate_callout_mentions_existing_page(self):
        block = duplicate_callout("existing")

        mention = block["callout"]["rich_text"][1]
        assert mention["mention"]["page"]["id"] == "existing"
        assert is_annotation(block)

    def test_warning_callout_lists_messages(self):
        block = warning_callout(["Season 2: boom"])

        assert "- Season 2: boom" in block["callout"]["rich_text"][0]["text"]["content"]
        assert is_annotation(block)

    def test_user_blocks_are_not_annotations(self):
        assert not is_annotation({"type": "paragraph", "paragraph": {}})
        assert not is_annotation({"type": "callout", "callout": {"color": "blue_background"}})
