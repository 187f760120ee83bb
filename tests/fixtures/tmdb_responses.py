"""
Reponses TMDB realistes pour les tests du client.

Structures conformes a l'API v3 (details avec append_to_response=credits,videos).
"""

TMDB_SEARCH_MOVIE_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 348,
            "title": "Alien",
            "original_title": "Alien",
            "release_date": "1979-05-25",
            "overview": "During its return to the earth, commercial spaceship Nostromo...",
        },
        {
            "id": 679,
            "title": "Aliens",
            "original_title": "Aliens",
            "release_date": "1986-07-18",
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

TMDB_SEARCH_MULTI_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 95396,
            "name": "Severance",
            "media_type": "tv",
            "first_air_date": "2022-02-17",
        },
        {
            "id": 1220,
            "title": "Severance",
            "media_type": "movie",
            "release_date": "",
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

TMDB_SEARCH_EMPTY_RESPONSE = {
    "page": 1,
    "results": [],
    "total_pages": 0,
    "total_results": 0,
}

TMDB_MOVIE_RESPONSE = {
    "id": 348,
    "title": "Alien",
    "original_title": "Alien",
    "tagline": "In space no one can hear you scream.",
    "overview": "During its return to the earth, commercial spaceship Nostromo "
    "intercepts a distress signal from a distant planet.",
    "release_date": "1979-05-25",
    "status": "Released",
    "runtime": 117,
    "vote_average": 8.148,
    "poster_path": "/vfrQk5IPloGg1v9Rzbh2Eg3VGyM.jpg",
    "backdrop_path": "/AmR3JG1VQVxU8TfAvljUhfSFUOx.jpg",
    "genres": [
        {"id": 27, "name": "Horror"},
        {"id": 878, "name": "Science Fiction"},
    ],
    "credits": {
        "cast": [
            {"name": "Sigourney Weaver", "order": 0},
            {"name": "Tom Skerritt", "order": 1},
            {"name": "Veronica Cartwright", "order": 2},
            {"name": "Harry Dean Stanton", "order": 3},
            {"name": "John Hurt", "order": 4},
            {"name": "Ian Holm", "order": 5},
            {"name": "Yaphet Kotto", "order": 6},
            {"name": "Bolaji Badejo", "order": 7},
            {"name": "Helen Horton", "order": 8},
            {"name": "Eddie Powell", "order": 9},
            {"name": "Gordon Carroll", "order": 10},
        ],
        "crew": [
            {"name": "Gordon Carroll", "job": "Producer"},
            {"name": "Ridley Scott", "job": "Director"},
            {"name": "Jerry Goldsmith", "job": "Original Music Composer"},
        ],
    },
    "videos": {
        "results": [
            {
                "key": "teaser1",
                "site": "YouTube",
                "type": "Teaser",
                "official": True,
                "published_at": "2014-01-01T00:00:00.000Z",
            },
            {
                "key": "trailer_late",
                "site": "YouTube",
                "type": "Trailer",
                "official": True,
                "published_at": "2019-03-14T16:00:00.000Z",
            },
            {
                "key": "trailer_early",
                "site": "YouTube",
                "type": "Trailer",
                "official": True,
                "published_at": "2016-09-20T10:00:00.000Z",
            },
            {
                "key": "fan_trailer",
                "site": "YouTube",
                "type": "Trailer",
                "official": False,
                "published_at": "2010-01-01T00:00:00.000Z",
            },
        ]
    },
}

TMDB_SHOW_RESPONSE = {
    "id": 95396,
    "name": "Severance",
    "original_name": "Severance",
    "tagline": "Work is worth it.",
    "overview": "Mark leads a team of office workers whose memories have been "
    "surgically divided between their work and personal lives.",
    "first_air_date": "2022-02-17",
    "status": "Returning Series",
    "type": "Scripted",
    "episode_run_time": [55, 45],
    "vote_average": 8.4,
    "poster_path": "/show_poster.jpg",
    "backdrop_path": "/show_backdrop.jpg",
    "genres": [
        {"id": 18, "name": "Drama"},
        {"id": 10765, "name": "Sci-Fi & Fantasy"},
    ],
    "seasons": [
        {"season_number": 0, "name": "Specials"},
        {"season_number": 1, "name": "Season 1"},
        {"season_number": 2, "name": "Season 2"},
    ],
    "credits": {
        "cast": [{"name": "Adam Scott"}, {"name": "Britt Lower"}],
        "crew": [{"name": "Theodore Shapiro", "job": "Original Music Composer"}],
    },
    "videos": {"results": []},
}

TMDB_SEASON_RESPONSE = {
    "id": 126497,
    "name": "Season 1",
    "overview": "",
    "season_number": 1,
    "air_date": "2022-02-17",
    "poster_path": "/season1_poster.jpg",
    "vote_average": 8.2,
    "episodes": [
        {"episode_number": 1, "name": "Good News About Hell"},
        {"episode_number": 2, "name": "Half Loop"},
        {"episode_number": 3, "name": "In Perpetuity"},
    ],
    "credits": {"cast": [{"name": "Adam Scott"}], "crew": []},
    "videos": {"results": []},
}

TMDB_EPISODE_RESPONSE = {
    "id": 3295435,
    "name": "Good News About Hell",
    "overview": "Mark is promoted to department chief.",
    "season_number": 1,
    "episode_number": 1,
    "air_date": "2022-02-17",
    "runtime": 57,
    "vote_average": 7.9,
    "credits": {
        "cast": [{"name": "Adam Scott"}, {"name": "Zach Cherry"}],
        "crew": [{"name": "Ben Stiller", "job": "Director"}],
    },
    "videos": {"results": []},
}
