"""
Reponses types du service de catalogue pour les tests.

Utilisees avec respx pour simuler les appels httpx, ou converties en
objets du domaine pour alimenter les mocks de ICatalogClient.
"""

# GET /api/v1/search/movies?q=inception&page=1
SEARCH_MOVIES_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 27205,
            "title": "Inception",
            "release_date": "2010-07-15",
            "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
            "vote_average": 8.4,
            "overview": "Cobb, a skilled thief...",
        },
        {
            "id": 64956,
            "title": "Inception: The Cobol Job",
            "release_date": "2010-12-07",
            "poster_path": None,
            "vote_average": 7.3,
            "overview": "",
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

# GET /api/v1/search/tv?q=breaking&page=1
SEARCH_TV_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 1396,
            "name": "Breaking Bad",
            "first_air_date": "2008-01-20",
            "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
            "vote_average": 8.9,
        },
    ],
    "total_pages": 1,
    "total_results": 1,
}

SEARCH_EMPTY_RESPONSE = {
    "page": 1,
    "results": [],
    "total_pages": 0,
    "total_results": 0,
}

# Le fournisseur annonce plus de pages qu'il n'en sert
SEARCH_MANY_PAGES_RESPONSE = {
    "page": 7,
    "results": [{"id": 1, "title": "Alien", "release_date": "1979-05-25"}],
    "total_pages": 812,
    "total_results": 16230,
}

# GET /api/v1/watchlist
WATCHLIST_RESPONSE = [
    {
        "id": "27205",
        "type": "movie",
        "title": "Inception",
        "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
        "watched": True,
        "rating": 9,
        "added_at": "2024-03-01T10:15:30.123456789Z",
    },
    {
        "id": "1396",
        "type": "tv",
        "title": "Breaking Bad",
        "poster_path": "",
        "watched": False,
        "rating": 0,
        "added_at": "2024-03-02T08:00:00Z",
    },
]

# GET /api/v1/watchlist/stats
WATCHLIST_STATS_RESPONSE = {
    "total_items": 2,
    "movies": 1,
    "tv_shows": 1,
    "watched_items": 1,
    "unwatched_items": 1,
    "average_rating": 9.0,
}

# GET /api/v1/genres/movies
GENRES_RESPONSE = {
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 35, "name": "Comedie"},
        {"id": 878, "name": "Science-Fiction"},
    ]
}

# GET /api/v1/movies/27205
MOVIE_DETAILS_RESPONSE = {
    "id": 27205,
    "title": "Inception",
    "release_date": "2010-07-15",
    "runtime": 148,
    "vote_average": 8.4,
    "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science-Fiction"}],
    "overview": "Cobb, a skilled thief...",
}

# GET /api/v1/movie/27205/trailers
TRAILERS_RESPONSE = {
    "results": [
        {"key": "YoHD9XEInc0", "name": "Official Trailer", "site": "YouTube", "type": "Trailer"},
    ]
}

# GET /api/v1/movie/27205/providers
PROVIDERS_RESPONSE = {
    "results": {
        "US": {"flatrate": [{"provider_name": "Netflix"}]},
    }
}
