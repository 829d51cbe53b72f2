"""
Pytest configuration and fixtures
"""

import json
from io import BytesIO
from unittest.mock import MagicMock, Mock

import pytest
from PIL import Image

from datawidget.cache.images import ImageCache
from datawidget.config.loader import ConfigLoader


@pytest.fixture
def app_config():
    """Built-in configuration without overrides"""
    return ConfigLoader().load()


@pytest.fixture
def sizing(app_config):
    return app_config.sizing


@pytest.fixture
def image_cache():
    return ImageCache()


@pytest.fixture
def api_client():
    """Mock API client; set fetch.return_value per test"""
    client = Mock()
    client.fetch.return_value = {}
    return client


@pytest.fixture
def png_bytes():
    """A small encoded PNG"""
    buffer = BytesIO()
    Image.new("RGB", (8, 8), color="red").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_response():
    """Factory for context-manager mocks standing in for urlopen()'s return value"""

    def _make(payload):
        if not isinstance(payload, bytes):
            payload = json.dumps(payload).encode("utf-8")
        response = MagicMock()
        response.read.return_value = payload
        response.__enter__.return_value = response
        response.__exit__.return_value = False
        return response

    return _make


@pytest.fixture
def billboard_payload():
    return {
        "music": {
            "data_title": "Billboard 200",
            "data_desc": "The week's most popular albums",
            "data": [
                {"position": 1, "title": "Album One (Deluxe)", "artist": "Artist A",
                 "last_week": 2, "peak": 1, "weeks": 12},
                {"position": 2, "title": "Album Two [feat. Someone]", "artist": "Artist B",
                 "last_week": 1, "peak": 1, "weeks": 30},
                {"position": 3, "title": "Album Three", "artist": "Artist C",
                 "last_week": 0, "peak": 3, "weeks": 1},
                {"position": 4, "title": "Album Four", "artist": "Artist D",
                 "last_week": 4, "peak": 2, "weeks": 8},
                {"position": 5, "title": "Album Five", "artist": "Artist E",
                 "last_week": 7, "peak": 5, "weeks": 3},
                {"position": 6, "title": "Album Six", "artist": "Artist F",
                 "last_week": 5, "peak": 4, "weeks": 0},
                {"position": 7, "title": "Album Seven", "artist": "Artist G",
                 "last_week": 9, "peak": 7, "weeks": 2},
            ],
        }
    }


@pytest.fixture
def imdb_payload():
    movies = [
        {"title": f"Movie {i}", "year": 2020 + i, "length": "2h 1m", "rating": 7.5}
        for i in range(6)
    ]
    movies[1]["rating"] = ""
    tv_shows = [
        {"title": f"Show {i}", "year": 2010 + i, "length": "45m", "rating": 8.1}
        for i in range(6)
    ]
    return {"movies": {"data": movies}, "tv_shows": {"data": tv_shows}}


@pytest.fixture
def steam_payload():
    return {
        "exampleuser1": {
            "recentGames": [
                {"name": "A", "hoursPlayedNumeric": 5},
                {"name": "B", "hoursPlayedNumeric": 2},
            ]
        },
        "exampleuser2": {"recentGames": [{"name": "C", "hoursPlayedNumeric": 10}]},
    }


@pytest.fixture
def hackernews_payload():
    return {
        "stories": [
            {"title": f"Story number {i}", "points": 100 * i, "numComments": 10 * i,
             "author": f"user{i}", "timePosted": "1h ago", "url": f"https://example.com/{i}"}
            for i in range(12)
        ]
    }


@pytest.fixture
def github_payload():
    return {
        "releases": [
            {"repo": "anthropics/anthropic-sdk-python", "name": "v1.2.0",
             "tagName": "releases/v1.2.0", "author": "octocat", "timeAgo": "2d ago",
             "isPrerelease": False, "url": "https://github.com/a/b/releases/1"},
            {"repo": "fasthtml/fasthtml", "name": "", "tagName": "0.9.0rc1",
             "author": "jph", "timeAgo": "5h ago", "isPrerelease": True,
             "url": "https://github.com/c/d/releases/2"},
        ]
    }


@pytest.fixture
def wikipedia_payload():
    return {
        "edits": [
            {"title": "A" * 50, "language": "en", "languageName": "English",
             "user": "Editor1", "timeAgo": "3m ago", "comment": "c" * 80,
             "url": "https://en.wikipedia.org/wiki/A"},
            {"title": "Berlin", "language": "de", "user": "Editor2",
             "timeAgo": "1h ago", "comment": None,
             "url": "https://de.wikipedia.org/wiki/Berlin"},
        ]
    }
