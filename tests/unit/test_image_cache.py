"""
Tests for the per-run image cache.
"""

import urllib.error
from unittest.mock import patch

from PIL import Image

from datawidget.cache.images import ImageCache

URL = "https://img.example.com/cover.png"


class TestImageCache:
    """Test ImageCache"""

    def test_empty_url_does_no_io(self):
        """Test empty or missing URLs return None without fetching."""
        cache = ImageCache()
        with patch("urllib.request.urlopen") as urlopen:
            assert cache.load("") is None
            assert cache.load(None) is None
        urlopen.assert_not_called()
        assert cache.fetch_count == 0

    def test_repeated_url_fetched_once(self, png_bytes, make_response):
        """Test the same URL is only fetched on first use."""
        cache = ImageCache()
        with patch("urllib.request.urlopen", return_value=make_response(png_bytes)) as urlopen:
            first = cache.load(URL)
            second = cache.load(URL)

        assert first is not None
        assert first is second
        assert first.size == (8, 8)
        assert urlopen.call_count == 1
        assert cache.fetch_count == 1
        assert URL in cache
        assert len(cache) == 1

    def test_network_failure_not_cached(self, png_bytes, make_response):
        """Test a failed load returns None and a later call retries."""
        cache = ImageCache()
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
            assert cache.load(URL) is None
        assert URL not in cache

        with patch("urllib.request.urlopen", return_value=make_response(png_bytes)):
            assert cache.load(URL) is not None
        assert cache.fetch_count == 2

    def test_undecodable_payload(self, make_response):
        """Test bytes that are not an image give None."""
        cache = ImageCache()
        with patch("urllib.request.urlopen", return_value=make_response(b"not an image")):
            assert cache.load(URL) is None
        assert len(cache) == 0

    def test_clear(self, png_bytes, make_response):
        cache = ImageCache()
        with patch("urllib.request.urlopen", return_value=make_response(png_bytes)):
            cache.load(URL)
        cache.clear()
        assert len(cache) == 0

    def test_protocol_relative_url(self):
        """Test a URL urllib cannot open gives None instead of raising."""
        cache = ImageCache()
        assert cache.load("//cdn.example.com/x.jpg") is None
        assert cache.load("/relative/poster.jpg") is None
        assert len(cache) == 0

    def test_oversized_image(self, png_bytes, make_response):
        """Test Pillow's decompression bomb guard is treated as a failed load."""
        cache = ImageCache()
        with patch("urllib.request.urlopen", return_value=make_response(png_bytes)), patch(
            "datawidget.cache.images.Image.open",
            side_effect=Image.DecompressionBombError("too many pixels"),
        ):
            assert cache.load(URL) is None
        assert URL not in cache
