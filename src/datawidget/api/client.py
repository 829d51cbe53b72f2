"""
JSON API client shared by all data sources.
"""

import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Mapping, Optional
from urllib.parse import quote

from ..utils.errors import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "datawidget/0.1.0"


class APIClient:
    """
    Fetches JSON documents from endpoints below a shared base URL.

    Every call issues exactly one request. There is no retry: a failure is
    surfaced as FetchError and the caller decides what to show.

    Attributes:
        base_url: URL prefix every endpoint path is appended to
        timeout: Socket timeout in seconds for a single request
    """

    def __init__(self, base_url: str, timeout: float = 10):
        self.base_url = base_url
        self.timeout = timeout

    def build_url(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        Build the request URL for an endpoint.

        Parameters whose value is None are dropped; keys and values are
        percent-encoded.

        Example:
            >>> APIClient("https://api.example.com").build_url("/steam", {"profiles": "a,b"})
            'https://api.example.com/steam?profiles=a%2Cb'
        """
        url = self.base_url + endpoint

        query = "&".join(
            f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
            for key, value in (params or {}).items()
            if value is not None
        )
        if query:
            url += "?" + query

        return url

    def fetch(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Fetch and decode one JSON document.

        Args:
            endpoint: Endpoint path, e.g. "/billboard-200"
            params: Query parameters

        Returns:
            Decoded JSON value

        Raises:
            FetchError: On transport errors or a body that is not JSON
        """
        url = self.build_url(endpoint, params)
        logger.info(f"Fetching: {url}")

        request = urllib.request.Request(
            url, headers={"Accept": "application/json", "User-Agent": USER_AGENT}
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            logger.error(f"API HTTP error for {endpoint}: {e.code} - {e.reason}")
            raise FetchError(endpoint, e) from e
        except (urllib.error.URLError, OSError, http.client.HTTPException) as e:
            # URLError covers DNS/connection failures, OSError covers timeouts,
            # HTTPException covers truncated bodies
            logger.error(f"API connection error for {endpoint}: {e}")
            logger.error(f"URL was: {url}")
            raise FetchError(endpoint, e) from e

        try:
            data = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Invalid JSON response from {endpoint}: {e}")
            raise FetchError(endpoint, e) from e

        logger.info(f"Success: {endpoint}")
        return data

    def __repr__(self) -> str:
        return f"<APIClient(base_url={self.base_url!r}, timeout={self.timeout})>"

