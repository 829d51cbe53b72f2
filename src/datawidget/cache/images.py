"""
Image cache for thumbnails and logos fetched during one widget run.
"""

import logging
import urllib.error
import urllib.request
from io import BytesIO
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ImageCache:
    """
    Memoizes decoded images by URL.

    One instance is created per widget run and handed to the data source, so
    its lifetime is bounded by a single render. There is no size limit and no
    expiry. Failed loads are not stored, which lets a later call retry.

    Attributes:
        timeout: Socket timeout in seconds for image downloads
        fetch_count: Number of network fetches issued so far
    """

    def __init__(self, timeout: float = 10):
        self.timeout = timeout
        self.fetch_count = 0
        self._images: Dict[str, Image.Image] = {}

    def load(self, url: Optional[str]) -> Optional[Image.Image]:
        """
        Return the decoded image for a URL, fetching it on first use.

        Args:
            url: Image URL; empty or None returns None without any I/O

        Returns:
            PIL Image, or None if the URL is empty or the image could not be
            fetched or decoded
        """
        if not url:
            return None

        cached = self._images.get(url)
        if cached is not None:
            logger.debug(f"Image cache hit: {url}")
            return cached

        try:
            image = self._fetch(url)
        except urllib.error.URLError as e:
            logger.error(f"Failed to load image: {url} ({e})")
            return None
        except UnidentifiedImageError as e:
            logger.error(f"Invalid or corrupted image at {url}: {e}")
            return None
        except OSError as e:
            logger.error(f"Error reading image {url}: {e}")
            return None
        except Image.DecompressionBombError as e:
            logger.error(f"Image too large at {url}: {e}")
            return None
        except ValueError as e:
            # Relative or malformed URLs
            logger.error(f"Cannot load image from {url}: {e}")
            return None

        self._images[url] = image
        return image

    def _fetch(self, url: str) -> Image.Image:
        """Download and decode one image."""
        self.fetch_count += 1
        logger.debug(f"Fetching image: {url}")

        with urllib.request.urlopen(url, timeout=self.timeout) as response:
            payload = response.read()

        image = Image.open(BytesIO(payload))
        # Force decoding now so broken payloads fail inside load()
        image.load()
        return image

    def clear(self) -> None:
        """Drop every cached image."""
        self._images.clear()

    def __contains__(self, url: str) -> bool:
        return url in self._images

    def __len__(self) -> int:
        return len(self._images)

    def __repr__(self) -> str:
        return f"<ImageCache(entries={len(self._images)}, fetches={self.fetch_count})>"
