"""
HTTP access to the shared widget API.
"""

from .client import APIClient

__all__ = ["APIClient"]
