"""
User-facing interfaces for HubFetch.
"""

from .api import HubDownloader

__all__ = [
    "HubDownloader",
]
