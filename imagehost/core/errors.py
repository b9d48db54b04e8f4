# -*- coding: utf-8 -*-
"""
Errors - Exception taxonomy for the image host.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""


class ImageHostError(Exception):
    """Base error for all image host exceptions."""


class DownloadError(ImageHostError, RuntimeError):
    """Raised when a URL cannot be fetched.

    Parameters
    ----------
    url : str
        The URL that failed.
    reason : str
        Human-readable failure description.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"failed to download metadata from {url}: {reason}")
        self.url = url
        self.reason = reason


class UnsupportedRemoteError(ImageHostError):
    """Raised when a remote is not supported on this platform."""


class UnsupportedAliasError(ImageHostError):
    """Raised when an alias is not supported for a remote."""


class UnknownRemoteError(ImageHostError, RuntimeError):
    """Raised when the manifest cache has no entry for a remote."""


class CatalogError(ImageHostError, ValueError):
    """Raised when a catalog definition is malformed."""
