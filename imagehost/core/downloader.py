# -*- coding: utf-8 -*-
"""
URL Downloader - HTTP access for image metadata.

Provides the URLDownloader used by the metadata fetcher to probe image
timestamps and download checksum listings. Every network or HTTP failure
surfaces as a DownloadError.

Dependencies
------------
requests

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

# Standard library
import logging
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional

# Third-party
import requests

logger = logging.getLogger(__name__)

# imagehost internal
from imagehost.core.errors import DownloadError


class URLDownloader:
    """Stateless HTTP downloader, safe to share between worker threads.

    Parameters
    ----------
    timeout : float
        HTTP request timeout in seconds. Default 10.0.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        self._timeout = timeout

    def last_modified(self, url: str) -> Optional[datetime]:
        """Probe a URL for its ``Last-Modified`` timestamp.

        Parameters
        ----------
        url : str
            URL to probe with an HTTP HEAD request.

        Returns
        -------
        Optional[datetime]
            The server timestamp, or None if the header is absent or
            unparseable.

        Raises
        ------
        DownloadError
            If the request fails or returns an HTTP error status.
        """
        try:
            resp = requests.head(
                url, timeout=self._timeout, allow_redirects=True
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(url, str(e)) from e

        header = resp.headers.get('Last-Modified')
        if not header:
            logger.debug("No Last-Modified header for %s", url)
            return None
        try:
            return parsedate_to_datetime(header)
        except (TypeError, ValueError):
            logger.debug("Unparseable Last-Modified %r for %s", header, url)
            return None

    def download(self, url: str) -> str:
        """Download a URL as text.

        Parameters
        ----------
        url : str

        Returns
        -------
        str
            Response body.

        Raises
        ------
        DownloadError
            If the request fails or returns an HTTP error status.
        """
        try:
            resp = requests.get(url, timeout=self._timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(url, str(e)) from e
        return resp.text
