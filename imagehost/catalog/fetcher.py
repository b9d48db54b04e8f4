# -*- coding: utf-8 -*-
"""
Metadata Fetcher - Resolve version and hash of one catalog image.

Probes an image URL for its last-modified date and scans the SHA256SUMS
listing published next to it for the image's hash.

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
from dataclasses import replace
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

# imagehost internal
from imagehost.catalog.models import ArtifactSpec, BaseImageInfo, VMImageInfo


def format_last_modified(timestamp: Optional[datetime]) -> str:
    """Format a timestamp as ``yyyyMMdd``; None formats as empty."""
    if timestamp is None:
        return ""
    return timestamp.strftime("%Y%m%d")


def find_hash(sha256_sums: str, image_file: str) -> str:
    """Find the hash of ``image_file`` in a SHA256SUMS listing.

    Parameters
    ----------
    sha256_sums : str
        Listing text, one ``<hash> <filename>`` line per file.
    image_file : str

    Returns
    -------
    str
        Text before the first space of the first matching line, or an
        empty string if no line ends with ``image_file``.
    """
    for line in sha256_sums.split('\n'):
        if line.strip().endswith(image_file):
            return line.split(' ')[0]
    return ""


def base_image_info_for(
    downloader,
    image_url: str,
    hash_url: str,
    image_file: str,
) -> BaseImageInfo:
    """Fetch the last-modified date and hash of one image.

    Parameters
    ----------
    downloader : URLDownloader
        Anything providing ``last_modified(url)`` and ``download(url)``.
    image_url : str
    hash_url : str
        URL of the SHA256SUMS listing covering the image.
    image_file : str

    Returns
    -------
    BaseImageInfo

    Raises
    ------
    DownloadError
        If either fetch fails.
    """
    last_modified = format_last_modified(downloader.last_modified(image_url))
    image_hash = find_hash(downloader.download(hash_url), image_file)
    if not image_hash:
        # TODO: decide whether an image without a published hash should be
        # marked unverifiable instead of served with an empty id.
        logger.debug("No hash for %s in %s", image_file, hash_url)

    return BaseImageInfo(last_modified=last_modified, hash=image_hash)


def image_info_for(downloader, filename: str, spec: ArtifactSpec) -> VMImageInfo:
    """Fetch metadata for a catalog entry and build its image record.

    ``filename`` is the catalog key; it takes precedence over
    ``spec.filename`` when the two differ.
    """
    if filename != spec.filename:
        spec = replace(spec, filename=filename)
    image_url = spec.image_url
    hash_url = spec.hash_url
    logger.debug("Fetching image info for %s", image_url)

    base = base_image_info_for(downloader, image_url, hash_url, filename)

    return VMImageInfo(
        aliases=spec.aliases,
        os=spec.os,
        release=spec.release,
        release_title=spec.release_string,
        supported=True,
        image_location=image_url,
        id=base.hash,
        stream_location="",
        version=base.last_modified,
        size=0,
        verify=True,
    )
