# -*- coding: utf-8 -*-
"""
Manifest Builder - Concurrent construction of image manifests.

Fans the metadata fetcher out over every catalog entry of an
architecture on a thread pool, collects one image record per entry into
pre-assigned slots, and indexes the completed records by id and alias.

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
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# imagehost internal
from imagehost.catalog.fetcher import image_info_for
from imagehost.catalog.models import ArtifactSpec, Manifest, VMImageInfo
from imagehost.core.errors import DownloadError


class FetchOutcome:
    """Result of fetching one catalog entry: a record or a failure.

    Parameters
    ----------
    record : Optional[VMImageInfo]
        The fetched record, or None on failure.
    error : Optional[DownloadError]
        The failure reason, or None on success.
    """

    def __init__(
        self,
        record: Optional[VMImageInfo] = None,
        error: Optional[DownloadError] = None,
    ) -> None:
        self.record = record
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.ok:
            return f"FetchOutcome(record={self.record!r})"
        return f"FetchOutcome(error={self.error!r})"


class ManifestBuilder:
    """Builds manifests by fetching catalog entries in parallel.

    One worker thread is started per catalog entry; the pool is not
    limited further. Each worker writes only its own slot of the
    result sequence.

    Parameters
    ----------
    downloader : URLDownloader
        Shared downloader; must be safe to call from several threads.
    """

    def __init__(self, downloader) -> None:
        self._downloader = downloader

    def _fetch_into(
        self,
        slots: List[VMImageInfo],
        position: int,
        filename: str,
        spec: ArtifactSpec,
    ) -> FetchOutcome:
        try:
            record = image_info_for(self._downloader, filename, spec)
        except DownloadError as e:
            logger.debug("Fetch failed for %s: %s", filename, e)
            return FetchOutcome(error=e)
        slots[position] = record
        return FetchOutcome(record=record)

    @staticmethod
    def _join(futures: Sequence[Future]) -> Optional[DownloadError]:
        """Wait for every worker and return the first failure, if any."""
        outcomes = [future.result() for future in futures]
        for outcome in outcomes:
            if not outcome.ok:
                return outcome.error
        return None

    def build(
        self,
        entries: Sequence[Tuple[str, ArtifactSpec]],
    ) -> Manifest:
        """Fetch every entry and return the indexed manifest.

        Parameters
        ----------
        entries : Sequence[Tuple[str, ArtifactSpec]]
            ``(filename, spec)`` pairs. Slots follow the file name order.

        Returns
        -------
        Manifest

        Raises
        ------
        DownloadError
            If any entry failed to fetch. Nothing fetched by the other
            workers is kept.
        """
        ordered = sorted(entries, key=lambda item: item[0])
        slots: List[VMImageInfo] = [VMImageInfo() for _ in ordered]
        if not ordered:
            return Manifest.from_products(slots)

        with ThreadPoolExecutor(max_workers=len(ordered)) as executor:
            futures = [
                executor.submit(self._fetch_into, slots, position, name, spec)
                for position, (name, spec) in enumerate(ordered)
            ]
            error = self._join(futures)

        if error is not None:
            raise error

        logger.debug("Fetched %d image records", len(slots))
        return Manifest.from_products(slots)


def build_manifest(
    entries: Sequence[Tuple[str, ArtifactSpec]],
    downloader,
) -> Manifest:
    """Build a manifest for ``entries`` using ``downloader``."""
    return ManifestBuilder(downloader).build(entries)
