# -*- coding: utf-8 -*-
"""
Custom Image Host - Cached manifests of catalog images and their queries.

Provides the ManifestCache shared between refreshes and queries, and the
CustomImageHost that refreshes the cache from the static catalog and
resolves releases and aliases against it.

Every cache access holds a single lock for the whole mapping. Manifests
are only ever swapped in complete, so readers see either the last fully
built manifest of a remote or none at all.

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
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# imagehost internal
from imagehost.catalog.builder import ManifestBuilder
from imagehost.catalog.models import Manifest, Query, QueryType, VMImageInfo
from imagehost.catalog.static import Catalog, catalog_for, load_catalog
from imagehost.core.config import HostConfig
from imagehost.core.downloader import URLDownloader
from imagehost.core.errors import (
    DownloadError,
    UnknownRemoteError,
    UnsupportedRemoteError,
)
from imagehost.host.common import FailureSink, HostCapabilities

NO_REMOTE = ""

Action = Callable[[str, VMImageInfo], None]


class ManifestCache:
    """Mapping of remote name to manifest behind one lock.

    Manifests handed out by :meth:`lookup` stay valid only until the
    next :meth:`store` or :meth:`clear` for that remote; callers should
    not hold on to them across refreshes.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._manifests: Dict[str, Manifest] = {}

    def store(self, remote_name: str, manifest: Manifest) -> None:
        with self._lock:
            self._manifests[remote_name] = manifest

    def lookup(self, remote_name: str) -> Manifest:
        """Return the cached manifest of a remote.

        Raises
        ------
        UnknownRemoteError
            If the remote has no cached manifest.
        """
        with self._lock:
            manifest = self._manifests.get(remote_name)
        if manifest is None:
            raise UnknownRemoteError(
                f'Remote "{remote_name}" is unknown or unreachable.'
            )
        return manifest

    def clear(self) -> None:
        with self._lock:
            self._manifests.clear()

    def for_each(self, visitor: Callable[[str, Manifest], None]) -> None:
        """Call ``visitor`` for every entry while holding the lock.

        The visitor must not call back into the cache.
        """
        with self._lock:
            for remote_name, manifest in self._manifests.items():
                visitor(remote_name, manifest)

    def remotes(self) -> List[str]:
        with self._lock:
            return list(self._manifests)

    def __contains__(self, remote_name: object) -> bool:
        with self._lock:
            return remote_name in self._manifests

    def __len__(self) -> int:
        with self._lock:
            return len(self._manifests)


class CustomImageHost:
    """Image host serving a static per-architecture catalog.

    Parameters
    ----------
    arch : str
        Architecture whose catalog entries are served.
    downloader : URLDownloader
        Fetches image timestamps and checksum listings.
    capabilities : Optional[HostCapabilities]
        Support predicates, refresh policy, and failure sink.
    catalog : Optional[Catalog]
        Catalog to serve. Defaults to the built-in one.
    """

    def __init__(
        self,
        arch: str,
        downloader,
        capabilities: Optional[HostCapabilities] = None,
        catalog: Optional[Catalog] = None,
    ) -> None:
        self.arch = arch
        self._downloader = downloader
        self._capabilities = capabilities or HostCapabilities()
        self._catalog = catalog
        self._cache = ManifestCache()
        self._remotes = [NO_REMOTE]

    @classmethod
    def from_config(
        cls,
        config: HostConfig,
        failure_sink: Optional[FailureSink] = None,
    ) -> 'CustomImageHost':
        """Create a host from a HostConfig.

        Raises
        ------
        CatalogError
            If ``config.catalog_path`` names an unreadable catalog.
        """
        catalog = None
        if config.catalog_path:
            catalog = load_catalog(Path(config.catalog_path))
        return cls(
            arch=config.arch,
            downloader=URLDownloader(timeout=config.download_timeout),
            capabilities=HostCapabilities.from_config(config, failure_sink),
            catalog=catalog,
        )

    @property
    def capabilities(self) -> HostCapabilities:
        return self._capabilities

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def info_for(self, query: Query) -> Optional[VMImageInfo]:
        """Resolve a release or alias to its image record.

        Parameters
        ----------
        query : Query

        Returns
        -------
        Optional[VMImageInfo]
            The matching record, or None if the manifest has no such
            release or the query is not an alias query.

        Raises
        ------
        UnsupportedAliasError
            If the release is not supported on the queried remote. This
            includes every release queried on a remote this platform
            does not support.
        UnknownRemoteError
            If the remote has no cached manifest.
        """
        support = self._capabilities.support
        support.check_alias_is_supported(query.release, query.remote_name)

        manifest = self.manifest_from(query.remote_name)
        if query.query_type is not QueryType.ALIAS:
            return None
        return manifest.find(query.release)

    def all_info_for(self, query: Query) -> List[Tuple[str, VMImageInfo]]:
        """Like :meth:`info_for`, as a list of (remote, record) pairs."""
        images: List[Tuple[str, VMImageInfo]] = []

        image = self.info_for(query)
        if image is not None:
            images.append((query.remote_name, image))

        return images

    def info_for_full_hash(self, full_hash: str) -> Optional[VMImageInfo]:
        """Find a cached image by its full hash id, or None.

        Images whose hash could not be resolved have an empty id and are
        never matched.
        """
        if not full_hash:
            return None
        found: List[VMImageInfo] = []

        def visit(remote_name: str, manifest: Manifest) -> None:
            image = manifest.find(full_hash)
            if image is not None and image.id == full_hash:
                found.append(image)

        self._cache.for_each(visit)
        return found[0] if found else None

    def all_images_for(
        self,
        remote_name: str,
        allow_unsupported: bool,
    ) -> List[VMImageInfo]:
        """Every listable image of a remote.

        ``allow_unsupported`` is accepted for compatibility with other
        hosts; catalog images are filtered by alias support only.
        """
        manifest = self.manifest_from(remote_name)
        support = self._capabilities.support

        return [
            image for image in manifest.images()
            if support.alias_verifies_image_is_supported(
                image.aliases, remote_name
            )
        ]

    def for_each_entry_do(self, action: Action) -> None:
        """Call ``action(remote, image)`` for every listable cached image.

        The cache lock is held throughout, so ``action`` must not call
        back into this host.
        """
        support = self._capabilities.support

        def visit(remote_name: str, manifest: Manifest) -> None:
            for image in manifest.images():
                if support.alias_verifies_image_is_supported(
                    image.aliases, remote_name
                ):
                    action(remote_name, image)

        self._cache.for_each(visit)

    def supported_remotes(self) -> List[str]:
        return list(self._remotes)

    def manifest_from(self, remote_name: str) -> Manifest:
        """Cached manifest of a supported remote.

        Raises
        ------
        UnsupportedRemoteError
        UnknownRemoteError
        """
        self._capabilities.support.check_remote_is_supported(remote_name)
        return self._cache.lookup(remote_name)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def fetch_manifests(self) -> bool:
        """Rebuild the manifest of every remote this host serves.

        Unsupported remotes are skipped. A download failure is reported
        to the failure sink and leaves the cached manifest in place.

        Returns
        -------
        bool
            True if no remote failed to refresh.
        """
        builder = ManifestBuilder(self._downloader)
        success = True

        for remote_name in self._remotes:
            try:
                self._capabilities.support.check_remote_is_supported(
                    remote_name
                )
            except UnsupportedRemoteError:
                logger.debug("Skipping unsupported remote %r", remote_name)
                continue

            entries = catalog_for(self.arch, self._catalog)
            logger.info(
                "Fetching manifest for remote %r (%s, %d images)",
                remote_name, self.arch, len(entries),
            )
            try:
                manifest = builder.build(entries)
            except DownloadError as e:
                success = False
                self._capabilities.on_manifest_update_failure(str(e))
                continue

            self._cache.store(remote_name, manifest)
            logger.info(
                "Manifest for remote %r updated (%d images)",
                remote_name, len(manifest.products),
            )

        return success

    def update_manifests(self, force: bool = False) -> bool:
        """Refresh manifests if forced or if the refresh policy says so.

        Returns
        -------
        bool
            True if a refresh was attempted.
        """
        policy = self._capabilities.refresh_policy
        if not (force or policy.is_due()):
            return False

        if self.fetch_manifests():
            policy.mark_refreshed()
        return True

    def clear(self) -> None:
        self._cache.clear()
