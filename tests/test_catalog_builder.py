# -*- coding: utf-8 -*-
"""
Tests for imagehost.catalog.builder — concurrent manifest building.

Author
------
Steven Siebert

Created
-------
2026-10-17
"""

import threading

import pytest

from conftest import ARCH, FakeDownloader, fake_hash
from imagehost.catalog.builder import FetchOutcome, ManifestBuilder, build_manifest
from imagehost.catalog.models import VMImageInfo
from imagehost.catalog.static import catalog_for
from imagehost.core.errors import DownloadError


class _BarrierDownloader(FakeDownloader):
    """Blocks every timestamp probe until all workers have arrived."""

    def __init__(self, catalog, parties):
        super().__init__(catalog)
        self.barrier = threading.Barrier(parties, timeout=5)

    def last_modified(self, url):
        self.barrier.wait()
        return super().last_modified(url)


# ---------------------------------------------------------------------------
# FetchOutcome
# ---------------------------------------------------------------------------

class TestFetchOutcome:
    def test_success(self):
        outcome = FetchOutcome(record=VMImageInfo())
        assert outcome.ok is True

    def test_failure(self):
        outcome = FetchOutcome(error=DownloadError("u", "timeout"))
        assert outcome.ok is False
        assert "timeout" in repr(outcome)


# ---------------------------------------------------------------------------
# ManifestBuilder
# ---------------------------------------------------------------------------

class TestManifestBuilder:
    def test_all_fetches_succeed(self, catalog, downloader):
        manifest = build_manifest(catalog_for(ARCH, catalog), downloader)

        assert len(manifest.products) == 4
        assert [p.release for p in manifest.products] == [
            "rel-a", "rel-b", "rel-c", "rel-d",
        ]
        for alias in ("alpha", "a1", "bravo", "charlie", "delta"):
            assert manifest.find(alias) is not None
        for image in manifest.products:
            assert manifest.find(image.id) is image

    def test_hash_and_version(self, catalog, downloader):
        manifest = build_manifest(catalog_for(ARCH, catalog), downloader)
        image = manifest.find("bravo")
        assert image.id == fake_hash("disk-b.img")
        assert image.version == "20240305"
        assert image.image_location == "https://images.example/b/disk-b.img"

    def test_aliases_share_record(self, catalog, downloader):
        manifest = build_manifest(catalog_for(ARCH, catalog), downloader)
        assert manifest.find("alpha") is manifest.find("a1")

    def test_order_independent_of_input_order(self, catalog, downloader):
        entries = catalog_for(ARCH, catalog)
        forward = build_manifest(entries, downloader)
        backward = build_manifest(tuple(reversed(entries)), downloader)
        assert forward == backward

    def test_empty_catalog(self, downloader):
        manifest = build_manifest((), downloader)
        assert manifest.products == ()
        assert dict(manifest.image_records) == {}

    def test_two_requests_per_entry(self, catalog, downloader):
        build_manifest(catalog_for(ARCH, catalog), downloader)
        assert len(downloader.calls) == 8

    def test_one_failure_aborts_build(self, catalog):
        downloader = FakeDownloader(
            catalog, fail_urls={"https://images.example/c/SHA256SUMS"}
        )
        with pytest.raises(DownloadError, match="images.example/c"):
            build_manifest(catalog_for(ARCH, catalog), downloader)

    def test_failure_waits_for_all_workers(self, catalog):
        downloader = FakeDownloader(
            catalog, fail_urls={"https://images.example/a/disk-a.img"}
        )
        with pytest.raises(DownloadError):
            ManifestBuilder(downloader).build(catalog_for(ARCH, catalog))
        # the failing worker stops after its first request
        assert len(downloader.calls) == 7

    def test_workers_run_concurrently(self, catalog):
        entries = catalog_for(ARCH, catalog)
        downloader = _BarrierDownloader(catalog, parties=len(entries))
        manifest = ManifestBuilder(downloader).build(entries)
        assert len(list(manifest.images())) == 4

    def test_unexpected_errors_propagate(self, catalog, downloader):
        downloader.last_modified = lambda url: 1 / 0
        with pytest.raises(ZeroDivisionError):
            build_manifest(catalog_for(ARCH, catalog), downloader)
