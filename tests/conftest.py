# -*- coding: utf-8 -*-
"""
Shared fixtures for imagehost tests.

Provides a synthetic four-image catalog and an in-memory downloader that
serves timestamps and SHA256SUMS listings for it without network access.

Author
------
Steven Siebert

Created
-------
2026-10-17
"""

import hashlib
import threading
from datetime import datetime, timezone

import pytest

from imagehost.catalog.models import ArtifactSpec
from imagehost.catalog.static import freeze_catalog
from imagehost.core.errors import DownloadError

ARCH = "x86_64"


def fake_hash(filename, salt=""):
    return hashlib.sha256((salt + filename).encode()).hexdigest()


def make_catalog():
    specs = [
        ArtifactSpec("disk-a.img", "https://images.example/a/",
                     ("alpha", "a1"), "Ubuntu", "rel-a", "Release A"),
        ArtifactSpec("disk-b.img", "https://images.example/b/",
                     ("bravo",), "Ubuntu", "rel-b", "Release B"),
        ArtifactSpec("disk-c.img", "https://images.example/c/",
                     ("charlie",), "Ubuntu", "rel-c", "Release C"),
        ArtifactSpec("disk-d.img", "https://images.example/d/",
                     ("delta",), "Ubuntu", "rel-d", "Release D"),
    ]
    return freeze_catalog({ARCH: {s.filename: s for s in specs}})


class FakeDownloader:
    """Serves catalog metadata from memory.

    Parameters
    ----------
    catalog : Catalog
    timestamp : datetime
        Returned by every ``last_modified`` call.
    fail_urls : set
        URLs raising DownloadError.
    """

    def __init__(self, catalog, timestamp=None, fail_urls=()):
        self.timestamp = timestamp or datetime(2024, 3, 5, 12, 0,
                                               tzinfo=timezone.utc)
        self.fail_urls = set(fail_urls)
        self.salt = ""
        self.calls = []
        self._lock = threading.Lock()
        self._catalog = catalog

    def _record(self, url):
        with self._lock:
            self.calls.append(url)
        if url in self.fail_urls:
            raise DownloadError(url, "503 Service Unavailable")

    def last_modified(self, url):
        self._record(url)
        return self.timestamp

    def download(self, url):
        self._record(url)
        lines = []
        for entries in self._catalog.values():
            for filename, spec in entries.items():
                if spec.url_prefix + "SHA256SUMS" == url:
                    lines.append(
                        f"{fake_hash(filename, self.salt)} *{filename}"
                    )
        return "\n".join(lines) + "\n"


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def downloader(catalog):
    return FakeDownloader(catalog)
