# -*- coding: utf-8 -*-
"""
Tests for imagehost.__main__ — command-line interface.

Author
------
Steven Siebert

Created
-------
2026-10-17
"""

from unittest.mock import patch

import pytest

from conftest import FakeDownloader, fake_hash, make_catalog
from imagehost.__main__ import main


_CATALOG_YAML = """\
x86_64:
  disk-a.img:
    url_prefix: https://images.example/a/
    aliases: [alpha, a1]
    os: Ubuntu
    release: rel-a
    release_string: Release A
  disk-b.img:
    url_prefix: https://images.example/b/
    aliases: [bravo]
    os: Ubuntu
    release: rel-b
    release_string: Release B
"""


@pytest.fixture
def cli_args(tmp_path):
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text(_CATALOG_YAML)
    return [
        "--config", str(tmp_path / "config.json"),
        "--catalog", str(catalog),
        "--arch", "x86_64",
    ]


@pytest.fixture
def fake_downloader():
    downloader = FakeDownloader(make_catalog())
    with patch('imagehost.host.custom.URLDownloader',
               return_value=downloader):
        yield downloader


class TestMain:
    def test_find(self, cli_args, fake_downloader, capsys):
        assert main(cli_args + ["find", "alpha"]) == 0
        out = capsys.readouterr().out
        assert "rel-a" in out
        assert fake_hash("disk-a.img") in out

    def test_find_by_hash(self, cli_args, fake_downloader, capsys):
        assert main(cli_args + ["find", fake_hash("disk-b.img")]) == 0
        assert "rel-b" in capsys.readouterr().out

    def test_find_missing(self, cli_args, fake_downloader, capsys):
        assert main(cli_args + ["find", "zulu"]) == 1
        assert "No image found" in capsys.readouterr().err

    def test_list(self, cli_args, fake_downloader, capsys):
        assert main(cli_args + ["list"]) == 0
        out = capsys.readouterr().out
        assert "rel-a" in out and "rel-b" in out

    def test_update_failure(self, cli_args, fake_downloader, capsys):
        fake_downloader.fail_urls.add("https://images.example/a/SHA256SUMS")
        assert main(cli_args + ["list"]) == 2
        assert "could not update manifest" in capsys.readouterr().err

    def test_bad_catalog(self, tmp_path, capsys):
        args = ["--config", str(tmp_path / "c.json"),
                "--catalog", str(tmp_path / "missing.yaml"), "list"]
        assert main(args) == 1
        assert "cannot read catalog" in capsys.readouterr().err
