# -*- coding: utf-8 -*-
"""
Catalog Models - Data models for image catalog and manifest metadata.

Defines the ArtifactSpec catalog entry, the transient BaseImageInfo
produced by the metadata fetcher, the VMImageInfo image record, the
Query served by hosts, and the Manifest that owns image records and
their alias index.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

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
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ArtifactSpec:
    """Catalog entry for one downloadable image file.

    Parameters
    ----------
    filename : str
        Image file name, appended to ``url_prefix`` to form its URL.
    url_prefix : str
        Directory URL holding the image and its SHA256SUMS listing.
    aliases : Tuple[str, ...]
        Alternate names the image answers to.
    os : str
        Operating system name (e.g., 'Ubuntu').
    release : str
        Release id (e.g., 'core-20').
    release_string : str
        Human-readable release (e.g., 'Core 20').
    """

    filename: str
    url_prefix: str
    aliases: Tuple[str, ...] = ()
    os: str = ""
    release: str = ""
    release_string: str = ""

    @property
    def image_url(self) -> str:
        return self.url_prefix + self.filename

    @property
    def hash_url(self) -> str:
        return self.url_prefix + "SHA256SUMS"


@dataclass(frozen=True)
class BaseImageInfo:
    """Last-modified date (``yyyyMMdd``) and SHA256 hash of one image."""

    last_modified: str
    hash: str


@dataclass(frozen=True)
class VMImageInfo:
    """Public manifest entry for one VM image.

    Parameters
    ----------
    aliases : Tuple[str, ...]
    os : str
    release : str
    release_title : str
    supported : bool
    image_location : str
        Resolved image URL.
    id : str
        Integrity hash, used as the stable image identifier.
    stream_location : str
        Secondary identifier; always empty for catalog images.
    version : str
        Last-modified date of the image.
    size : int
        Size placeholder; always 0 for catalog images.
    verify : bool
        Whether the image hash should be verified after download.
    """

    aliases: Tuple[str, ...] = ()
    os: str = ""
    release: str = ""
    release_title: str = ""
    supported: bool = False
    image_location: str = ""
    id: str = ""
    stream_location: str = ""
    version: str = ""
    size: int = 0
    verify: bool = False

    def is_default_constructed(self) -> bool:
        """True for the empty placeholder occupying an unfilled slot."""
        return self == _DEFAULT_IMAGE_INFO


_DEFAULT_IMAGE_INFO = VMImageInfo()


class QueryType(Enum):
    """How a query's release field should be interpreted."""

    ALIAS = "alias"
    LOCAL_FILE = "local_file"
    HTTP_DOWNLOAD = "http_download"


@dataclass(frozen=True)
class Query:
    """Image lookup request.

    Parameters
    ----------
    release : str
        Release name, alias, or image id to resolve.
    remote_name : str
        Remote to resolve against. Default is the unnamed remote.
    name : str
        Instance name the query is made for, if any.
    query_type : QueryType
    """

    release: str
    remote_name: str = ""
    name: str = ""
    query_type: QueryType = QueryType.ALIAS


def index_image_records(
    products: Sequence[VMImageInfo],
) -> Dict[str, int]:
    """Map every image id and alias to its position in ``products``.

    Default-constructed entries are skipped. When two images share an
    alias the later one wins.
    """
    index: Dict[str, int] = {}
    for position, image in enumerate(products):
        if image.is_default_constructed():
            continue
        index[image.id] = position
        for alias in image.aliases:
            index[alias] = position
    return index


@dataclass(frozen=True)
class Manifest:
    """Image records of one remote plus their id/alias index.

    The index stores positions into ``products`` rather than the records
    themselves. Use :meth:`from_products` to build a manifest so the
    index always matches the sequence it points into.

    Parameters
    ----------
    products : Tuple[VMImageInfo, ...]
        Records in build order, including unfilled placeholders.
    image_records : Mapping[str, int]
        Id and alias keys mapped to positions in ``products``.
    """

    products: Tuple[VMImageInfo, ...] = ()
    image_records: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_products(cls, products: Sequence[VMImageInfo]) -> 'Manifest':
        products = tuple(products)
        return cls(
            products=products,
            image_records=MappingProxyType(index_image_records(products)),
        )

    def find(self, key: str) -> Optional[VMImageInfo]:
        """Resolve an id or alias to its image record, or None."""
        position = self.image_records.get(key)
        if position is None:
            return None
        return self.products[position]

    def __contains__(self, key: object) -> bool:
        return key in self.image_records

    def images(self) -> Iterator[VMImageInfo]:
        """Iterate records, skipping default-constructed placeholders."""
        return (p for p in self.products if not p.is_default_constructed())
