# -*- coding: utf-8 -*-
"""
Static Catalog - Per-architecture table of custom image artifacts.

Holds the built-in catalog of images served by the custom image host and
loads replacement catalogs from YAML files. A catalog maps each
architecture to a mapping of image file name to ArtifactSpec.

YAML layout::

    x86_64:
      ubuntu-core-20-amd64.img.xz:
        url_prefix: https://cdimage.ubuntu.com/ubuntu-core/20/stable/current/
        aliases: [core20]
        os: Ubuntu
        release: core-20
        release_string: Core 20

Dependencies
------------
pyyaml

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
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

# Third-party
import yaml

logger = logging.getLogger(__name__)

# imagehost internal
from imagehost.catalog.models import ArtifactSpec
from imagehost.core.errors import CatalogError

Catalog = Mapping[str, Mapping[str, ArtifactSpec]]

_CORE_URL = "https://cdimage.ubuntu.com/ubuntu-core/{series}/stable/current/"


def _core_image(series: str, aliases: Tuple[str, ...]) -> ArtifactSpec:
    return ArtifactSpec(
        filename=f"ubuntu-core-{series}-amd64.img.xz",
        url_prefix=_CORE_URL.format(series=series),
        aliases=aliases,
        os="Ubuntu",
        release=f"core-{series}",
        release_string=f"Core {series}",
    )


def freeze_catalog(
    catalog: Mapping[str, Mapping[str, ArtifactSpec]],
) -> Catalog:
    """Return a read-only copy of a catalog."""
    return MappingProxyType({
        arch: MappingProxyType(dict(entries))
        for arch, entries in catalog.items()
    })


DEFAULT_CATALOG: Catalog = freeze_catalog({
    "x86_64": {
        spec.filename: spec
        for spec in (
            _core_image("16", ("core", "core16")),
            _core_image("18", ("core18",)),
            _core_image("20", ("core20",)),
            _core_image("22", ("core22",)),
        )
    },
})


def catalog_for(
    arch: str,
    catalog: Optional[Catalog] = None,
) -> Tuple[Tuple[str, ArtifactSpec], ...]:
    """Catalog entries for an architecture, sorted by file name.

    Parameters
    ----------
    arch : str
        Architecture name (e.g., 'x86_64').
    catalog : Optional[Catalog]
        Catalog to read. Defaults to DEFAULT_CATALOG.

    Returns
    -------
    Tuple[Tuple[str, ArtifactSpec], ...]
        ``(filename, spec)`` pairs; empty for unknown architectures.
    """
    if catalog is None:
        catalog = DEFAULT_CATALOG
    entries = catalog.get(arch, {})
    return tuple(sorted(entries.items(), key=lambda item: item[0]))


def _spec_from_dict(filename: str, data: Any) -> ArtifactSpec:
    if not isinstance(data, dict):
        raise CatalogError(f"entry {filename!r} must be a mapping")
    if 'url_prefix' not in data:
        raise CatalogError(f"entry {filename!r} has no url_prefix")
    aliases = data.get('aliases') or []
    if isinstance(aliases, str) or not isinstance(aliases, list):
        raise CatalogError(f"entry {filename!r} aliases must be a list")
    return ArtifactSpec(
        filename=filename,
        url_prefix=str(data['url_prefix']),
        aliases=tuple(str(a) for a in aliases),
        os=str(data.get('os', "")),
        release=str(data.get('release', "")),
        release_string=str(data.get('release_string', "")),
    )


def parse_catalog(data: Any) -> Catalog:
    """Build a catalog from the mapping structure of a YAML document.

    Raises
    ------
    CatalogError
        If the structure does not match the catalog layout.
    """
    if not isinstance(data, dict):
        raise CatalogError("catalog must be a mapping of architectures")

    catalog: Dict[str, Dict[str, ArtifactSpec]] = {}
    for arch, entries in data.items():
        if not isinstance(entries, dict):
            raise CatalogError(f"architecture {arch!r} must map file names")
        catalog[str(arch)] = {
            str(filename): _spec_from_dict(str(filename), spec)
            for filename, spec in entries.items()
        }
    return freeze_catalog(catalog)


def load_catalog(path: Path) -> Catalog:
    """Load a catalog from a YAML file.

    Parameters
    ----------
    path : Path

    Returns
    -------
    Catalog

    Raises
    ------
    CatalogError
        If the file cannot be read or is malformed.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"cannot read catalog {path}: {e}") from e

    catalog = parse_catalog(data)
    logger.info(
        "Loaded catalog from %s (%d architectures)", path, len(catalog)
    )
    return catalog
