# -*- coding: utf-8 -*-
"""
Configuration Module - Configurable defaults for the image host.

Provides a HostConfig dataclass with default values for the target
architecture, manifest time-to-live, download timeout, and support
gating. Loads from ~/.imagehost/config.json if it exists, otherwise uses
sensible defaults.

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
import json
import logging
import platform
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".imagehost"
_CONFIG_FILE = _CONFIG_DIR / "config.json"


@dataclass
class HostConfig:
    """Global image host configuration with defaults.

    Attributes
    ----------
    arch : str
        Architecture whose catalog entries are served.
    manifest_ttl : int
        Seconds before cached manifests are considered stale.
    download_timeout : float
        HTTP timeout for metadata fetches in seconds.
    catalog_path : Optional[str]
        YAML catalog replacing the built-in one, if set.
    supported_remotes : List[str]
        Remote names this platform accepts.
    unsupported_aliases : List[str]
        Aliases rejected on this platform.

    Raises
    ------
    ValueError
        If a field holds a value of the wrong type.
    """

    arch: str = field(default_factory=platform.machine)
    manifest_ttl: int = 300
    download_timeout: float = 10.0
    catalog_path: Optional[str] = None
    supported_remotes: List[str] = field(default_factory=lambda: [""])
    unsupported_aliases: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in ('manifest_ttl', 'download_timeout'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value!r}")
        if not isinstance(self.arch, str):
            raise ValueError(f"arch must be a string, got {self.arch!r}")
        if self.catalog_path is not None and not isinstance(
            self.catalog_path, str
        ):
            raise ValueError(
                f"catalog_path must be a string, got {self.catalog_path!r}"
            )
        for name in ('supported_remotes', 'unsupported_aliases'):
            value = getattr(self, name)
            if not isinstance(value, list) or not all(
                isinstance(v, str) for v in value
            ):
                raise ValueError(f"{name} must be a list of strings")

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file."""
        path = path or _CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)


def load_config(path: Optional[Path] = None) -> HostConfig:
    """Load configuration from file, or return defaults.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to ~/.imagehost/config.json.

    Returns
    -------
    HostConfig
        Loaded or default configuration. Unreadable files and files
        holding values of the wrong type fall back to the defaults.
    """
    path = path or _CONFIG_FILE
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return HostConfig(**{
                k: v for k, v in data.items()
                if k in HostConfig.__dataclass_fields__
            })
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load config from %s: %s", path, e)

    return HostConfig()
