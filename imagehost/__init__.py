# -*- coding: utf-8 -*-
"""
imagehost - Custom VM image host.

Resolves and caches metadata about virtual-machine disk images published
by a static, per-architecture catalog. Image records are fetched
concurrently, indexed by id and alias, and served from a lock-guarded
manifest cache.

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

__version__ = "0.1.0"
__author__ = "Duane Smalley, PhD"

from imagehost.catalog.models import Query, VMImageInfo
from imagehost.host.custom import CustomImageHost

__all__: list = ["CustomImageHost", "Query", "VMImageInfo"]
