# -*- coding: utf-8 -*-
"""
Catalog Module - Static image catalog and manifest building.

Provides the per-architecture artifact catalog, the per-artifact metadata
fetcher, and the concurrent manifest builder that turns a catalog into an
alias-indexed manifest of VM image records.

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
