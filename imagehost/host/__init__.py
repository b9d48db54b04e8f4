# -*- coding: utf-8 -*-
"""
Host Module - Manifest cache and query layer.

Contains the capabilities a host is composed from (support predicates,
TTL refresh policy, failure sink) and the custom image host that serves
lookups from its cached manifests.

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
