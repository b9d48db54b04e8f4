# -*- coding: utf-8 -*-
"""
Core Module - Ambient services for the image host.

Contains the configuration loader, the exception taxonomy, and the
HTTP-backed URL downloader consumed by the metadata fetcher.

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
