# -*- coding: utf-8 -*-
"""
imagehost CLI - Resolve catalog images from the command line.

Usage::

    python -m imagehost find core20
    python -m imagehost list --arch x86_64 --catalog catalog.yaml

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

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from imagehost.catalog.models import Query, VMImageInfo
from imagehost.core.config import load_config
from imagehost.core.errors import ImageHostError
from imagehost.host.custom import CustomImageHost


def _format_image(image: VMImageInfo) -> str:
    aliases = ", ".join(image.aliases) or "-"
    return (
        f"{image.release:<10} {image.os} {image.release_title:<10} "
        f"version={image.version or '-'} aliases={aliases}\n"
        f"           {image.image_location}\n"
        f"           sha256={image.id or '(unknown)'}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="imagehost",
        description="imagehost — Resolve custom VM images and their metadata.",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a JSON config file (default ~/.imagehost/config.json).",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Path to a YAML catalog replacing the built-in one.",
    )
    parser.add_argument(
        "--arch",
        default=None,
        help="Architecture to serve (default: this machine's).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    find = subparsers.add_parser("find", help="Resolve a release or alias.")
    find.add_argument("release", help="Release name, alias, or image hash.")
    subparsers.add_parser("list", help="List every supported image.")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.arch:
        config.arch = args.arch
    if args.catalog:
        config.catalog_path = str(args.catalog)

    failures: List[str] = []
    try:
        host = CustomImageHost.from_config(config, failure_sink=failures.append)
    except ImageHostError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    host.update_manifests(force=True)
    if failures:
        for message in failures:
            print(f"Error: could not update manifest: {message}",
                  file=sys.stderr)
        return 2

    try:
        if args.command == "find":
            image = host.info_for(Query(release=args.release))
            if image is None:
                image = host.info_for_full_hash(args.release)
            if image is None:
                print(f"No image found for '{args.release}'", file=sys.stderr)
                return 1
            print(_format_image(image))
        else:
            for remote_name in host.supported_remotes():
                for image in host.all_images_for(remote_name, False):
                    print(_format_image(image))
    except ImageHostError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
