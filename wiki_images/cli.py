"""get-image-info [DIR]

Gets meta information about images from the OSM wiki.

Reads the list of all images used in Key:, Tag: and Relation: pages from the
local database and requests meta information (width, height, mime type,
URL, ...) for those images. Writes this data into the wiki_images table.

The database must be in DIR or in the current directory, if no directory was
given on the command line.
"""

import argparse
import logging
import sqlite3
import sys
from pathlib import Path

from . import config
from .fetcher import ImageInfoFetcher
from .pipeline import run


def build_parser():
    parser = argparse.ArgumentParser(
        prog="get-image-info",
        description="Fetch OSM wiki image metadata into the wiki_images table.",
    )
    parser.add_argument(
        "dir",
        nargs="?",
        default=".",
        help=f"Directory containing {config.DATABASE_NAME} (default: current directory)",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    database = Path(args.dir) / config.DATABASE_NAME
    if not database.is_file():
        parser.error(f"database not found: {database}")

    logging.basicConfig(
        level=logging.INFO,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
        stream=sys.stdout,
    )

    conn = sqlite3.connect(database)
    try:
        stats = run(conn, ImageInfoFetcher(), progress=True)
    finally:
        conn.close()

    print("[+] Run summary:")
    for name, count in stats.as_dict().items():
        print(f"    {name}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
