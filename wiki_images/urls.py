"""Thumbnail URL templates for wiki images.

The imageinfo API only hands out a thumbnail URL for the size that was
requested. Thumbnail URLs look like

    https://wiki.openstreetmap.org/w/images/thumb/a/ab/Foo.png/10px-Foo.png

so splitting around the pixel width gives a prefix and a suffix that can be
glued back together with any other width. The suffix keeps its ``px-``, which
is the format stored in ``wiki_images.thumb_url_suffix``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from . import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedUrls:
    url: Optional[str]
    prefix: Optional[str]
    suffix: Optional[str]


def upgrade_scheme(url: Optional[str]) -> Optional[str]:
    """Return the URL with a leading ``http:`` replaced by ``https:``."""
    if not isinstance(url, str):
        return url
    return config.INSECURE_SCHEME_PATTERN.sub("https:", url, count=1)


def split_thumbnail_url(thumburl: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Split a thumbnail URL around its pixel width.

    Returns ``(None, None)`` and logs a warning if the URL does not have the
    expected shape.
    """
    match = config.THUMB_URL_PATTERN.match(thumburl) if isinstance(thumburl, str) else None
    if match is None:
        logger.warning("Wrong thumbnail format: '%s'", thumburl)
        return None, None
    return upgrade_scheme(match.group(1)), match.group(2)


def rewrite_commons_prefix(url: Optional[str], prefix: Optional[str]) -> Optional[str]:
    if prefix is None or not isinstance(url, str):
        return prefix
    if not config.COMMONS_URL_PATTERN.match(url):
        return prefix
    return prefix.replace(config.LOCAL_IMAGE_BASE, config.COMMONS_IMAGE_BASE, 1)


def normalize_image_urls(info: dict[str, Any]) -> NormalizedUrls:
    """Return the secure image URL and thumbnail template for one imageinfo entry."""
    url = upgrade_scheme(info.get("url"))
    prefix, suffix = split_thumbnail_url(info.get("thumburl"))
    # The OSM wiki reports the wrong thumbnail URL for images transcluded
    # from Wikimedia Commons.
    prefix = rewrite_commons_prefix(url, prefix)
    return NormalizedUrls(url=url, prefix=prefix, suffix=suffix)


def build_thumbnail_url(prefix: Optional[str], suffix: Optional[str], width: int) -> Optional[str]:
    if prefix is None or suffix is None:
        return None
    return f"{prefix}{int(width)}{suffix}"
