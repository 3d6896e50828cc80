from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import config
from .urls import build_thumbnail_url

TAG_IMAGE_QUERY = """
    SELECT i.width, i.height, i.image_url, i.thumb_url_prefix, i.thumb_url_suffix
    FROM wikipages p JOIN wiki_images i USING(image)
    WHERE p.lang=? AND p.key=? AND p.value=?
    LIMIT 1
"""


@dataclass(frozen=True)
class TagImage:
    width: Optional[int]
    height: Optional[int]
    image_url: Optional[str]
    thumb_url_prefix: Optional[str]
    thumb_url_suffix: Optional[str]

    def thumbnail_url(self, width: int) -> Optional[str]:
        return build_thumbnail_url(self.thumb_url_prefix, self.thumb_url_suffix, width)


def find_tag_image(conn, key, value, lang=config.DEFAULT_LANG) -> Optional[TagImage]:
    """Return the image shown on the wiki page of a tag.

    The page in ``lang`` is preferred; the English page is used otherwise.
    """
    languages = [lang] if lang == config.DEFAULT_LANG else [lang, config.DEFAULT_LANG]
    for language in languages:
        row = conn.execute(TAG_IMAGE_QUERY, (language, key, value)).fetchone()
        if row is not None:
            return TagImage(*row)
    return None
