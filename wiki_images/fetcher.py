import logging

import requests

from . import config
from .models import AnomalyReport, ChunkResult, ImageInfoRecord, NormalizationMapping
from .urls import normalize_image_urls
from .utils import safe_get

logger = logging.getLogger(__name__)


def build_imageinfo_params(titles):
    """Return MediaWiki query parameters for one batch of titles."""
    return {
        "action": "query",
        "format": "json",
        "prop": "imageinfo",
        "iiprop": config.IMAGEINFO_PROPS,
        "titles": "|".join(titles),
        "iiurlwidth": config.THUMB_PROBE_SIZE,
        "iiurlheight": config.THUMB_PROBE_SIZE,
    }


def parse_normalized(query):
    mappings = []
    for entry in query.get("normalized") or []:
        if not isinstance(entry, dict):
            continue
        from_title = entry.get("from")
        to_title = entry.get("to")
        if from_title and to_title:
            mappings.append(NormalizationMapping(from_title=from_title, to_title=to_title))
    return mappings


def iter_pages(pages):
    """Yield page dicts from either format version 1 (map) or 2 (list) responses."""
    if isinstance(pages, dict):
        yield from pages.values()
    elif isinstance(pages, list):
        yield from pages
    else:
        raise TypeError(f"Unexpected 'pages' type: {type(pages).__name__}")


def build_record(page):
    """Return an ImageInfoRecord for a page, or None if it carries no imageinfo."""
    imageinfo = page.get("imageinfo")
    if not imageinfo:
        return None
    info = imageinfo[0]
    urls = normalize_image_urls(info)
    return ImageInfoRecord(
        title=page["title"],
        width=info.get("width"),
        height=info.get("height"),
        size=info.get("size"),
        mime=info.get("mime"),
        url=urls.url,
        thumb_url_prefix=urls.prefix,
        thumb_url_suffix=urls.suffix,
    )


def parse_imageinfo_response(payload):
    """Turn an imageinfo API payload into a ChunkResult or an AnomalyReport."""
    query = safe_get(payload, "query")
    if not isinstance(query, dict):
        return AnomalyReport(kind="no-query", message="Wiki API call failed (no 'query' field)", payload=payload)

    mappings = parse_normalized(query)

    pages = query.get("pages")
    if not pages:
        return AnomalyReport(
            kind="no-pages",
            message="Wiki API call failed (no 'pages' field)",
            payload=payload,
            mappings=mappings,
        )

    try:
        records = [record for record in map(build_record, iter_pages(pages)) if record is not None]
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        return AnomalyReport(
            kind="parse",
            message=f"Wiki API call returned unexpected page data: {exc}",
            payload=payload,
            mappings=mappings,
        )
    return ChunkResult(records=records, mappings=mappings)


class ImageInfoFetcher:
    """Fetches imageinfo for batches of titles, one request per batch, no retries."""

    def __init__(self, endpoint=config.API_ENDPOINT, session=None, timeout=config.API_TIMEOUT):
        self.endpoint = endpoint
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update(config.HEADERS)
        self.session = session

    def query(self, titles):
        """Perform the API call and return the HTTP response (raises on HTTP errors)."""
        response = self.session.get(self.endpoint, params=build_imageinfo_params(titles), timeout=self.timeout)
        response.raise_for_status()
        return response

    def fetch_chunk(self, titles):
        logger.info("Get image info for: %s", " ".join(titles))
        try:
            response = self.query(titles)
        except requests.RequestException as exc:
            partial = exc.response.text if exc.response is not None else None
            return AnomalyReport(kind="transport", message=f"Wiki API call error: {exc}", payload=partial)
        try:
            payload = response.json()
        except ValueError as exc:
            return AnomalyReport(kind="transport", message=f"Wiki API call error: {exc}", payload=response.text)
        return parse_imageinfo_response(payload)
