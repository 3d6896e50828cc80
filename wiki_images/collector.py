from . import config

IMAGE_TITLES_QUERY = """
    SELECT DISTINCT(image) AS title FROM wikipages WHERE image IS NOT NULL AND image != ''
    UNION
    SELECT DISTINCT(osmcarto_rendering) AS title FROM wikipages
        WHERE osmcarto_rendering IS NOT NULL AND osmcarto_rendering != ''
    UNION
    SELECT DISTINCT(image) AS title FROM relation_pages WHERE image IS NOT NULL AND image != ''
"""


def is_image_title(value):
    """Return True if the value names a wiki file page (File:/Image:, any case)."""
    if not isinstance(value, str):
        return False
    return bool(config.IMAGE_TITLE_PATTERN.match(value))


def collect_image_titles(conn):
    """Return the sorted, distinct image titles referenced from wiki pages."""
    rows = conn.execute(IMAGE_TITLES_QUERY).fetchall()
    return sorted({row[0] for row in rows if is_image_title(row[0])})
