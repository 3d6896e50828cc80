import re

# Database location (relative to the data directory given on the command line)
DATABASE_NAME = "taginfo-wiki.db"

# HTTP identity and API endpoint
HEADERS = {"User-Agent": "taginfo-wiki-images/1.0 (+https://wiki.openstreetmap.org/wiki/Taginfo)"}
API_ENDPOINT = "https://wiki.openstreetmap.org/w/api.php"
API_TIMEOUT = None  # Transport default (no timeout)

# Batch and imageinfo request shape
BATCH_SIZE = 10  # Titles per API call
IMAGEINFO_PROPS = "url|size|mime"
THUMB_PROBE_SIZE = 10  # Only used to learn the thumbnail URL template

# Title and URL patterns
IMAGE_TITLE_PATTERN = re.compile(r"^(file|image):", re.IGNORECASE)
THUMB_URL_PATTERN = re.compile(r"^(.*/)[0-9]{1,4}(px-.*)$")
INSECURE_SCHEME_PATTERN = re.compile(r"^http:")

# The OSM wiki reports its own thumbnail path for files transcluded from Commons
LOCAL_IMAGE_BASE = "https://wiki.openstreetmap.org/w/images"
COMMONS_IMAGE_BASE = "https://upload.wikimedia.org/wikipedia/commons"
COMMONS_URL_PATTERN = re.compile(r"^https://upload\.wikimedia\.org/wikipedia/commons")

# Tables storing image titles as references; normalizations are applied to these
REFERENCING_TABLES = ("wikipages", "relation_pages")
RESULTS_TABLE = "wiki_images"
RESULT_COLUMNS = (
    "image",
    "width",
    "height",
    "size",
    "mime",
    "image_url",
    "thumb_url_prefix",
    "thumb_url_suffix",
)

# Tag page lookups fall back to this language
DEFAULT_LANG = "en"

# Run logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
