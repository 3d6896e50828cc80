import sqlite3

import requests

SCHEMA = """
CREATE TABLE wikipages (
    lang TEXT,
    tag TEXT,
    key TEXT,
    value TEXT,
    title TEXT,
    image TEXT,
    osmcarto_rendering TEXT
);
CREATE TABLE relation_pages (
    lang TEXT,
    rtype TEXT,
    title TEXT,
    image TEXT
);
CREATE TABLE wiki_images (
    image TEXT,
    width INTEGER,
    height INTEGER,
    size INTEGER,
    mime TEXT,
    image_url TEXT,
    thumb_url_prefix TEXT,
    thumb_url_suffix TEXT
);
"""


def make_db(path=":memory:"):
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA)
    conn.commit()
    return conn


def add_wikipage(conn, key, value=None, image=None, osmcarto_rendering=None, lang="en"):
    tag = key if value is None else f"{key}={value}"
    conn.execute(
        "INSERT INTO wikipages (lang, tag, key, value, title, image, osmcarto_rendering) VALUES (?, ?, ?, ?, ?, ?, ?)",
        (lang, tag, key, value, f"Tag:{tag}", image, osmcarto_rendering),
    )
    conn.commit()


def add_relation_page(conn, rtype, image=None, lang="en"):
    conn.execute(
        "INSERT INTO relation_pages (lang, rtype, title, image) VALUES (?, ?, ?, ?)",
        (lang, rtype, f"Relation:{rtype}", image),
    )
    conn.commit()


def image_rows(conn):
    return conn.execute("SELECT * FROM wiki_images ORDER BY image").fetchall()


def imageinfo_page(title, pageid=1, thumburl=None, url=None, width=800, height=600):
    name = title.split(":", 1)[1]
    return {
        "pageid": pageid,
        "ns": 6,
        "title": title,
        "imagerepository": "local",
        "imageinfo": [
            {
                "width": width,
                "height": height,
                "size": 12345,
                "mime": "image/jpeg",
                "url": url or f"http://wiki.openstreetmap.org/w/images/a/ab/{name}",
                "thumburl": thumburl or f"http://wiki.openstreetmap.org/w/images/thumb/a/ab/{name}/10px-{name}",
            }
        ],
    }


def imageinfo_payload(pages, normalized=None):
    query = {"pages": {str(page.get("pageid", -1 - i)): page for i, page in enumerate(pages)}}
    if normalized:
        query["normalized"] = [{"from": src, "to": dst} for src, dst in normalized]
    return {"batchcomplete": "", "query": query}


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text if text is not None else repr(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Returns canned responses in order and records the request parameters."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
