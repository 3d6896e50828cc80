import logging
from contextlib import contextmanager

from . import config

logger = logging.getLogger(__name__)

INSERT_IMAGE_SQL = "INSERT INTO {table} ({columns}) VALUES ({placeholders})".format(
    table=config.RESULTS_TABLE,
    columns=", ".join(config.RESULT_COLUMNS),
    placeholders=", ".join("?" for _ in config.RESULT_COLUMNS),
)


class WikiImageSink:
    """Writes imageinfo results into the wiki database.

    All writes of a run happen inside one transaction opened with
    ``transaction()``; nothing is committed until the run finishes.
    """

    def __init__(self, conn, referencing_tables=config.REFERENCING_TABLES):
        self.conn = conn
        self.referencing_tables = tuple(referencing_tables)

    @contextmanager
    def transaction(self):
        self.conn.execute("BEGIN")
        try:
            yield self
        except BaseException:
            self.conn.rollback()
            logger.error("Run aborted, transaction rolled back")
            raise
        self.conn.commit()

    def apply_mappings(self, mappings):
        """Rewrite stored image references from normalized to canonical titles."""
        changed = 0
        for mapping in mappings:
            for table in self.referencing_tables:
                cursor = self.conn.execute(
                    f"UPDATE {table} SET image=? WHERE image=?",
                    (mapping.to_title, mapping.from_title),
                )
                changed += max(cursor.rowcount, 0)
        return changed

    def insert_records(self, records, state):
        """Insert records whose title was not seen before in this run.

        Returns ``(inserted, skipped)``.
        """
        rows = []
        skipped = 0
        for record in records:
            if not state.mark_seen(record.title):
                skipped += 1
                continue
            rows.append(record.as_row())
        if rows:
            self.conn.executemany(INSERT_IMAGE_SQL, rows)
        return len(rows), skipped
