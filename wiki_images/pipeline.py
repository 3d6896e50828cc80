import logging

from tqdm import tqdm

from . import config
from .collector import collect_image_titles
from .models import AnomalyReport, RunState, RunStats
from .sink import WikiImageSink
from .utils import dump_payload

logger = logging.getLogger(__name__)


def _apply_chunk_mappings(sink, mappings, stats):
    if not mappings:
        return
    stats.mappings += len(mappings)
    stats.renamed_rows += sink.apply_mappings(mappings)


def process_chunk(sink, fetcher, titles, state, stats):
    """Fetch one chunk and write its results. Anomalies are logged, not raised."""
    result = fetcher.fetch_chunk(titles)
    stats.requests += 1

    if isinstance(result, AnomalyReport):
        stats.anomalies += 1
        logger.warning("%s (%s):\n%s", result.message, result.kind, dump_payload(result.payload))
        _apply_chunk_mappings(sink, result.mappings, stats)
        return

    # References are renamed before any record under the canonical title is inserted
    _apply_chunk_mappings(sink, result.mappings, stats)
    stats.without_thumbnail += sum(1 for record in result.records if not record.has_thumbnail_template)
    inserted, skipped = sink.insert_records(result.records, state)
    stats.inserted += inserted
    stats.duplicates += skipped


def run(conn, fetcher, titles=None, batch_size=config.BATCH_SIZE, progress=False):
    """Collect image titles, fetch their metadata and store it in one transaction.

    Returns the RunStats of the run. Storage errors propagate after the
    transaction has been rolled back.
    """
    if titles is None:
        titles = collect_image_titles(conn)
    state = RunState.from_titles(titles)
    stats = RunStats(titles=len(state.remaining))
    logger.info("Found %d different image titles", stats.titles)

    sink = WikiImageSink(conn)
    total_chunks = -(-stats.titles // batch_size)
    with sink.transaction():
        with tqdm(total=total_chunks, desc="imageinfo", unit="batch", disable=not progress) as bar:
            while state.remaining:
                chunk = state.next_chunk(batch_size)
                process_chunk(sink, fetcher, chunk, state, stats)
                bar.update(1)

    logger.info(
        "Done: %d requests, %d anomalies, %d images added, %d duplicates skipped",
        stats.requests,
        stats.anomalies,
        stats.inserted,
        stats.duplicates,
    )
    return stats
