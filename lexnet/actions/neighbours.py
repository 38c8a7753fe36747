"""The neighbours action extracts the n-level ego network for each of the given synsets."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from ..algorithms.traversal import _check_depth, walk
from ..core.errors import GraphAccessError, InvalidSynsetIDError, OutputWriteError
from ..io.csv_io import RecordWriter, read_synsets

logger = logging.getLogger(__name__)


@dataclass
class ExtractionSummary:
    """Outcome of one run. Safe to update from worker threads."""

    processed: int = 0
    written: int = 0
    empty: int = 0
    failures: dict[str, str] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return not self.failures

    def record_result(self, synset_id: str, size: int) -> None:
        with self._lock:
            self.processed += 1
            if size:
                self.written += 1
            else:
                self.empty += 1

    def record_failure(self, synset_id: str, error: BaseException) -> None:
        with self._lock:
            self.processed += 1
            self.failures[synset_id] = str(error)


class NeighboursAction:
    """Walk every seed synset and write its signed-distance ego network.

    Parameters
    --
    graph : GraphAccess
        Lexical graph backend (``LexicalGraph``, ``WordNetGraph``, ...).
    synsets_path : str or file-like
        Seed synset ids, one per line.
    neighbours_path : str or file-like
        Output; one ``synset_id<delim>id:dist,...`` record per seed with a
        non-empty neighbourhood.
    depth : int
        Graph depth.
    workers : int, optional
        Worker threads. ``1`` processes the seeds inline, in file order.
    retries : int, optional
        Extra attempts for a seed whose walk hit a transient graph failure.
    delimiter : str, optional
        Output field separator.

    Notes
    -
    A seed that fails (invalid id, backend failure or any other error raised
    while walking it) is logged, counted in the summary and skipped; the run
    goes on. Failing to write output aborts the run with ``OutputWriteError``.

    """

    def __init__(
        self,
        graph,
        synsets_path,
        neighbours_path,
        depth: int,
        *,
        workers: int = 1,
        retries: int = 0,
        delimiter: str = "\t",
    ):
        _check_depth(depth)
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        if retries < 0:
            raise ValueError(f"retries must be non-negative, got {retries}")
        self.graph = graph
        self.synsets_path = synsets_path
        self.neighbours_path = neighbours_path
        self.depth = depth
        self.workers = workers
        self.retries = retries
        self.delimiter = delimiter
        logger.info('Reading synsets from "%s"', synsets_path)
        logger.info('Writing neighbours to "%s"', neighbours_path)
        logger.info("Extracting in %s steps", depth)

    @classmethod
    def from_config(cls, config, graph=None):
        if graph is None:
            from ..config import load_graph

            graph = load_graph(config)
        return cls(
            graph,
            config.synsets,
            config.neighbours,
            config.depth,
            workers=config.workers,
            retries=config.retries,
            delimiter=config.delimiter,
        )

    def run(self) -> ExtractionSummary:
        """Process the data and write the outputs."""
        synsets = read_synsets(self.synsets_path)
        summary = ExtractionSummary()

        with RecordWriter(self.neighbours_path, delimiter=self.delimiter) as writer:
            if self.workers == 1:
                for synset_id in synsets:
                    self._process(synset_id, writer, summary)
            else:
                with ThreadPoolExecutor(
                    max_workers=self.workers, thread_name_prefix="lexnet-walk"
                ) as pool:
                    futures = [
                        pool.submit(self._process, synset_id, writer, summary)
                        for synset_id in synsets
                    ]
                    try:
                        for future in as_completed(futures):
                            future.result()
                    except BaseException:
                        for future in futures:
                            future.cancel()
                        raise

        if summary.failures:
            logger.warning(
                "%s of %s synset(s) failed: %s",
                len(summary.failures),
                summary.processed,
                ", ".join(sorted(summary.failures)),
            )
        logger.info("Done")
        return summary

    def _process(self, synset_id, writer, summary) -> None:
        logger.info("Processing %s", synset_id)
        try:
            neighbours = self._walk(synset_id, summary)
        except OutputWriteError:
            raise
        except Exception as e:
            logger.exception("Failed to process %s", synset_id)
            summary.record_failure(synset_id, e)
            return
        if neighbours is None:
            return
        if neighbours:
            writer.write_record(synset_id, neighbours)
        summary.record_result(synset_id, len(neighbours))
        logger.info("Processed %s, found %s neighbour(s)", synset_id, len(neighbours))

    def _walk(self, synset_id, summary):
        attempt = 0
        while True:
            try:
                return walk(self.graph, synset_id, self.depth)
            except InvalidSynsetIDError as e:
                logger.error("Skipping %s: %s", synset_id, e)
                summary.record_failure(synset_id, e)
                return None
            except (GraphAccessError, OSError) as e:
                if attempt < self.retries:
                    attempt += 1
                    logger.warning(
                        "Retrying %s after failure (attempt %s of %s): %s",
                        synset_id,
                        attempt,
                        self.retries,
                        e,
                    )
                    continue
                logger.error("Failed to process %s: %s", synset_id, e)
                summary.record_failure(synset_id, e)
                return None
