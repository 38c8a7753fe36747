"""Tabular I/O for lexical graphs and extraction results, built on Polars.

This module purposefully avoids importing stdlib `csv`: parsing, quoting and
escaping are left to Polars.

It covers:
- Edge lists (source / relation / target) into a ``LexicalGraph``
- Synset lists (one identifier per line) for extraction runs
- Neighbour records ``(synset_id, "id:dist,id:dist,...")`` written through a
  thread-safe ``RecordWriter`` and read back with ``read_neighbours``

Column detection is case-insensitive; if the heuristics get it wrong, rename
the columns or pass ``source=`` / ``target=`` / ``relation=`` explicitly.

Public entry points:
- load_csv_to_graph(path, graph=None, **options) -> LexicalGraph
- from_dataframe(df, graph=None, **options) -> LexicalGraph
- export_edge_list_csv(graph, path)
- read_synsets(path) -> list[str]
- format_neighbours(mapping) -> str
- RecordWriter(path, delimiter="\\t")
- read_neighbours(path, delimiter="\\t") -> dict[str, dict[str, int]]
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping

import polars as pl

from ..core.errors import OutputWriteError
from ..core.graph import LexicalGraph

logger = logging.getLogger(__name__)

# ---------------------------
# Helpers / parsing utilities
# ---------------------------

SRC_COLS = ["source", "src", "from", "synset", "synset_id", "u"]
DST_COLS = ["target", "dst", "to", "v"]
REL_COLS = ["relation", "pointer", "rel", "type", "relation_type"]


def _norm(s) -> str:
    if s is None:
        return ""
    return str(s).strip()


def _pick_first(df: pl.DataFrame, candidates: list[str]) -> str | None:
    cols_lower = {c.lower(): c for c in df.columns}
    for k in candidates:
        if k in cols_lower:
            return cols_lower[k]
    return None


def _resolve_column(df: pl.DataFrame, explicit: str | None, candidates: list[str], what: str) -> str:
    if explicit is not None:
        if explicit not in df.columns:
            raise ValueError(f"{what} column {explicit!r} not in {df.columns}")
        return explicit
    col = _pick_first(df, candidates)
    if col is None:
        raise ValueError(
            f"could not find a {what} column; expected one of {candidates}, got {df.columns}"
        )
    return col


# ---------------------------
# Edge lists
# ---------------------------


def from_dataframe(
    df: pl.DataFrame,
    graph: LexicalGraph | None = None,
    *,
    source: str | None = None,
    target: str | None = None,
    relation: str | None = None,
) -> LexicalGraph:
    """Ingest an edge-list DF [DataFrame] into a ``LexicalGraph``.

    Parameters
    --
    df : polars.DataFrame
        One row per relation.
    graph : LexicalGraph, optional
        Graph to mutate. A fresh one is created when omitted.
    source, target, relation : str, optional
        Explicit column names. Auto-detected otherwise.

    Returns
    ---
    LexicalGraph

    Raises
    --
    ValueError
        If a structural column cannot be found.

    Notes
    -
    Rows with an empty source or target are skipped. Other columns are ignored.

    """
    G = graph if graph is not None else LexicalGraph()
    src = _resolve_column(df, source, SRC_COLS, "source")
    dst = _resolve_column(df, target, DST_COLS, "target")
    rel = _resolve_column(df, relation, REL_COLS, "relation")

    skipped = 0
    for s, t, r in df.select([src, dst, rel]).iter_rows():
        s, t, r = _norm(s), _norm(t), _norm(r)
        if not s or not t:
            skipped += 1
            continue
        G.add_edge(s, t, r or "related")
    if skipped:
        logger.warning("Skipped %s edge row(s) with an empty endpoint", skipped)
    return G


def load_csv_to_graph(
    path,
    graph: LexicalGraph | None = None,
    *,
    separator: str = ",",
    **options,
) -> LexicalGraph:
    """Read a CSV edge list (path or file-like) into a ``LexicalGraph``.

    All columns are read as strings so identifiers are never coerced.
    ``options`` are forwarded to :func:`from_dataframe`.
    """
    df = pl.read_csv(path, separator=separator, infer_schema_length=0)
    logger.info("Read %s edge row(s) from %s", df.height, _describe(path))
    return from_dataframe(df, graph=graph, **options)


def export_edge_list_csv(graph: LexicalGraph, path, *, separator: str = ",") -> None:
    """Write ``source,relation,target,direction`` rows for every relation."""
    view = graph.edges_view().select(["source", "relation", "target", "direction"])
    if hasattr(path, "write"):
        path.write(view.write_csv(separator=separator))
    else:
        view.write_csv(path, separator=separator)


# ---------------------------
# Synset lists
# ---------------------------


def read_synsets(path) -> list[str]:
    """Read seed identifiers, one per line.

    Blank lines and ``#`` comments are skipped; duplicates are dropped keeping
    the first occurrence.
    """
    if hasattr(path, "read"):
        lines = path.read().splitlines()
    else:
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    seen = {}
    total = 0
    for line in lines:
        sid = line.strip()
        if not sid or sid.startswith("#"):
            continue
        total += 1
        seen.setdefault(sid, None)
    if total > len(seen):
        logger.info("Dropped %s duplicate synset id(s) from %s", total - len(seen), _describe(path))
    return list(seen)


# ---------------------------
# Neighbour records
# ---------------------------


def format_neighbours(neighbours: Mapping[str, int]) -> str:
    """Render ``{id: dist}`` as ``"id:dist,id:dist"`` in iteration order."""
    return ",".join(f"{sid}:{dist}" for sid, dist in neighbours.items())


def parse_neighbours(cell: str) -> dict[str, int]:
    """Inverse of :func:`format_neighbours`.

    The distance follows the last ``:`` so ids containing colons (``bn:...``)
    survive.
    """
    out = {}
    for item in (cell or "").split(","):
        item = item.strip()
        if not item:
            continue
        sid, sep, dist = item.rpartition(":")
        if not sep:
            raise ValueError(f"malformed neighbour entry {item!r}")
        out[sid] = int(dist)
    return out


class RecordWriter:
    """Append-only sink of two-field records, safe to share between threads.

    Each record is rendered by Polars and written and flushed under a lock, so
    concurrent writers never interleave partial lines.

    Parameters
    --
    path : str, Path or text file-like
        Output destination. Paths are opened (truncated) on ``open()`` /
        ``__enter__`` and closed on exit; file-likes are left open.
    delimiter : str, optional
        Field separator (default tab).

    """

    columns = ("synset_id", "neighbours")

    def __init__(self, path, delimiter: str = "\t"):
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        self.path = path
        self.delimiter = delimiter
        self.records = 0
        self._lock = threading.Lock()
        self._handle = None
        self._owns_handle = False

    def open(self):
        if self._handle is not None:
            return self
        if hasattr(self.path, "write"):
            self._handle = self.path
        else:
            try:
                self._handle = open(self.path, "w", encoding="utf-8", newline="")
            except OSError as e:
                raise OutputWriteError(f"cannot open {self.path}: {e}") from e
            self._owns_handle = True
        return self

    def close(self):
        with self._lock:
            if self._handle is not None and self._owns_handle:
                self._handle.close()
            self._handle = None
            self._owns_handle = False

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _render(self, fields) -> str:
        return pl.DataFrame(
            {name: [str(value)] for name, value in zip(self.columns, fields)},
            schema={name: pl.Utf8 for name in self.columns},
        ).write_csv(separator=self.delimiter, include_header=False)

    def write_record(self, synset_id: str, neighbours) -> None:
        """Write one ``(synset_id, neighbours)`` record atomically.

        ``neighbours`` may be a pre-formatted string or an ``{id: dist}``
        mapping.
        """
        if not isinstance(neighbours, str):
            neighbours = format_neighbours(neighbours)
        line = self._render((synset_id, neighbours))
        with self._lock:
            if self._handle is None:
                raise OutputWriteError("record writer is not open")
            try:
                self._handle.write(line)
                self._handle.flush()
            except OSError as e:
                raise OutputWriteError(f"failed to write record for {synset_id!r}: {e}") from e
            self.records += 1


def read_neighbours(path, delimiter: str = "\t") -> dict[str, dict[str, int]]:
    """Read a neighbours file back into ``{seed: {id: dist}}``."""
    try:
        df = pl.read_csv(
            path,
            separator=delimiter,
            has_header=False,
            new_columns=list(RecordWriter.columns),
            infer_schema_length=0,
        )
    except pl.exceptions.NoDataError:
        return {}
    return {sid: parse_neighbours(cell) for sid, cell in df.iter_rows()}


def _describe(path) -> str:
    return getattr(path, "name", None) or (str(path) if not hasattr(path, "read") else "<buffer>")
