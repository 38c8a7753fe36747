"""Run configuration for extraction jobs."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

GRAPH_FORMATS = ("csv", "sif", "wordnet")


def _default_workers() -> int:
    return os.cpu_count() or 1


def infer_graph_format(graph) -> str:
    """Format named by a graph source: ``"wordnet"``, ``.sif`` or CSV."""
    if str(graph).strip().lower() == "wordnet":
        return "wordnet"
    suffix = Path(str(graph)).suffix.lower()
    if suffix == ".sif":
        return "sif"
    return "csv"


@dataclass(frozen=True)
class ExtractConfig:
    """Settings of one neighbours extraction run.

    Attributes:
        synsets: File with one seed synset id per line.
        neighbours: Output file for the neighbour records.
        graph: Graph source (CSV/SIF path, or ``"wordnet"``). Unused for ``wordnet``.
        graph_format: ``csv``, ``sif`` or ``wordnet``; inferred from ``graph`` when None.
        depth: Maximal number of hops (positive).
        workers: Size of the worker pool (positive).
        retries: Extra attempts per seed on transient graph failures.
        delimiter: Output field separator (single character).
        id_pattern: Regular expression valid synset ids must match.

    """

    synsets: str
    neighbours: str
    graph: str | None = None
    graph_format: str | None = None
    depth: int = 2
    workers: int = field(default_factory=_default_workers)
    retries: int = 0
    delimiter: str = "\t"
    id_pattern: str | None = None

    def __post_init__(self):
        if not self.graph and not self.graph_format:
            raise ValueError("a graph path is required unless graph_format is 'wordnet'")
        fmt = self.graph_format or infer_graph_format(self.graph)
        object.__setattr__(self, "graph_format", fmt)
        if fmt not in GRAPH_FORMATS:
            raise ValueError(f"graph_format must be one of {GRAPH_FORMATS}, got {fmt!r}")
        if fmt != "wordnet" and not self.graph:
            raise ValueError(f"a graph path is required for format {fmt!r}")
        for name in ("depth", "workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if isinstance(self.retries, bool) or not isinstance(self.retries, int) or self.retries < 0:
            raise ValueError(f"retries must be a non-negative integer, got {self.retries!r}")
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")

    @classmethod
    def from_yaml(cls, path, **overrides) -> ExtractConfig:
        """Load settings from a YAML mapping; non-None ``overrides`` win."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"{path}: unknown setting(s) {sorted(unknown)}")
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    def replace(self, **changes) -> ExtractConfig:
        return dataclasses.replace(self, **changes)


def load_graph(config: ExtractConfig):
    """Build the graph-access backend described by ``config``."""
    fmt = config.graph_format
    if fmt == "wordnet":
        from .adapters.wordnet_adapter import WordNetGraph

        logger.info("Using the NLTK WordNet corpus")
        return WordNetGraph()
    if fmt == "sif":
        from .io.SIF_io import from_sif

        return from_sif(config.graph, id_pattern=config.id_pattern)

    from .core.graph import LexicalGraph
    from .io.csv_io import load_csv_to_graph

    return load_csv_to_graph(config.graph, graph=LexicalGraph(id_pattern=config.id_pattern))
