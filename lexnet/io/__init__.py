"""lexnet.io: consolidated I/O API with lazy symbol loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_lazy_symbols: dict[str, tuple[str, str]] = {
    # CSV edge lists
    "load_csv_to_graph": ("lexnet.io.csv_io", "load_csv_to_graph"),
    "from_dataframe": ("lexnet.io.csv_io", "from_dataframe"),
    "export_edge_list_csv": ("lexnet.io.csv_io", "export_edge_list_csv"),
    # Extraction inputs / outputs
    "read_synsets": ("lexnet.io.csv_io", "read_synsets"),
    "format_neighbours": ("lexnet.io.csv_io", "format_neighbours"),
    "parse_neighbours": ("lexnet.io.csv_io", "parse_neighbours"),
    "read_neighbours": ("lexnet.io.csv_io", "read_neighbours"),
    "RecordWriter": ("lexnet.io.csv_io", "RecordWriter"),
    # SIF
    "to_sif": ("lexnet.io.SIF_io", "to_sif"),
    "from_sif": ("lexnet.io.SIF_io", "from_sif"),
}

__all__ = sorted(_lazy_symbols)


def __getattr__(name: str) -> Any:
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))
