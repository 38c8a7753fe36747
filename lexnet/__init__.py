# lexnet/__init__.py
"""lexnet: ego networks of lexical-semantic graphs, single import."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "adapters": "lexnet.adapters",
    "actions": "lexnet.actions",
    "algorithms": "lexnet.algorithms",
    "core": "lexnet.core",
    "io": "lexnet.io",
    "networkx": "lexnet.adapters.networkx_adapter",
    "wordnet": "lexnet.adapters.wordnet_adapter",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "LexicalGraph": ("lexnet.core.graph", "LexicalGraph"),
    "Synset": ("lexnet.core.graph", "Synset"),
    "GraphAccess": ("lexnet.core.graph", "GraphAccess"),
    "Direction": ("lexnet.core.pointers", "Direction"),
    "Edge": ("lexnet.core.pointers", "Edge"),
    "LexnetError": ("lexnet.core.errors", "LexnetError"),
    "InvalidSynsetIDError": ("lexnet.core.errors", "InvalidSynsetIDError"),
    "GraphAccessError": ("lexnet.core.errors", "GraphAccessError"),
    "OutputWriteError": ("lexnet.core.errors", "OutputWriteError"),
    # Walk
    "walk": ("lexnet.algorithms.traversal", "walk"),
    "walk_many": ("lexnet.algorithms.traversal", "walk_many"),
    # Extraction
    "NeighboursAction": ("lexnet.actions.neighbours", "NeighboursAction"),
    "ExtractConfig": ("lexnet.config", "ExtractConfig"),
    "load_graph": ("lexnet.config", "load_graph"),
    # I/O
    "load_csv_to_graph": ("lexnet.io.csv_io", "load_csv_to_graph"),
    "from_sif": ("lexnet.io.SIF_io", "from_sif"),
    "to_sif": ("lexnet.io.SIF_io", "to_sif"),
    # NetworkX adapter (optional dependency)
    "to_nx": ("lexnet.adapters.networkx_adapter", "to_nx"),
    "from_nx": ("lexnet.adapters.networkx_adapter", "from_nx"),
    # WordNet backend (optional dependency)
    "WordNetGraph": ("lexnet.adapters.wordnet_adapter", "WordNetGraph"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("lexnet")
except PackageNotFoundError:
    __version__ = "0.0.0"
