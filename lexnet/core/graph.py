from __future__ import annotations

import re
from collections import defaultdict
from typing import NamedTuple, Protocol, runtime_checkable

import numpy as np
import polars as pl
import scipy.sparse as sp

from ..algorithms.traversal import Traversal
from .errors import InvalidSynsetIDError
from .pointers import Direction, Edge

# BabelNet synset ids look like ``bn:00015267n``.
BABELNET_ID_PATTERN = r"bn:\d{8}[nvar]"


class Synset(NamedTuple):
    id: str
    attributes: dict


@runtime_checkable
class GraphAccess(Protocol):
    """What the walk needs from a lexical graph backend."""

    def get_synset(self, synset_id) -> Synset: ...

    def edges(self, synset_id, *directions) -> list[Edge]: ...


# ===================================


class LexicalGraph(Traversal):
    """In-memory lexical-semantic graph of synsets and typed relations.

    Synsets are vertices identified by opaque string ids. Relations are
    directed edges carrying a relation label (``"hypernym"``, ``"meronym"``,
    ...) and the ``Direction`` derived from it. Outgoing edges of a synset are
    kept in insertion order, which makes every traversal deterministic.

    Parameters
    --
    id_pattern : str or re.Pattern, optional
        When given, identifiers must fully match it to be considered valid
        (see ``BABELNET_ID_PATTERN``).

    Notes
    -
    - A ``(source, relation, target)`` triple is stored once; re-adding it
      returns the existing edge id.
    - Vertex attributes are **pure**: the ``synset_id`` key is reserved.

    See Also

    add_synset, add_edge, edges, ego_network, vertices_view, edges_view

    """

    _vertex_RESERVED = {"synset_id"}

    # Construction

    def __init__(self, id_pattern=None):
        if isinstance(id_pattern, str):
            id_pattern = re.compile(id_pattern)
        self.id_pattern = id_pattern

        # Entity mappings
        self.entity_to_idx = {}  # synset_id -> row index
        self.idx_to_entity = {}  # row index -> synset_id
        self._vertex_attrs = {}  # synset_id -> dict

        # Edge mappings
        self.edge_definitions = {}  # edge_id -> (source, target, relation)
        self.edge_direction = {}  # edge_id -> Direction
        self._edge_keys = {}  # (source, relation, target) -> edge_id
        self._out = defaultdict(list)  # synset_id -> [edge_id, ...]
        self._in = defaultdict(list)  # synset_id -> [edge_id, ...]
        self._next_edge = 0

    def __repr__(self):
        return (
            f"LexicalGraph(synsets={self.number_of_synsets()}, "
            f"edges={self.number_of_edges()})"
        )

    def __len__(self):
        return len(self.entity_to_idx)

    def __contains__(self, synset_id):
        return synset_id in self.entity_to_idx

    # Build graph

    def add_synset(self, synset_id, **attributes):
        """Add (or upsert) a synset.

        Parameters
        --
        synset_id : str
            Synset identifier.
        **attributes
            Pure vertex attributes to store (lemma, language, ...).

        Returns
        ---
        str
            The synset id (echoed).

        Raises
        --
        InvalidSynsetIDError
            If the id is empty or does not match ``id_pattern``.

        """
        synset_id = self._validate_id(synset_id)
        if synset_id not in self.entity_to_idx:
            idx = len(self.entity_to_idx)
            self.entity_to_idx[synset_id] = idx
            self.idx_to_entity[idx] = synset_id
            self._vertex_attrs[synset_id] = {}
        if attributes:
            self.set_synset_attrs(synset_id, **attributes)
        return synset_id

    def add_synsets(self, synsets, **attributes):
        """Add many synsets. Items are ids or ``(id, attrs)`` pairs."""
        added = []
        for item in synsets:
            if isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[1], dict):
                sid, attrs = item
                added.append(self.add_synset(sid, **{**attributes, **attrs}))
            else:
                added.append(self.add_synset(item, **attributes))
        return added

    def add_edge(self, source, target, relation="hypernym"):
        """Add a typed relation ``source -> target``.

        Parameters
        --
        source : str
        target : str
        relation : str or Direction, optional
            Relation label. A bare ``Direction`` is stored under its
            canonical label (``hypernym`` / ``hyponym`` / ``related``).

        Returns
        ---
        str
            The edge id (new or existing).

        """
        if isinstance(relation, Direction):
            relation = _CANONICAL_RELATION[relation]
        relation = str(relation).strip()
        if not relation:
            raise ValueError("relation must be a non-empty label")

        source = self.add_synset(source)
        target = self.add_synset(target)

        key = (source, relation, target)
        existing = self._edge_keys.get(key)
        if existing is not None:
            return existing

        edge_id = f"edge_{self._next_edge}"
        self._next_edge += 1
        self.edge_definitions[edge_id] = (source, target, relation)
        self.edge_direction[edge_id] = Direction.from_relation(relation)
        self._edge_keys[key] = edge_id
        self._out[source].append(edge_id)
        self._in[target].append(edge_id)
        return edge_id

    def add_edges(self, triples):
        """Add ``(source, target, relation)`` triples; returns the edge ids."""
        return [self.add_edge(s, t, r) for s, t, r in triples]

    def remove_edge(self, edge_id):
        if edge_id not in self.edge_definitions:
            raise KeyError(f"edge {edge_id} not found")
        source, target, relation = self.edge_definitions.pop(edge_id)
        del self.edge_direction[edge_id]
        del self._edge_keys[(source, relation, target)]
        self._out[source].remove(edge_id)
        self._in[target].remove(edge_id)

    # Graph access

    def _validate_id(self, synset_id):
        if synset_id is None:
            raise InvalidSynsetIDError(synset_id, "empty identifier")
        synset_id = str(synset_id).strip()
        if not synset_id:
            raise InvalidSynsetIDError(synset_id, "empty identifier")
        if self.id_pattern is not None and not self.id_pattern.fullmatch(synset_id):
            raise InvalidSynsetIDError(
                synset_id, f"does not match pattern {self.id_pattern.pattern!r}"
            )
        return synset_id

    def get_synset(self, synset_id):
        """Resolve a synset id.

        Raises
        --
        InvalidSynsetIDError
            If the id is malformed or not in the graph.

        """
        synset_id = self._validate_id(synset_id)
        if synset_id not in self.entity_to_idx:
            raise InvalidSynsetIDError(synset_id, "not found in graph")
        return Synset(synset_id, dict(self._vertex_attrs[synset_id]))

    def has_synset(self, synset_id):
        return synset_id in self.entity_to_idx

    def edges(self, synset_id, *directions):
        """Outgoing relations of ``synset_id`` restricted to ``directions``.

        Parameters
        --
        synset_id : str
        *directions : Direction
            Relation families to keep. All relations when omitted.

        Returns
        ---
        list[Edge]
            In insertion order.

        """
        synset_id = self.get_synset(synset_id).id
        wanted = set(directions) if directions else None
        out = []
        for eid in self._out.get(synset_id, ()):
            direction = self.edge_direction[eid]
            if wanted is None or direction in wanted:
                _, target, relation = self.edge_definitions[eid]
                out.append(Edge(direction, target, relation))
        return out

    # Attributes

    def set_synset_attrs(self, synset_id, **attrs):
        if synset_id not in self.entity_to_idx:
            raise KeyError(f"synset {synset_id!r} not found")
        clean = {k: v for k, v in attrs.items() if k not in self._vertex_RESERVED}
        self._vertex_attrs[synset_id].update(clean)

    def get_synset_attrs(self, synset_id):
        if synset_id not in self.entity_to_idx:
            raise KeyError(f"synset {synset_id!r} not found")
        return dict(self._vertex_attrs[synset_id])

    def get_attr_synset(self, synset_id, key, default=None):
        return self._vertex_attrs.get(synset_id, {}).get(key, default)

    # Inspection

    def synsets(self):
        """All synset ids, in insertion order.

        Returns
        ---
        list[str]

        """
        return list(self.entity_to_idx)

    def edge_list(self):
        """Materialize ``(source, target, relation, direction)`` tuples.

        Returns
        ---
        list[tuple[str, str, str, Direction]]

        """
        return [
            (s, t, r, self.edge_direction[eid])
            for eid, (s, t, r) in self.edge_definitions.items()
        ]

    def number_of_synsets(self):
        return len(self.entity_to_idx)

    def number_of_edges(self):
        return len(self.edge_definitions)

    def vertices_view(self):
        """Polars DF [DataFrame] with one row per synset and its attributes."""
        if not self.entity_to_idx:
            return pl.DataFrame(schema={"synset_id": pl.Utf8})
        rows = [{"synset_id": sid, **self._vertex_attrs[sid]} for sid in self.entity_to_idx]
        return pl.from_dicts(rows, infer_schema_length=None)

    def edges_view(self):
        """Polars DF [DataFrame] with one row per relation."""
        schema = {
            "edge_id": pl.Utf8,
            "source": pl.Utf8,
            "target": pl.Utf8,
            "relation": pl.Utf8,
            "direction": pl.Utf8,
        }
        if not self.edge_definitions:
            return pl.DataFrame(schema=schema)
        eids = list(self.edge_definitions)
        return pl.DataFrame(
            {
                "edge_id": eids,
                "source": [self.edge_definitions[e][0] for e in eids],
                "target": [self.edge_definitions[e][1] for e in eids],
                "relation": [self.edge_definitions[e][2] for e in eids],
                "direction": [self.edge_direction[e].value for e in eids],
            },
            schema=schema,
        )

    def adjacency(self, directions=None):
        """Sparse adjacency matrix over the selected relation families.

        Parameters
        --
        directions : iterable of Direction, optional
            Relation families to include. All relations when omitted.

        Returns
        ---
        tuple[scipy.sparse.csr_matrix, list[str]]
            ``A[i, j]`` counts the relations from synset ``i`` to ``j``; the
            list maps row/column indices back to synset ids.

        """
        wanted = None if directions is None else {Direction.from_relation(d) for d in directions}
        rows, cols = [], []
        for eid, (s, t, _) in self.edge_definitions.items():
            if wanted is None or self.edge_direction[eid] in wanted:
                rows.append(self.entity_to_idx[s])
                cols.append(self.entity_to_idx[t])
        n = len(self.entity_to_idx)
        data = np.ones(len(rows), dtype=np.int32)
        A = sp.csr_matrix(
            (data, (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
            shape=(n, n),
        )
        A.sum_duplicates()
        index = [self.idx_to_entity[i] for i in range(n)]
        return A, index

    def taxonomy_summary(self):
        """Shape of the hypernym/hyponym hierarchy.

        Returns
        ---
        dict[str, int]
            ``synsets``, ``relations``, ``broader`` and ``narrower`` relation
            counts, ``roots`` (hyponyms but no hypernym), ``leaves`` (a hypernym
            but no hyponyms), ``detached`` (no taxonomic relation at all) and
            ``max_hyponyms``.

        """
        up = np.asarray(self.adjacency([Direction.BROADER])[0].sum(axis=1)).ravel()
        down = np.asarray(self.adjacency([Direction.NARROWER])[0].sum(axis=1)).ravel()
        return {
            "synsets": self.number_of_synsets(),
            "relations": self.number_of_edges(),
            "broader": int(up.sum()),
            "narrower": int(down.sum()),
            "roots": int(np.count_nonzero((up == 0) & (down > 0))),
            "leaves": int(np.count_nonzero((down == 0) & (up > 0))),
            "detached": int(np.count_nonzero((up == 0) & (down == 0))),
            "max_hyponyms": int(down.max()) if down.size else 0,
        }

    def copy(self):
        G = LexicalGraph(id_pattern=self.id_pattern)
        for sid in self.entity_to_idx:
            G.add_synset(sid, **self._vertex_attrs[sid])
        for s, t, r in self.edge_definitions.values():
            G.add_edge(s, t, r)
        return G


_CANONICAL_RELATION = {
    Direction.BROADER: "hypernym",
    Direction.NARROWER: "hyponym",
    Direction.OTHER: "related",
}
