"""Ego-network extraction over the hypernym/hyponym relations of a lexical graph.

The walk is a breadth-first traversal bounded by ``depth``. Every reached
synset is annotated with a signed distance: the magnitude is the number of
hops from the seed, the sign is the direction of the *first* hop (``+`` for a
hypernym, ``-`` for a hyponym). The sign chosen at the seed is inherited by the
whole subtree discovered through that first hop, whatever relations follow.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from ..core.pointers import TAXONOMIC, Direction


def _check_depth(depth) -> int:
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise TypeError(f"depth must be an int, got {type(depth).__name__}")
    if depth < 1:
        raise ValueError(f"depth must be positive, got {depth}")
    return depth


def walk(graph, source, depth: int) -> dict[str, int]:
    """Extract the ego network of ``source`` up to ``depth`` hops.

    Parameters
    --
    graph : GraphAccess
        Anything exposing ``get_synset(id)`` and ``edges(id, *directions)``.
    source : str
        Seed synset identifier.
    depth : int
        Maximal number of hops (``>= 1``).

    Returns
    ---
    dict[str, int]
        Neighbour id -> signed distance, in discovery order. The seed itself is
        never included; an isolated seed yields ``{}``.

    Raises
    --
    InvalidSynsetIDError
        If the seed does not resolve.
    GraphAccessError
        If the backend fails while the walk is running. Nothing partial is
        returned in that case.

    Notes
    -
    First discovery wins: a synset reachable through both a hypernym and a
    hyponym path keeps the sign of whichever path the BFS reaches first.

    """
    _check_depth(depth)
    origin = graph.get_synset(source).id

    neighbours = {origin: 0}
    queue = deque([origin])

    while queue:
        synset_id = queue.popleft()
        step = neighbours[synset_id]
        if abs(step) >= depth:
            continue
        for edge in graph.edges(synset_id, *TAXONOMIC):
            if edge.direction not in TAXONOMIC or edge.target in neighbours:
                continue
            if step == 0:
                level = 1 if edge.direction is Direction.BROADER else -1
            else:
                level = (1 if step > 0 else -1) * (abs(step) + 1)
            neighbours[edge.target] = level
            queue.append(edge.target)

    del neighbours[origin]
    return neighbours


def walk_many(graph, sources: Iterable[str], depth: int) -> Iterator[tuple[str, dict[str, int]]]:
    """Sequentially walk several seeds, yielding ``(source, neighbours)``."""
    _check_depth(depth)
    for source in sources:
        yield source, walk(graph, source, depth)


# Traversal (neighbors)
class Traversal:
    """Directional neighbour queries mixed into ``LexicalGraph``.

    Expects ``_out`` / ``_in`` (synset id -> edge ids), ``edge_definitions``
    (edge id -> (source, target, relation)) and ``edge_direction`` (edge id ->
    Direction) on the host class.
    """

    def _filter_edges(self, edge_ids, directions):
        wanted = _as_directions(directions)
        for eid in edge_ids:
            if wanted is None or self.edge_direction[eid] in wanted:
                yield eid

    def successors(self, synset_id, directions=None):
        """Targets of outgoing relations of ``synset_id``.

        Parameters
        --
        synset_id : str
        directions : Direction or iterable of Direction, optional
            Restrict to these relation families. All relations when omitted.

        Returns
        ---
        list[str]
            Unique targets in edge insertion order.

        """
        if synset_id not in self.entity_to_idx:
            return []
        out = {}
        for eid in self._filter_edges(self._out.get(synset_id, ()), directions):
            out[self.edge_definitions[eid][1]] = None
        return list(out)

    def predecessors(self, synset_id, directions=None):
        """Sources of incoming relations of ``synset_id``.

        Returns
        ---
        list[str]

        """
        if synset_id not in self.entity_to_idx:
            return []
        inn = {}
        for eid in self._filter_edges(self._in.get(synset_id, ()), directions):
            inn[self.edge_definitions[eid][0]] = None
        return list(inn)

    def neighbors(self, synset_id, directions=None):
        """Union of successors and predecessors, successors first."""
        out = dict.fromkeys(self.successors(synset_id, directions))
        out.update(dict.fromkeys(self.predecessors(synset_id, directions)))
        out.pop(synset_id, None)
        return list(out)

    def hypernyms(self, synset_id):
        return self.successors(synset_id, Direction.BROADER)

    def hyponyms(self, synset_id):
        return self.successors(synset_id, Direction.NARROWER)

    def ego_network(self, source, depth: int = 1):
        """Signed-distance ego network of ``source``; see :func:`walk`."""
        return walk(self, source, depth)


def _as_directions(directions):
    if directions is None:
        return None
    if isinstance(directions, (Direction, str)):
        return {Direction.from_relation(directions)}
    return {Direction.from_relation(d) for d in directions}
