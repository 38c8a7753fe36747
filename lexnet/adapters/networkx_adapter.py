from __future__ import annotations

try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install lexnet[networkx]"
    ) from e

from ..core.graph import LexicalGraph
from ..core.pointers import Direction


def to_nx(graph: LexicalGraph, *, directions=None) -> nx.MultiDiGraph:
    """Export a ``LexicalGraph`` to a NetworkX ``MultiDiGraph``.

    Parameters
    ----------
    graph : LexicalGraph
        Source graph instance.
    directions : iterable of Direction, optional
        Keep only relations of these families (all when omitted). Synsets are
        always exported.

    Returns
    -------
    networkx.MultiDiGraph
        Nodes carry the synset attributes; edges are keyed by relation and
        carry ``relation`` and ``direction`` (enum name) attributes.

    """
    wanted = None if directions is None else {Direction.from_relation(d) for d in directions}
    G = nx.MultiDiGraph()
    for sid in graph.synsets():
        G.add_node(sid, **graph.get_synset_attrs(sid))
    for source, target, relation, direction in graph.edge_list():
        if wanted is not None and direction not in wanted:
            continue
        G.add_edge(source, target, key=relation, relation=relation, direction=direction.name)
    return G


def from_nx(
    nxG,
    *,
    relation_attr: str = "relation",
    default_relation: str = "related",
    id_pattern=None,
) -> LexicalGraph:
    """Import a NetworkX graph into a ``LexicalGraph``.

    The relation label is read from ``relation_attr``; failing that, from a
    ``direction`` attribute (``"BROADER"`` / ``"NARROWER"``), else from the
    multigraph key when it is a string. Undirected graphs are imported with
    both orientations of every edge. Node attributes become synset attributes.
    """
    G = LexicalGraph(id_pattern=id_pattern)
    for node, data in nxG.nodes(data=True):
        G.add_synset(str(node), **dict(data))

    if nxG.is_multigraph():
        triples = ((u, v, k, d) for u, v, k, d in nxG.edges(keys=True, data=True))
    else:
        triples = ((u, v, None, d) for u, v, d in nxG.edges(data=True))

    for u, v, key, data in triples:
        relation = data.get(relation_attr)
        if relation is None and "direction" in data:
            relation = Direction.from_relation(data["direction"])
        if relation is None and isinstance(key, str):
            relation = key
        if relation is None:
            relation = default_relation
        G.add_edge(str(u), str(v), relation)
        if not nxG.is_directed():
            G.add_edge(str(v), str(u), relation)
    return G
