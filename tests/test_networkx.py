import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

import pytest

nx = pytest.importorskip("networkx")

from lexnet.adapters.networkx_adapter import from_nx, to_nx
from lexnet.algorithms.traversal import walk
from lexnet.core.pointers import Direction

from .helpers import assert_graphs_equal


class TestNetworkXAdapter:
    def test_to_nx(self, taxonomy):
        G = to_nx(taxonomy)
        assert isinstance(G, nx.MultiDiGraph)
        assert set(G.nodes) == set(taxonomy.synsets())
        assert G.number_of_edges() == taxonomy.number_of_edges()
        data = G.get_edge_data("dog", "animal")["hypernym"]
        assert data == {"relation": "hypernym", "direction": "BROADER"}
        assert G.nodes["dog"]["lemma"] == "dog"

    def test_to_nx_direction_filter(self, taxonomy):
        G = to_nx(taxonomy, directions=[Direction.BROADER])
        assert G.number_of_edges() == 4
        assert "tail" in G.nodes

    def test_round_trip(self, taxonomy):
        G2 = from_nx(to_nx(taxonomy))
        assert_graphs_equal(taxonomy, G2)

    def test_from_plain_digraph(self):
        D = nx.DiGraph()
        D.add_edge("S", "A", direction="BROADER")
        D.add_edge("S", "B")
        G = from_nx(D)
        assert walk(G, "S", 1) == {"A": 1}
        assert G.edges("S", Direction.OTHER)[0].relation == "related"

    def test_from_undirected(self):
        U = nx.Graph()
        U.add_edge("a", "b", relation="similar_to")
        G = from_nx(U)
        assert G.successors("a") == ["b"]
        assert G.successors("b") == ["a"]

    def test_multigraph_keys_as_relations(self):
        M = nx.MultiDiGraph()
        M.add_edge("S", "A", key="hyponym")
        G = from_nx(M)
        assert walk(G, "S", 1) == {"A": -1}
