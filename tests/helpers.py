"""Test doubles and assertion helpers."""

from lexnet.core.errors import GraphAccessError


class FlakyGraph:
    """Wraps a graph; ``edges`` fails for the given ids the first ``failures`` times."""

    def __init__(self, graph, failing, failures=1):
        self.graph = graph
        self.failing = set(failing)
        self.remaining = {sid: failures for sid in failing}
        self.calls = 0

    def get_synset(self, synset_id):
        return self.graph.get_synset(synset_id)

    def edges(self, synset_id, *directions):
        self.calls += 1
        if synset_id in self.failing and self.remaining[synset_id] > 0:
            self.remaining[synset_id] -= 1
            raise GraphAccessError("connection reset", synset_id)
        return self.graph.edges(synset_id, *directions)


class RaisingGraph:
    """Wraps a graph; ``edges`` raises ``error`` for the given ids, every time."""

    def __init__(self, graph, failing, error=AttributeError):
        self.graph = graph
        self.failing = set(failing)
        self.error = error

    def get_synset(self, synset_id):
        return self.graph.get_synset(synset_id)

    def edges(self, synset_id, *directions):
        if synset_id in self.failing:
            raise self.error(f"backend state lost while reading {synset_id}")
        return self.graph.edges(synset_id, *directions)


def assert_graphs_equal(G1, G2, check_attrs=True):
    """Assert two lexical graphs hold the same synsets and relations."""
    assert set(G1.synsets()) == set(G2.synsets()), "Synset sets differ"
    assert G1.number_of_edges() == G2.number_of_edges(), "Edge counts differ"
    assert {(s, t, r) for s, t, r, _ in G1.edge_list()} == {
        (s, t, r) for s, t, r, _ in G2.edge_list()
    }, "Relations differ"
    if check_attrs:
        for sid in G1.synsets():
            assert G1.get_synset_attrs(sid) == G2.get_synset_attrs(sid), f"Synset {sid} attrs differ"
