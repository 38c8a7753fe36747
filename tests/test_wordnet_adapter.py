import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

import pytest

pytest.importorskip("nltk")

from nltk.corpus.reader.wordnet import WordNetError

from lexnet.adapters.wordnet_adapter import WordNetGraph
from lexnet.algorithms.traversal import walk
from lexnet.core.errors import GraphAccessError, InvalidSynsetIDError
from lexnet.core.graph import GraphAccess
from lexnet.core.pointers import TAXONOMIC, Direction


class FakeSynset:
    def __init__(self, name, pos="n"):
        self._name = name
        self._pos = pos
        self.links = {}

    def name(self):
        return self._name

    def pos(self):
        return self._pos

    def lemma_names(self):
        return [self._name.split(".")[0]]

    def definition(self):
        return f"definition of {self._name}"

    def __getattr__(self, method):
        if method.startswith("_"):
            raise AttributeError(method)
        return lambda: list(self.links.get(method, []))


class FakeWordNet:
    """Just enough of WordNetCorpusReader for the adapter."""

    def __init__(self):
        self.synsets = {}
        self.available = True
        self.loads = 0

    def ensure_loaded(self):
        if not self.available:
            raise LookupError("Resource wordnet not found.")
        self.loads += 1

    def add(self, name, pos="n"):
        self.synsets[name] = FakeSynset(name, pos)
        return self.synsets[name]

    def link(self, source, method, target):
        self.synsets[source].links.setdefault(method, []).append(self.synsets[target])

    def synset(self, name):
        if not self.available:
            raise LookupError("Resource wordnet not found.")
        if name.count(".") < 2:
            raise ValueError(f"not a synset name: {name!r}")
        if name not in self.synsets:
            raise WordNetError(f"no synset {name!r}")
        return self.synsets[name]


@pytest.fixture
def fake_wordnet():
    wn = FakeWordNet()
    for name in ("entity.n.01", "animal.n.01", "dog.n.01", "puppy.n.01", "tail.n.01", "fido.n.01"):
        wn.add(name)
    wn.add("run.v.01", pos="v")
    wn.link("dog.n.01", "hypernyms", "animal.n.01")
    wn.link("animal.n.01", "hypernyms", "entity.n.01")
    wn.link("animal.n.01", "hyponyms", "dog.n.01")
    wn.link("dog.n.01", "hyponyms", "puppy.n.01")
    wn.link("dog.n.01", "instance_hyponyms", "fido.n.01")
    wn.link("dog.n.01", "part_meronyms", "tail.n.01")
    return wn


class TestWordNetGraph:
    def test_protocol(self, fake_wordnet):
        assert isinstance(WordNetGraph(fake_wordnet), GraphAccess)

    def test_get_synset(self, fake_wordnet):
        syn = WordNetGraph(fake_wordnet).get_synset("dog.n.01")
        assert syn.id == "dog.n.01"
        assert syn.attributes["pos"] == "n"
        assert syn.attributes["lemmas"] == ["dog"]

    def test_edges(self, fake_wordnet):
        G = WordNetGraph(fake_wordnet)
        edges = G.edges("dog.n.01", *TAXONOMIC)
        assert [(e.direction, e.target) for e in edges] == [
            (Direction.BROADER, "animal.n.01"),
            (Direction.NARROWER, "puppy.n.01"),
            (Direction.NARROWER, "fido.n.01"),
        ]
        other = G.edges("dog.n.01", Direction.OTHER)
        assert [(e.relation, e.target) for e in other] == [("part_meronym", "tail.n.01")]

    def test_walk(self, fake_wordnet):
        G = WordNetGraph(fake_wordnet)
        assert walk(G, "dog.n.01", 2) == {
            "animal.n.01": 1,
            "puppy.n.01": -1,
            "fido.n.01": -1,
            "entity.n.01": 2,
        }

    def test_invalid_ids(self, fake_wordnet):
        G = WordNetGraph(fake_wordnet)
        for bad in ("dog", "unicorn.n.01", ""):
            with pytest.raises(InvalidSynsetIDError):
                G.get_synset(bad)

    def test_pos_filter(self, fake_wordnet):
        G = WordNetGraph(fake_wordnet, pos="n")
        with pytest.raises(InvalidSynsetIDError):
            G.get_synset("run.v.01")

    def test_corpus_is_loaded_up_front(self, fake_wordnet):
        WordNetGraph(fake_wordnet)
        assert fake_wordnet.loads == 1

    def test_missing_corpus(self, fake_wordnet):
        fake_wordnet.available = False
        with pytest.raises(GraphAccessError):
            WordNetGraph(fake_wordnet)

    def test_corpus_lost_mid_walk(self, fake_wordnet):
        G = WordNetGraph(fake_wordnet)
        fake_wordnet.available = False
        with pytest.raises(GraphAccessError):
            walk(G, "dog.n.01", 1)
