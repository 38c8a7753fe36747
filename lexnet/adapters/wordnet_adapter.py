from __future__ import annotations

try:
    from nltk.corpus.reader.wordnet import WordNetError
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'nltk' is not installed. "
        "Install with: pip install lexnet[wordnet]"
    ) from e

from ..core.errors import GraphAccessError, InvalidSynsetIDError
from ..core.graph import Synset
from ..core.pointers import Direction, Edge

# relation label -> (Synset method, direction)
WORDNET_RELATIONS = {
    "hypernym": ("hypernyms", Direction.BROADER),
    "instance_hypernym": ("instance_hypernyms", Direction.BROADER),
    "hyponym": ("hyponyms", Direction.NARROWER),
    "instance_hyponym": ("instance_hyponyms", Direction.NARROWER),
    "member_holonym": ("member_holonyms", Direction.OTHER),
    "part_holonym": ("part_holonyms", Direction.OTHER),
    "substance_holonym": ("substance_holonyms", Direction.OTHER),
    "member_meronym": ("member_meronyms", Direction.OTHER),
    "part_meronym": ("part_meronyms", Direction.OTHER),
    "substance_meronym": ("substance_meronyms", Direction.OTHER),
    "attribute": ("attributes", Direction.OTHER),
    "entailment": ("entailments", Direction.OTHER),
    "cause": ("causes", Direction.OTHER),
    "also_see": ("also_sees", Direction.OTHER),
    "verb_group": ("verb_groups", Direction.OTHER),
    "similar_to": ("similar_tos", Direction.OTHER),
}


class WordNetGraph:
    """Graph access over the NLTK WordNet corpus.

    Synsets are identified by their NLTK names (``"dog.n.01"``). The corpus is
    loaded at construction, before any worker thread touches it; a missing
    corpus raises ``GraphAccessError`` there.

    Parameters
    ----------
    wordnet : WordNetCorpusReader, optional
        Reader to query. Defaults to ``nltk.corpus.wordnet``.
    pos : str, optional
        Only accept synsets of this part of speech (``"n"``, ``"v"``, ...).

    """

    def __init__(self, wordnet=None, pos: str | None = None):
        if wordnet is None:
            from nltk.corpus import wordnet
        try:
            wordnet.ensure_loaded()
        except (LookupError, OSError) as e:
            raise GraphAccessError(f"WordNet unavailable: {e}") from e
        self.wordnet = wordnet
        self.pos = pos

    def _resolve(self, synset_id):
        name = str(synset_id or "").strip()
        if not name:
            raise InvalidSynsetIDError(synset_id, "empty identifier")
        try:
            syn = self.wordnet.synset(name)
        except (WordNetError, ValueError) as e:
            raise InvalidSynsetIDError(name, str(e)) from e
        except (LookupError, OSError) as e:
            raise GraphAccessError(f"WordNet unavailable: {e}", name) from e
        if self.pos is not None and syn.pos() != self.pos:
            raise InvalidSynsetIDError(name, f"part of speech is not {self.pos!r}")
        return syn

    def get_synset(self, synset_id):
        syn = self._resolve(synset_id)
        attrs = {
            "pos": syn.pos(),
            "lemmas": [lemma.replace("_", " ") for lemma in syn.lemma_names()],
            "definition": syn.definition(),
        }
        return Synset(syn.name(), attrs)

    def edges(self, synset_id, *directions):
        syn = self._resolve(synset_id)
        wanted = set(directions) if directions else None
        out = []
        for relation, (method, direction) in WORDNET_RELATIONS.items():
            if wanted is not None and direction not in wanted:
                continue
            try:
                targets = getattr(syn, method)()
            except (LookupError, OSError) as e:
                raise GraphAccessError(f"failed to read {relation} relations: {e}", syn.name()) from e
            out.extend(Edge(direction, t.name(), relation) for t in targets)
        return out
