"""Relation direction tags for the lexical graph.

Only two families of relations are visible to the ego-network walk: the
hypernym family (``BROADER``) and the hyponym family (``NARROWER``). Every
other relation (meronymy, antonymy, gloss links, ...) is tagged ``OTHER``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple


class Direction(Enum):
    BROADER = "BROADER"
    NARROWER = "NARROWER"
    OTHER = "OTHER"

    @classmethod
    def from_relation(cls, relation: Any) -> Direction:
        """Map a relation name (or pointer symbol) to its direction.

        Parameters
        --
        relation : str or Direction
            Relation label such as ``"hypernym"``, ``"instance_hyponym"`` or a
            WordNet pointer symbol (``"@"``, ``"~i"``). A ``Direction`` is
            returned unchanged.

        Returns
        ---
        Direction

        """
        if isinstance(relation, Direction):
            return relation
        if relation is None:
            return cls.OTHER
        key = str(relation).strip()
        if key in _BROADER_SYMBOLS:
            return cls.BROADER
        if key in _NARROWER_SYMBOLS:
            return cls.NARROWER
        key = key.lower().replace("-", "_").replace(" ", "_")
        if key in BROADER_RELATIONS or key.upper() == cls.BROADER.value:
            return cls.BROADER
        if key in NARROWER_RELATIONS or key.upper() == cls.NARROWER.value:
            return cls.NARROWER
        return cls.OTHER


BROADER_RELATIONS = frozenset(
    {
        "hypernym",
        "hypernyms",
        "instance_hypernym",
        "instance_hypernyms",
        "hypernym_instance",
        "any_hypernym",
        "is_a",
    }
)
NARROWER_RELATIONS = frozenset(
    {
        "hyponym",
        "hyponyms",
        "instance_hyponym",
        "instance_hyponyms",
        "hyponym_instance",
        "any_hyponym",
    }
)
_BROADER_SYMBOLS = frozenset({"@", "@i"})
_NARROWER_SYMBOLS = frozenset({"~", "~i"})

# The walk only ever asks for these two.
TAXONOMIC = (Direction.BROADER, Direction.NARROWER)


class Edge(NamedTuple):
    """One outgoing relation of a synset."""

    direction: Direction
    target: str
    relation: str
