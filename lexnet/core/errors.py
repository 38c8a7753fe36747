from __future__ import annotations


class LexnetError(Exception):
    """Base class for all lexnet errors."""


class InvalidSynsetIDError(LexnetError, KeyError):
    """The identifier is malformed or does not resolve to a synset."""

    def __init__(self, synset_id, reason: str | None = None):
        self.synset_id = synset_id
        self.reason = reason or "unknown synset"
        super().__init__(synset_id)

    def __str__(self) -> str:
        return f"invalid synset id {self.synset_id!r}: {self.reason}"


class GraphAccessError(LexnetError, OSError):
    """Transient failure of the graph backend while resolving a synset or its edges."""

    def __init__(self, message: str, synset_id=None):
        self.synset_id = synset_id
        super().__init__(message)

    def __str__(self) -> str:
        msg = self.args[0] if self.args else "graph access failed"
        if self.synset_id is not None:
            return f"{msg} (synset {self.synset_id!r})"
        return msg


class OutputWriteError(LexnetError, OSError):
    """A neighbour record could not be persisted."""
