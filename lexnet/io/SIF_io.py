from __future__ import annotations

import logging
from pathlib import Path

from ..core.graph import LexicalGraph

logger = logging.getLogger(__name__)


def _split_sif_line(line: str, delimiter: str | None) -> list[str]:
    if delimiter is not None:
        return [t.strip() for t in line.rstrip("\n\r").split(delimiter) if t.strip() != ""]
    if "\t" in line:
        return [t.strip() for t in line.rstrip("\n\r").split("\t") if t.strip() != ""]
    return line.strip().split()


def _coerce_attr(value: str):
    v = value.strip()
    low = v.lower()
    if low in ("true", "false"):
        return low == "true"
    try:
        return int(v)
    except ValueError:
        pass
    try:
        return float(v)
    except ValueError:
        return v


def to_sif(
    graph: LexicalGraph,
    path,
    *,
    write_nodes: bool = True,
    nodes_path=None,
) -> None:
    """Export a lexical graph to SIF (Simple Interaction Format).

    One ``source<TAB>relation<TAB>target`` line per relation. Synsets without
    any relation are written as single-token lines so they survive a round
    trip.

    Args:
        path: Output SIF file path
        write_nodes: Whether to write a ``.nodes`` sidecar with synset attributes
        nodes_path: Custom path for the sidecar (default: path + ".nodes")

    """
    touched = set()
    with open(path, "w", encoding="utf-8") as f:
        for source, target, relation, _direction in graph.edge_list():
            f.write(f"{source}\t{relation}\t{target}\n")
            touched.add(source)
            touched.add(target)
        for sid in graph.synsets():
            if sid not in touched:
                f.write(f"{sid}\n")

    if write_nodes:
        sidecar = nodes_path if nodes_path is not None else (str(path) + ".nodes")
        with open(sidecar, "w", encoding="utf-8") as nf:
            nf.write("# nodes sidecar for SIF; format: <synset_id>\tkey=value ...\n")
            for sid in graph.synsets():
                attrs = graph.get_synset_attrs(sid)
                if not attrs:
                    continue
                kv = "\t".join(f"{k}={v}" for k, v in attrs.items() if v is not None)
                nf.write(f"{sid}\t{kv}\n")


def from_sif(
    path,
    graph: LexicalGraph | None = None,
    *,
    nodes_path=None,
    delimiter: str | None = None,
    id_pattern=None,
) -> LexicalGraph:
    """Load a SIF file into a ``LexicalGraph``.

    Lines are ``source relation target [target ...]``; a single token declares
    an isolated synset. Blank lines and ``#`` comments are skipped. A sidecar
    ``<path>.nodes`` is read when present (or when ``nodes_path`` is given).

    Args:
        path: Input SIF file path
        graph: Graph to mutate (a fresh one is created when omitted)
        nodes_path: Synset attribute sidecar
        delimiter: Field separator; tabs then whitespace when None
        id_pattern: Identifier pattern for a freshly created graph

    Returns:
        LexicalGraph

    Raises:
        ValueError: On a two-token line (relation without target).

    """
    G = graph if graph is not None else LexicalGraph(id_pattern=id_pattern)

    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            toks = _split_sif_line(line, delimiter)
            if len(toks) == 1:
                G.add_synset(toks[0])
                continue
            if len(toks) == 2:
                raise ValueError(f"{path}:{lineno}: relation {toks[1]!r} has no target")
            source, relation, *targets = toks
            for target in targets:
                G.add_edge(source, target, relation)

    sidecar = Path(nodes_path) if nodes_path is not None else Path(str(path) + ".nodes")
    if sidecar.exists():
        _read_nodes_sidecar(G, sidecar)
    elif nodes_path is not None:
        raise FileNotFoundError(sidecar)

    logger.info(
        "Loaded %s synset(s) and %s relation(s) from %s",
        G.number_of_synsets(),
        G.number_of_edges(),
        path,
    )
    return G


def _read_nodes_sidecar(G: LexicalGraph, sidecar: Path) -> None:
    with open(sidecar, encoding="utf-8") as nf:
        for line in nf:
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            toks = line.rstrip("\n\r").split("\t")
            sid = toks[0].strip()
            attrs = {}
            for tok in toks[1:]:
                if "=" not in tok:
                    continue
                k, v = tok.split("=", 1)
                attrs[k.strip()] = _coerce_attr(v)
            G.add_synset(sid, **attrs)
