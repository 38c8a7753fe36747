"""Shared fixtures for lexnet tests."""

import pathlib
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from lexnet.core.graph import LexicalGraph  # noqa: E402

# ======================================================================
# FIXTURES
# ======================================================================


@pytest.fixture
def taxonomy():
    """Small noun taxonomy with one non-taxonomic relation.

    entity <- animal <- dog <- puppy
                     <- cat
    dog -- part_meronym --> tail
    """
    G = LexicalGraph()
    G.add_synset("dog", lemma="dog", pos="n")
    G.add_synset("cat", lemma="cat", pos="n")
    for child, parent in [("animal", "entity"), ("dog", "animal"), ("cat", "animal"), ("puppy", "dog")]:
        G.add_edge(child, parent, "hypernym")
        G.add_edge(parent, child, "hyponym")
    G.add_edge("dog", "tail", "part_meronym")
    return G


@pytest.fixture
def cycle_graph():
    """S -> A (hypernym), A -> S (hyponym), A -> D (hypernym)."""
    G = LexicalGraph()
    G.add_edge("S", "A", "hypernym")
    G.add_edge("A", "S", "hyponym")
    G.add_edge("A", "D", "hypernym")
    return G


@pytest.fixture
def tmpdir_fixture():
    """Temporary directory for file I/O (input/output) tests."""
    tmpdir = Path(tempfile.mkdtemp())
    yield tmpdir
    shutil.rmtree(tmpdir)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
