import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

import pytest
from click.testing import CliRunner

from lexnet.cli import cli
from lexnet.io.csv_io import read_neighbours


@pytest.fixture
def files(tmpdir_fixture):
    graph = tmpdir_fixture / "graph.csv"
    graph.write_text(
        "source,relation,target\n"
        "dog,hypernym,animal\n"
        "animal,hypernym,entity\n"
        "dog,hyponym,puppy\n",
        encoding="utf-8",
    )
    seeds = tmpdir_fixture / "synsets.txt"
    seeds.write_text("dog\npuppy\n", encoding="utf-8")
    return graph, seeds, tmpdir_fixture / "neighbours.tsv"


class TestCLI:
    def test_neighbours(self, files):
        graph, seeds, out = files
        result = CliRunner().invoke(
            cli,
            ["neighbours", "--graph", str(graph), "--synsets", str(seeds), "--output", str(out), "--depth", "2", "--workers", "2"],
        )
        assert result.exit_code == 0, result.output
        assert "processed=2 written=1 empty=1 failed=0" in result.output
        assert read_neighbours(out) == {"dog": {"animal": 1, "puppy": -1, "entity": 2}}

    def test_neighbours_with_failures_exits_nonzero(self, files):
        graph, seeds, out = files
        seeds.write_text("dog\nunicorn\n", encoding="utf-8")
        result = CliRunner().invoke(
            cli,
            ["neighbours", "--graph", str(graph), "--synsets", str(seeds), "--output", str(out), "--workers", "1"],
        )
        assert result.exit_code == 1
        assert "failed=1" in result.output
        assert "dog" in read_neighbours(out)

    def test_neighbours_from_yaml(self, files, tmpdir_fixture):
        graph, seeds, out = files
        cfg = tmpdir_fixture / "run.yaml"
        cfg.write_text(
            f"graph: {graph}\nsynsets: {seeds}\nneighbours: {out}\ndepth: 1\nworkers: 1\n",
            encoding="utf-8",
        )
        result = CliRunner().invoke(cli, ["neighbours", "--config", str(cfg)])
        assert result.exit_code == 0, result.output
        assert read_neighbours(out) == {"dog": {"animal": 1, "puppy": -1}}

    def test_neighbours_missing_options(self, files):
        graph, _, _ = files
        result = CliRunner().invoke(cli, ["neighbours", "--graph", str(graph)])
        assert result.exit_code == 2
        assert "--synsets" in result.output

    def test_neighbours_bad_depth(self, files):
        graph, seeds, out = files
        result = CliRunner().invoke(
            cli,
            ["neighbours", "--graph", str(graph), "--synsets", str(seeds), "--output", str(out), "--depth", "0"],
        )
        assert result.exit_code == 1
        assert "depth" in result.output

    def test_walk(self, files):
        graph, _, _ = files
        result = CliRunner().invoke(cli, ["walk", "--graph", str(graph), "--depth", "2", "dog"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["animal\t1", "puppy\t-1", "entity\t2"]

    def test_walk_unknown_synset(self, files):
        graph, _, _ = files
        result = CliRunner().invoke(cli, ["walk", "--graph", str(graph), "unicorn"])
        assert result.exit_code == 1
        assert "unicorn" in result.output

    def test_neighbours_without_graph_is_an_error(self, files):
        _, seeds, out = files
        result = CliRunner().invoke(cli, ["neighbours", "--synsets", str(seeds), "--output", str(out)])
        assert result.exit_code == 1
        assert "graph path is required" in result.output
        assert not out.exists()

    def test_missing_optional_backend(self, files, monkeypatch):
        _, seeds, out = files

        def no_nltk(config):
            raise ModuleNotFoundError("Optional dependency 'nltk' is not installed.")

        monkeypatch.setattr("lexnet.cli.load_graph", no_nltk)
        monkeypatch.setattr("lexnet.config.load_graph", no_nltk)

        result = CliRunner().invoke(cli, ["walk", "--format", "wordnet", "dog.n.01"])
        assert result.exit_code == 1
        assert "nltk" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

        result = CliRunner().invoke(
            cli,
            ["neighbours", "--format", "wordnet", "--synsets", str(seeds), "--output", str(out)],
        )
        assert result.exit_code == 1
        assert "nltk" in result.output

    def test_stats(self, files):
        graph, _, _ = files
        result = CliRunner().invoke(cli, ["stats", "--graph", str(graph)])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "synsets=4",
            "relations=3",
            "broader=2",
            "narrower=1",
            "roots=0",
            "leaves=1",
            "detached=2",
            "max_hyponyms=1",
        ]

    def test_stats_rejects_wordnet(self):
        result = CliRunner().invoke(cli, ["stats", "--graph", "wordnet"])
        assert result.exit_code == 1
        assert "in-memory graph" in result.output
