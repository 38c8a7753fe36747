import logging
import sys

import click

from lexnet.actions.neighbours import NeighboursAction
from lexnet.algorithms.traversal import walk
from lexnet.config import GRAPH_FORMATS, ExtractConfig, load_graph
from lexnet.core.errors import LexnetError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _setup_logging(level: str):
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT, stream=sys.stderr)


@click.group()
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default="INFO")
@click.pass_context
def cli(context, log_level):
    context.ensure_object(dict)
    _setup_logging(log_level)


@cli.command("neighbours")
@click.pass_context
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML settings file")
@click.option("--graph", "graph_path", help="Graph edge list (.csv), SIF file (.sif) or \"wordnet\"")
@click.option("--format", "graph_format", type=click.Choice(GRAPH_FORMATS), help="Graph source format")
@click.option("--synsets", "synsets_path", type=click.Path(dir_okay=False), help="Seed synset ids, one per line")
@click.option("--output", "output_path", type=click.Path(dir_okay=False), help="Neighbours output file")
@click.option("--depth", type=int, help="Graph depth (default: 2)")
@click.option("--workers", type=int, help="Worker threads (default: CPU count)")
@click.option("--retries", type=int, help="Retries per synset on transient graph failures")
@click.option("--delimiter", help="Output field separator (default: tab)")
@click.option("--id-pattern", help="Regular expression valid synset ids must match")
def neighbours_cmd(
    context,
    config_path,
    graph_path,
    graph_format,
    synsets_path,
    output_path,
    depth,
    workers,
    retries,
    delimiter,
    id_pattern,
):
    """Extract the n-level ego network of every synset in --synsets."""
    overrides = {
        "graph": graph_path,
        "graph_format": graph_format,
        "synsets": synsets_path,
        "neighbours": output_path,
        "depth": depth,
        "workers": workers,
        "retries": retries,
        "delimiter": delimiter,
        "id_pattern": id_pattern,
    }
    try:
        if config_path:
            config = ExtractConfig.from_yaml(config_path, **overrides)
        else:
            missing = [opt for opt, key in (("--synsets", "synsets"), ("--output", "neighbours")) if not overrides[key]]
            if missing:
                raise click.UsageError(f"missing option(s): {', '.join(missing)}")
            config = ExtractConfig(**{k: v for k, v in overrides.items() if v is not None})
        summary = NeighboursAction.from_config(config).run()
    except (LexnetError, ValueError, OSError, ImportError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(
        f"processed={summary.processed} written={summary.written} "
        f"empty={summary.empty} failed={len(summary.failures)}"
    )
    if not summary.ok:
        context.exit(1)


@cli.command("walk")
@click.argument("synset_id")
@click.option("--graph", "graph_path", help="Graph edge list (.csv), SIF file (.sif) or \"wordnet\"")
@click.option("--format", "graph_format", type=click.Choice(GRAPH_FORMATS), help="Graph source format")
@click.option("--depth", type=int, default=1, show_default=True, help="Graph depth")
@click.option("--id-pattern", help="Regular expression valid synset ids must match")
def walk_cmd(synset_id, graph_path, graph_format, depth, id_pattern):
    """Print the ego network of a single synset as id<TAB>distance lines."""
    try:
        config = ExtractConfig(
            synsets="-",
            neighbours="-",
            graph=graph_path,
            graph_format=graph_format,
            depth=depth,
            workers=1,
            id_pattern=id_pattern,
        )
        neighbours = walk(load_graph(config), synset_id, config.depth)
    except (LexnetError, ValueError, OSError, ImportError) as e:
        raise click.ClickException(str(e)) from e
    for neighbour, distance in neighbours.items():
        click.echo(f"{neighbour}\t{distance}")


@cli.command("stats")
@click.option("--graph", "graph_path", required=True, help="Graph edge list (.csv) or SIF file (.sif)")
@click.option("--format", "graph_format", type=click.Choice(["csv", "sif"]), help="Graph source format")
@click.option("--id-pattern", help="Regular expression valid synset ids must match")
def stats_cmd(graph_path, graph_format, id_pattern):
    """Print the shape of a graph's hypernym/hyponym hierarchy."""
    try:
        config = ExtractConfig(
            synsets="-",
            neighbours="-",
            graph=graph_path,
            graph_format=graph_format,
            workers=1,
            id_pattern=id_pattern,
        )
        if config.graph_format == "wordnet":
            raise click.ClickException("stats need an in-memory graph, not 'wordnet'")
        graph = load_graph(config)
    except (LexnetError, ValueError, OSError, ImportError) as e:
        raise click.ClickException(str(e)) from e
    for key, value in graph.taxonomy_summary().items():
        click.echo(f"{key}={value}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
