import json
import logging
from pathlib import Path

import click

log = logging.getLogger('primtree')


def read_graph(path: Path):
    import numpy as np

    from .graph import Graph

    if path.suffix == '.npy':
        return Graph.from_matrix(np.load(path))
    if path.suffix == '.json':
        with path.open('r') as f:
            return Graph.from_edges([tuple(e) for e in json.load(f)])

    edges = []
    with path.open('r') as f:
        for lineno, line in enumerate(f, start=1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue
            try:
                edges.append(tuple(int(x) for x in line.split()))
            except ValueError:
                raise ValueError(f"{path}:{lineno}: bad edge {line!r}")
    return Graph.from_edges(edges)


@click.group()
def main():
    pass


@main.command()
@click.option('--root', '-r', type=int, default=None, help='Root vertex id')
@click.option('--config', '-c', 'config_path',
              type=click.Path(exists=True, dir_okay=False),
              default=None, help='JSON config file')
@click.option('--strict/--no-strict', default=None,
              help='Fail if the graph is not connected')
@click.option('--trace', is_flag=True, default=False,
              help='Log every algorithm checkpoint')
@click.option('--json', 'as_json', is_flag=True, default=False,
              help='Print the tree as JSON')
@click.argument('input', type=click.Path(exists=True, dir_okay=False))
def mst(root, config_path, strict, trace, as_json, input):
    """Minimum spanning tree of the graph in INPUT.

    INPUT is an edge list with one "u v [weight]" per line, a JSON list
    of edges (.json) or a square weight matrix (.npy).
    """
    from .config import Config
    from .graph import SelfLoopError
    from .prim import GraphNotConnected, PrimBuilder
    from .trace import log_trace

    try:
        cfg = Config(config_path)
        if strict is not None:
            cfg.set('prim.strict', strict)
        if trace:
            cfg.set('prim.trace', True)
        strict = cfg.query('prim.strict')
        trace = cfg.query('prim.trace')
        logging.basicConfig(level=cfg.query('log.level'))
        log.setLevel(cfg.query('log.level'))
    except (ValueError, KeyError, TypeError) as e:
        raise click.ClickException(f"bad config {config_path}: {e}")

    if trace:
        logging.getLogger('primtree.trace').setLevel(logging.DEBUG)

    try:
        graph = read_graph(Path(input))
    except (ValueError, TypeError) as e:
        raise click.ClickException(str(e))
    if len(graph) == 0:
        raise click.ClickException(f"no vertices in {input}")
    if root is None:
        root = next(iter(graph)).id
    if root not in graph:
        raise click.ClickException(f"root {root} is not in the graph")

    tracer = log_trace if trace else None
    try:
        if strict:
            tree = graph.spanning_tree(root, trace=tracer)
        else:
            tree = PrimBuilder(trace=tracer).build(graph.vertex(root))
            if tree.size() != len(graph):
                log.warning("spanned %d of %d vertices from root %d",
                            tree.size(), len(graph), root)
    except (GraphNotConnected, SelfLoopError) as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(
            json.dumps({
                'root': root,
                'vertices': tree.size(),
                'edges': [list(e) for e in tree.as_tuples()],
                'weight': tree.weight(),
            }))
    else:
        for u, v, w in tree.as_tuples():
            click.echo(f"{u} {v} {w}")
        click.secho(f"weight: {tree.weight()}", fg='blue')


if __name__ == '__main__':
    main()
