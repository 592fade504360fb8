"""Command line entry point.

    cachesim [-v] -s <num> -E <num> -b <num> -t <file>

Replays a valgrind memory trace against the configured cache and prints
`hits:H misses:M evictions:V`.
"""
import logging

import click

from cachesim.core.cache import Cache
from cachesim.core.config import CacheConfig
from cachesim.core.errors import CacheSimError
from cachesim.core.simulator import CacheSimulator, format_verbose
from cachesim.core.trace import read_trace
from cachesim.data.stats_export import Exporter, Statistics

logger = logging.getLogger(__name__)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('-v', '--verbose', is_flag=True, help='Display trace info for every event.')
@click.option('-s', 'set_bits', type=int, required=True, help='Number of set index bits (S = 2^s sets).')
@click.option('-E', 'associativity', type=int, required=True, help='Associativity (number of lines per set).')
@click.option('-b', 'block_bits', type=int, required=True, help='Number of block bits (B = 2^b block size).')
@click.option('-t', 'trace_file', type=click.Path(exists=True, dir_okay=False), required=True,
              help='Valgrind trace to replay.')
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), help='Write totals to a CSV file.')
@click.option('--json', 'json_path', type=click.Path(dir_okay=False), help='Write totals and hit-rate history to JSON.')
@click.option('--chart', 'chart_path', type=click.Path(dir_okay=False), help='Plot the hit-rate history to a PDF.')
@click.option('--sample-every', type=click.IntRange(min=1), default=1, show_default=True,
              help='Accesses between hit-rate history samples.')
@click.option('--debug', is_flag=True, help='Enable debug logging.')
def main(verbose, set_bits, associativity, block_bits, trace_file,
         csv_path, json_path, chart_path, sample_every, debug):
    """Simulate a set-associative LRU cache over a memory trace."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    config = CacheConfig(set_bits, associativity, block_bits)
    try:
        cache = Cache.from_config(config)
        # history is only kept when something will consume it
        keep_history = bool(json_path or chart_path)
        stats = Statistics(sample_every=sample_every if keep_history else None)
        sim = CacheSimulator(cache, stats)
        callback = (lambda event, outcomes: click.echo(format_verbose(event, outcomes))) if verbose else None
        stats = sim.run(read_trace(trace_file), callback)
    except CacheSimError as exc:
        logger.debug("simulation aborted", exc_info=True)
        raise click.ClickException(str(exc)) from exc

    click.echo(stats.summary())

    geometry = {'s': set_bits, 'E': associativity, 'b': block_bits}
    if csv_path:
        Exporter.export_stats_csv(csv_path, stats)
    if json_path:
        Exporter.export_stats_json(json_path, stats, config=geometry)
    if chart_path:
        Exporter.export_chart_pdf(chart_path, stats, title=config.describe())


if __name__ == '__main__':
    main()
