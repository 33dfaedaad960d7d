"""Command-line runner for the cache trace simulator.

Usage:
    cachetrace traces.txt                    # replay a trace file
    cachetrace - < traces.txt                # replay a trace from stdin
    cachetrace --scenario "Matrix Traversal" --passes 2
"""
import argparse
import logging
import sys

from cachetrace.data.stats_export import Exporter, export_chart, format_report
from cachetrace.data.trace_reader import TraceFormatError
from cachetrace.simulation import SCENARIOS, Simulation

logger = logging.getLogger("cachetrace")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay an address trace against eight cache configurations"
    )
    parser.add_argument(
        "trace",
        nargs="?",
        default="traces.txt",
        help='Trace file of hex addresses ("-" reads stdin; default: %(default)s)',
    )
    parser.add_argument(
        "--scenario",
        choices=SCENARIOS,
        help="Replay a built-in address sequence instead of a trace file",
    )
    parser.add_argument(
        "--passes",
        type=int,
        default=1,
        help="Number of times a scenario is replayed (default: %(default)s)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random replacement (default: unseeded)",
    )
    parser.add_argument("--csv", help="Write per-configuration results to a CSV file")
    parser.add_argument("--json", help="Write per-configuration results to a JSON file")
    parser.add_argument("--chart", help="Save a hit-rate bar chart (format from extension)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v", "--verbose",
        dest="log_level",
        action="store_const",
        const=logging.DEBUG,
        help="Log progress details",
    )
    group.add_argument(
        "-q", "--quiet",
        dest="log_level",
        action="store_const",
        const=logging.ERROR,
        help="Only log errors",
    )
    parser.set_defaults(log_level=logging.WARNING)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    sim = Simulation(seed=args.seed)
    try:
        if args.scenario:
            results = sim.run_scenario(args.scenario, num_passes=args.passes)
        else:
            results = sim.run_trace_file(args.trace)
    except OSError as e:
        print(f"error: cannot open trace file: {args.trace} ({e.strerror or e})", file=sys.stderr)
        return 2
    except TraceFormatError as e:
        logger.error("bad trace %s: %s", args.trace, e)
        return 1

    print(format_report(results), end="")

    if args.csv:
        Exporter.export_stats_csv(args.csv, results)
    if args.json:
        Exporter.export_stats_json(args.json, results, seed=args.seed)
    if args.chart:
        export_chart(args.chart, results, title=args.scenario or args.trace)
    return 0


if __name__ == '__main__':
    sys.exit(main())
