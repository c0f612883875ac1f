# graphanalytics/modules/cli.py
"""
Command line entry point: print analytics of a package dependency graph.

Usage examples:
  graphanalytics build/graph.dot
  graphanalytics --max-results 0 --log-level debug build/graph.dot
  graphanalytics -i build/graph.dot --table --json-out out/analytics.json
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from graphanalytics import __version__
from graphanalytics.modules import logger as _logger
from graphanalytics.modules.config import AnalyticsConfig, ConfigError
from graphanalytics.modules.dotgraph import GraphUnavailableError, graph_summary, read_dot_graph_file
from graphanalytics.modules.presenter import log_reports, print_tables, write_json
from graphanalytics.modules.reports import analyze_graph

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2


def make_console(no_color: bool, quiet: bool) -> Console:
    if no_color:
        return Console(color_system=None, force_terminal=False, markup=False, quiet=quiet)
    return Console(quiet=quiet)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="graphanalytics",
                                 description="Print analytics of a given dependency graph.")
    ap.add_argument("input", nargs="?", help="Path to the DOT graph file to analyze")
    ap.add_argument("-i", "--input", dest="input_opt", metavar="INPUT", help="Path to the DOT graph file to analyze")
    ap.add_argument("--max-results", type=int,
                    help="The number of results to print per category. Set 0 to print unlimited (default: 10)")
    ap.add_argument("--workers", type=int, help="Threads used to compute the reports (default: 4)")
    ap.add_argument("--log-file", help="Also append log lines to this file")
    ap.add_argument("--log-level", choices=sorted(_logger.Logger.LEVELS), help="Minimum log level (default: info)")
    ap.add_argument("--log-format", choices=["text", "json"], help="Log line format (default: text)")
    ap.add_argument("--config", help="Read settings from this INI file")
    ap.add_argument("--table", action="store_true", help="Also render the reports as tables")
    ap.add_argument("--json-out", help="Write the reports as JSON to this file")
    ap.add_argument("--no-color", action="store_true", help="Disable colored output")
    ap.add_argument("--quiet", action="store_true", help="No console output")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.input and args.input_opt and args.input != args.input_opt:
        ap.error("give the graph file either positionally or with --input, not both")
    args.input = args.input or args.input_opt
    if not args.input:
        ap.error("the DOT graph file is required")
    return args


def resolve_settings(args: argparse.Namespace, cfg: AnalyticsConfig):
    """Command line flags win over the config file, which wins over defaults."""
    max_results = args.max_results if args.max_results is not None else cfg.max_results
    workers = args.workers if args.workers is not None else cfg.workers
    if max_results < 0:
        raise ConfigError(f"max-results must be >= 0, got {max_results}")
    if workers < 1:
        raise ConfigError(f"workers must be >= 1, got {workers}")
    return max_results, workers


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])

    try:
        cfg = AnalyticsConfig(path=args.config)
        max_results, workers = resolve_settings(args, cfg)
        console = make_console(args.no_color, args.quiet)
        log = _logger.init_best_effort(
            config=cfg,
            level=args.log_level,
            log_file=args.log_file,
            log_format=args.log_format,
            color_output=False if args.no_color else None,
            log_to_console=False if args.quiet else None,
            console=console,
        )
    except (ConfigError, ValueError) as e:
        print(f"graphanalytics: {e}", file=sys.stderr)
        return EXIT_USAGE

    if cfg.loaded_from:
        log.debug(f"Loaded config from {cfg.loaded_from}")

    try:
        pkg_graph = read_dot_graph_file(args.input)
    except GraphUnavailableError as e:
        log.error(f"Unable to analyze dependency graph, error: {e}")
        return EXIT_FATAL

    summary = graph_summary(pkg_graph)
    log.info(f"Loaded {args.input}: {summary['nodes']} nodes, {summary['edges']} edges, "
             f"{summary['unresolved']} unresolved")

    reports = analyze_graph(pkg_graph, max_results=max_results, workers=workers)
    log_reports(log, reports)

    if args.table:
        console.print(Panel(f"{summary['nodes']} nodes, {summary['edges']} edges, "
                            f"{summary['unresolved']} unresolved", title=Text(args.input), style="cyan"))
        print_tables(console, reports)

    if args.json_out:
        try:
            write_json(args.json_out, reports, graph_path=args.input, max_results=max_results)
        except OSError as e:
            log.error(f"Failed to write {args.json_out}: {e}")
            return EXIT_FATAL
        log.info(f"Wrote reports to {args.json_out}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
