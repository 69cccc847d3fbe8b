"""Command-line interface for teestat."""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .analysis import extract_series, plot_points
from .config import (
    ConfigError,
    TeeStatConfig,
    default_config,
    get_default_config_path,
    load_config,
)
from .errors import TeeStatError
from .parser import DemoAdapter, get_adapter
from .pipeline import SourceStatus, analyze, analyze_paths, merge_results
from .report import (
    ANALYSIS_FORMATS,
    EXTRACTION_FORMATS,
    analysis_to_dict,
    plots_to_dict,
    render_analysis,
    render_extraction,
    series_to_dict,
    write_output_atomically,
)
from .schema import validate_result
from .ui import cmd_view

logger = logging.getLogger(__name__)


def _report_error(e: TeeStatError) -> None:
    print(f"Error: {e}", file=sys.stderr)
    if hasattr(e, "details") and "suggested_action" in e.details:
        print(f"Suggestion: {e.details['suggested_action']}", file=sys.stderr)


def _resolve_config(
    config_arg: str | None, workers: int | None = None
) -> TeeStatConfig:
    """Load the config file and apply command-line overrides, then validate."""
    if config_arg:
        config = load_config(Path(config_arg).expanduser())
    else:
        default_path = get_default_config_path()
        config = load_config(default_path) if default_path.exists() else default_config()
    if workers is not None:
        config.parallel.max_workers = workers
    config.validate()
    return config


def _discover_sources(raw_paths: list[str], adapter: DemoAdapter) -> list[Path]:
    """Expand directories into the adapter's files; keep files as given."""
    files: list[Path] = []
    for raw in raw_paths:
        path = Path(raw)
        if path.is_dir():
            found = sorted(
                p
                for p in path.iterdir()
                if p.is_file() and p.suffix.lower() in adapter.file_suffixes
            )
            logger.debug(f"Found {len(found)} sources in {path}")
            files.extend(found)
        else:
            files.append(path)
    return files


def _emit_output(content: str, out: str | None) -> None:
    if out:
        write_output_atomically(content, Path(out))
    else:
        print(content)


def handle_analyze_command(args, config: TeeStatConfig) -> int:
    """Handle the analyze subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    fmt = args.format or config.output.analysis_format
    pretty = args.pretty or config.output.pretty
    name_filter = args.filter if args.filter is not None else config.analysis.name_filter
    ticks_per_second = config.analysis.ticks_per_second

    try:
        adapter = get_adapter(args.adapter or config.parser.adapter)
        paths = _discover_sources(args.paths, adapter)
        if not paths:
            print("Error: no demo sources found", file=sys.stderr)
            return 1

        if len(paths) == 1:
            with adapter.open(paths[0]) as stream:
                results = analyze(
                    stream, name_filter, ticks_per_second=ticks_per_second
                )
        else:
            source_results = analyze_paths(
                paths,
                adapter_name=adapter.name,
                name_filter=name_filter,
                ticks_per_second=ticks_per_second,
                max_workers=config.parallel.max_workers,
            )
            for result in source_results:
                if result.status == SourceStatus.ERROR:
                    print(str(result), file=sys.stderr)
            results = merge_results(r.stats for r in source_results)
    except TeeStatError as e:
        _report_error(e)
        return 1

    validate_result(analysis_to_dict(results))
    _emit_output(render_analysis(results, fmt, pretty), args.out)
    return 0


def handle_extract_command(args, config: TeeStatConfig) -> int:
    """Handle the extract subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    fmt = args.format or config.output.extraction_format
    pretty = args.pretty or config.output.pretty
    name_filter = args.filter if args.filter is not None else config.analysis.name_filter

    try:
        adapter = get_adapter(args.adapter or config.parser.adapter)
        with adapter.open(Path(args.path)) as stream:
            series = extract_series(stream, name_filter)
    except TeeStatError as e:
        _report_error(e)
        return 1

    if args.plot:
        plots = {
            name: plot_points(states, config.analysis.ticks_per_second)
            for name, states in series.items()
        }
        data = plots_to_dict(plots)
    else:
        data = series_to_dict(series)

    _emit_output(render_extraction(data, fmt, pretty), args.out)
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--filter",
        type=str,
        default=None,
        help="Only include players whose name contains this text (case-insensitive)",
    )
    parser.add_argument(
        "-p",
        "--pretty",
        action="store_true",
        help="Pretty print if the format supports it",
    )
    parser.add_argument(
        "-o",
        "--out",
        type=str,
        default=None,
        help="File to write output to. If not specified, stdout is used.",
    )
    parser.add_argument(
        "--adapter",
        type=str,
        default=None,
        help="Snapshot decoder adapter (default: from config, else jsonl)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="teestat",
        description="Input change statistics for DDNet demo snapshot streams",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"teestat {__version__}",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config TOML (default: ~/.teestat/config.toml if present)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser(
        "analyze",
        aliases=["analyse", "a"],
        help="Compute direction and hook change rates per player",
    )
    analyze_parser.add_argument(
        "paths",
        nargs="+",
        help="Snapshot dumps or directories; several sources run in parallel",
    )
    analyze_parser.add_argument(
        "--format", choices=ANALYSIS_FORMATS, default=None, help="Output format"
    )
    analyze_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for multi-source runs",
    )
    _add_common_arguments(analyze_parser)

    extract_parser = subparsers.add_parser(
        "extract", aliases=["e"], help="Dump the raw per-tick player states"
    )
    extract_parser.add_argument("path", type=str, help="Snapshot dump to read")
    extract_parser.add_argument(
        "--format", choices=EXTRACTION_FORMATS, default=None, help="Output format"
    )
    extract_parser.add_argument(
        "--plot",
        action="store_true",
        help="Emit direction/hook plot traces instead of raw states",
    )
    _add_common_arguments(extract_parser)

    view_parser = subparsers.add_parser(
        "view", aliases=["v"], help="Show a saved JSON analysis result as text"
    )
    view_parser.add_argument("json_path", type=str, help="Path to result JSON")
    view_parser.add_argument(
        "--player", type=str, default=None, help="Filter players by name"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command in ("view", "v"):
        return cmd_view(Path(args.json_path), focus_player=args.player)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = _resolve_config(args.config, getattr(args, "workers", None))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command in ("analyze", "analyse", "a"):
        return handle_analyze_command(args, config)
    return handle_extract_command(args, config)


if __name__ == "__main__":
    sys.exit(main())
