"""Simple offline viewer for saved analysis results.

Usage:
    python -m teestat.ui view results.json --player nameless

This re-renders a JSON analysis result as the plain-text report. It reads
local JSON only.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import jsonschema

from .analysis import CombinedStats
from .report_plain import render_plain
from .schema import validate_result


def _print(s: str) -> None:
    # Isolate for easy testing/capture
    print(s)


def summarize_result(data: dict[str, Any], focus_player: str | None = None) -> str:
    """Render a serialized result map, optionally narrowed to matching names."""
    needle = (focus_player or "").lower()
    results = {
        name: CombinedStats.from_dict(entry)
        for name, entry in data.items()
        if needle in name.lower()
    }
    if not results:
        if focus_player:
            return f"No players matching '{focus_player}'"
        return "No players in result"
    return render_plain(results)


def cmd_view(path: Path, focus_player: str | None = None) -> int:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        _print(f"Error: file not found: {path}")
        return 2
    except json.JSONDecodeError as e:
        _print(f"Error: invalid JSON in {path}: {e}")
        return 2
    except UnicodeDecodeError as e:
        _print(f"Error: {path} is not UTF-8 text: {e}")
        return 2
    except OSError as e:
        _print(f"Error: cannot read {path}: {e}")
        return 2

    try:
        validate_result(data)
    except (jsonschema.ValidationError, TypeError) as e:
        _print(f"Error: {path} is not an analysis result: {e}")
        return 2

    _print(summarize_result(data, focus_player=focus_player))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Offline viewer for teestat JSON results"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)
    p_view = sub.add_parser("view", help="Pretty-print a JSON analysis result")
    p_view.add_argument("json_path", type=str, help="Path to result JSON")
    p_view.add_argument(
        "--player",
        type=str,
        default=None,
        help="Only show players whose name contains this text",
    )

    args = parser.parse_args(argv)
    if args.cmd == "view":
        return cmd_view(Path(args.json_path), focus_player=args.player)

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
