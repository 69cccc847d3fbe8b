"""Output adapters for analysis results and extracted series.

Turns engine output into text in one of the supported formats and writes
it atomically. Format selection and pretty-printing live here; the
engine itself only returns Python objects.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

import tomli_w
import yaml

from .analysis import CombinedStats, PlotSeries
from .parser.types import PlayerState
from .report_plain import render_plain

ANALYSIS_FORMATS = ("plain", "json", "yaml", "toml")
EXTRACTION_FORMATS = ("json", "yaml", "toml")


def analysis_to_dict(results: Mapping[str, CombinedStats]) -> dict[str, Any]:
    """Serialize a result map to plain values."""
    return {name: stats.to_dict() for name, stats in results.items()}


def series_to_dict(series: Mapping[str, list[PlayerState]]) -> dict[str, Any]:
    """Serialize extracted per-player states to plain values."""
    return {name: [state.to_dict() for state in states] for name, states in series.items()}


def plots_to_dict(plots: Mapping[str, PlotSeries]) -> dict[str, Any]:
    """Serialize per-player plot traces to plain values."""
    return {name: plot.to_dict() for name, plot in plots.items()}


def _dump(data: dict[str, Any], fmt: str, pretty: bool) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(
            data, sort_keys=False, allow_unicode=True, default_flow_style=False
        )
    if fmt == "toml":
        return tomli_w.dumps(data)
    raise ValueError(f"Unsupported output format: {fmt}")


def render_analysis(
    results: Mapping[str, CombinedStats], fmt: str = "plain", pretty: bool = False
) -> str:
    """Render a result map as plain text, JSON, YAML or TOML.

    ``pretty`` only changes JSON output; YAML and TOML are always
    block-formatted.
    """
    if fmt not in ANALYSIS_FORMATS:
        raise ValueError(
            f"Unsupported analysis format '{fmt}'. "
            f"Must be one of: {', '.join(ANALYSIS_FORMATS)}"
        )
    if fmt == "plain":
        return render_plain(results)
    return _dump(analysis_to_dict(results), fmt, pretty)


def render_extraction(data: dict[str, Any], fmt: str = "json", pretty: bool = False) -> str:
    """Render serialized series or plot traces as JSON, YAML or TOML."""
    if fmt not in EXTRACTION_FORMATS:
        raise ValueError(
            f"Unsupported extraction format '{fmt}'. "
            f"Must be one of: {', '.join(EXTRACTION_FORMATS)}"
        )
    return _dump(data, fmt, pretty)


def write_output_atomically(content: str, out_path: Path) -> None:
    """Write text atomically to avoid partial files."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = out_path.with_suffix(out_path.suffix + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, out_path)
    finally:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
