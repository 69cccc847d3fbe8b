"""Configuration management for teestat."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tomllib

from .parser import list_adapters
from .parser.types import TICKS_PER_SECOND
from .report import ANALYSIS_FORMATS, EXTRACTION_FORMATS


class ConfigError(Exception):
    """Configuration error."""

    pass


@dataclass
class AnalysisConfig:
    ticks_per_second: float = TICKS_PER_SECOND
    name_filter: str = ""


@dataclass
class ParallelConfig:
    # None lets the thread pool pick its default size
    max_workers: int | None = None


@dataclass
class OutputConfig:
    analysis_format: str = "plain"
    extraction_format: str = "json"
    pretty: bool = False


@dataclass
class ParserConfig:
    adapter: str = "jsonl"


@dataclass
class TeeStatConfig:
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    parallel: ParallelConfig = field(default_factory=ParallelConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)

    def validate(self) -> None:
        """Validate configuration, raising ConfigError if invalid."""
        if self.analysis.ticks_per_second <= 0:
            raise ConfigError(
                f"Invalid ticks_per_second {self.analysis.ticks_per_second}. "
                "Must be positive"
            )

        workers = self.parallel.max_workers
        if workers is not None and workers < 1:
            raise ConfigError(
                f"Invalid max_workers {workers}. Must be at least 1 or omitted"
            )

        if self.output.analysis_format not in ANALYSIS_FORMATS:
            raise ConfigError(
                f"Invalid analysis_format '{self.output.analysis_format}'. "
                f"Must be one of: {', '.join(ANALYSIS_FORMATS)}"
            )

        if self.output.extraction_format not in EXTRACTION_FORMATS:
            raise ConfigError(
                f"Invalid extraction_format '{self.output.extraction_format}'. "
                f"Must be one of: {', '.join(EXTRACTION_FORMATS)}"
            )

        if self.parser.adapter not in list_adapters():
            raise ConfigError(
                f"Invalid adapter '{self.parser.adapter}'. "
                f"Must be one of: {', '.join(list_adapters())}"
            )


def default_config() -> TeeStatConfig:
    """Configuration used when no config file exists."""
    return TeeStatConfig()


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid [{name}] section. Expected a table")
    return section


def _checked(section: str, data: dict, key: str, default, expected: tuple[type, ...]):
    """Return data[key] (or default), raising ConfigError on a wrong type."""
    value = data.get(key, default)
    if value is None and default is None:
        return value
    # bool is an int subclass but never a valid number here
    wrong_bool = isinstance(value, bool) and bool not in expected
    if wrong_bool or not isinstance(value, expected):
        raise ConfigError(
            f"Invalid {section}.{key} {value!r}. Expected {expected[0].__name__}"
        )
    return value


def load_config(config_path: Path) -> TeeStatConfig:
    """Load configuration from TOML file."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    analysis_data = _section(data, "analysis")
    analysis = AnalysisConfig(
        ticks_per_second=_checked(
            "analysis", analysis_data, "ticks_per_second", TICKS_PER_SECOND, (float, int)
        ),
        name_filter=_checked("analysis", analysis_data, "name_filter", "", (str,)),
    )

    parallel_data = _section(data, "parallel")
    parallel = ParallelConfig(
        max_workers=_checked("parallel", parallel_data, "max_workers", None, (int,)),
    )

    output_data = _section(data, "output")
    output = OutputConfig(
        analysis_format=_checked(
            "output", output_data, "analysis_format", "plain", (str,)
        ),
        extraction_format=_checked(
            "output", output_data, "extraction_format", "json", (str,)
        ),
        pretty=_checked("output", output_data, "pretty", False, (bool,)),
    )

    parser_data = _section(data, "parser")
    parser = ParserConfig(
        adapter=_checked("parser", parser_data, "adapter", "jsonl", (str,)),
    )

    return TeeStatConfig(
        analysis=analysis,
        parallel=parallel,
        output=output,
        parser=parser,
    )


def get_default_config_path() -> Path:
    """Get the default config file path."""
    return Path.home() / ".teestat" / "config.toml"
