# tests/test_config.py
import pytest
from pathlib import Path

from teestat.config import (
    ConfigError,
    TeeStatConfig,
    default_config,
    get_default_config_path,
    load_config,
)


def test_load_config_from_valid_toml(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text('''
[analysis]
ticks_per_second = 25
name_filter = "nameless"

[parallel]
max_workers = 4

[output]
analysis_format = "json"
extraction_format = "yaml"
pretty = true

[parser]
adapter = "jsonl"
''')

    config = load_config(config_file)
    config.validate()

    assert config.analysis.ticks_per_second == 25
    assert config.analysis.name_filter == "nameless"
    assert config.parallel.max_workers == 4
    assert config.output.analysis_format == "json"
    assert config.output.extraction_format == "yaml"
    assert config.output.pretty is True


def test_missing_sections_use_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text('[output]\npretty = true\n')

    config = load_config(config_file)

    assert config.analysis.ticks_per_second == 50
    assert config.parallel.max_workers is None
    assert config.output.analysis_format == "plain"
    assert config.parser.adapter == "jsonl"


def test_default_config_is_valid():
    config = default_config()
    config.validate()
    assert config == TeeStatConfig()


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.toml")


def test_load_config_invalid_toml(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[analysis\n")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(config_file)


@pytest.mark.parametrize(
    "toml_text,message",
    [
        ('[analysis]\nticks_per_second = "50"\n', "analysis.ticks_per_second"),
        ("[analysis]\nticks_per_second = true\n", "analysis.ticks_per_second"),
        ("[analysis]\nname_filter = 3\n", "analysis.name_filter"),
        ('[parallel]\nmax_workers = "4"\n', "parallel.max_workers"),
        ("[parallel]\nmax_workers = 2.5\n", "parallel.max_workers"),
        ('[output]\npretty = "yes"\n', "output.pretty"),
        ("[output]\nanalysis_format = 1\n", "output.analysis_format"),
        ("[parser]\nadapter = []\n", "parser.adapter"),
        ("analysis = 3\n", r"\[analysis\] section"),
    ],
)
def test_load_config_rejects_wrong_types(tmp_path, toml_text, message):
    config_file = tmp_path / "config.toml"
    config_file.write_text(toml_text)

    with pytest.raises(ConfigError, match=message):
        load_config(config_file)


def test_load_config_accepts_float_tick_rate(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[analysis]\nticks_per_second = 50.0\n")

    assert load_config(config_file).analysis.ticks_per_second == 50.0


@pytest.mark.parametrize(
    "mutate,message",
    [
        (lambda c: setattr(c.analysis, "ticks_per_second", 0), "ticks_per_second"),
        (lambda c: setattr(c.parallel, "max_workers", 0), "max_workers"),
        (lambda c: setattr(c.output, "analysis_format", "csv"), "analysis_format"),
        (lambda c: setattr(c.output, "extraction_format", "plain"), "extraction_format"),
        (lambda c: setattr(c.parser, "adapter", "binary"), "adapter"),
    ],
)
def test_validate_rejects_bad_values(mutate, message):
    config = default_config()
    mutate(config)

    with pytest.raises(ConfigError, match=message):
        config.validate()


def test_default_config_path_is_in_home():
    path = get_default_config_path()
    assert path == Path.home() / ".teestat" / "config.toml"
