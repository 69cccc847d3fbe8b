"""Smoke tests for teestat package."""

import subprocess
import sys
from importlib import import_module


def test_package_imports():
    """Test that the main package can be imported."""
    teestat = import_module("teestat")
    assert hasattr(teestat, "__version__")
    assert teestat.__version__ == "0.1.0"
    assert callable(teestat.analyze)


def test_cli_module_imports():
    """Test that the CLI module can be imported."""
    cli = import_module("teestat.cli")
    assert hasattr(cli, "main")
    assert callable(cli.main)


def test_cli_version_flag():
    """Test that the CLI --version flag works."""
    result = subprocess.run(
        [sys.executable, "-m", "teestat.cli", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "teestat 0.1.0" in result.stdout


def test_cli_help_flag():
    """Test that the CLI --help flag works."""
    result = subprocess.run(
        [sys.executable, "-m", "teestat", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "teestat" in result.stdout
    assert "DDNet demo snapshot streams" in result.stdout
