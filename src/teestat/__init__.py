"""teestat: Input change statistics for DDNet demo snapshot streams."""

from .pipeline import analyze, analyze_many, analyze_paths
from .analysis import calculate_stats, extract_series
from .schema import validate_result, validate_result_file
from .version import get_package_version

__version__ = get_package_version()
__author__ = "teestat contributors"
__description__ = "Input change statistics for DDNet demo snapshot streams"

__all__ = [
    "analyze",
    "analyze_many",
    "analyze_paths",
    "calculate_stats",
    "extract_series",
    "validate_result",
    "validate_result_file",
]
