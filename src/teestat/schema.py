"""JSON Schema validation for serialized analysis results."""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import Draft7Validator

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "analysis_result.schema.json"


def _load_schema() -> dict[str, Any]:
    """Load the analysis result JSON schema from file.

    Raises:
        FileNotFoundError: If schema file is missing.
        json.JSONDecodeError: If schema file is invalid JSON.
    """
    if not _SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {_SCHEMA_PATH}")

    with open(_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def _create_validator() -> Draft7Validator:
    """Create a Draft-07 validator for analysis results."""
    return Draft7Validator(_load_schema())


def _format_validation_error(error: jsonschema.ValidationError) -> str:
    """Format a validation error into a clear, actionable message."""
    path_str = ""
    if error.absolute_path:
        path_str = " at path '" + ".".join(str(p) for p in error.absolute_path) + "'"

    if error.validator == "required":
        missing_props = error.message.split("'")[1::2]
        return f"Missing required field(s): {', '.join(missing_props)}{path_str}"

    elif error.validator == "type":
        expected_type = error.validator_value
        actual_type = type(error.instance).__name__
        return (
            f"Invalid type{path_str}. Expected {expected_type}, "
            f"got {actual_type}: {error.instance}"
        )

    elif error.validator == "minimum":
        return (
            f"Value{path_str} must be >= {error.validator_value}. "
            f"Got: {error.instance}"
        )

    elif error.validator == "additionalProperties":
        return f"Additional properties not allowed{path_str}: {error.message}"

    else:
        return f"{error.message}{path_str}"


def validate_result(obj: dict[str, Any]) -> None:
    """Validate a serialized analysis result against the JSON schema.

    Besides the schema, each entry's ``overall_changes`` must equal the sum
    of its direction and hook changes.

    Raises:
        jsonschema.ValidationError: If the result is invalid
        TypeError: If obj is not a dictionary
    """
    if not isinstance(obj, dict):
        raise TypeError(f"Result must be a dictionary, got {type(obj).__name__}")

    validator = _create_validator()

    try:
        validator.validate(obj)
    except jsonschema.ValidationError as e:
        raise jsonschema.ValidationError(_format_validation_error(e)) from e

    for name, entry in obj.items():
        expected = entry["direction_changes"] + entry["hook_changes"]
        if entry["overall_changes"] != expected:
            raise jsonschema.ValidationError(
                f"Inconsistent overall_changes for '{name}': "
                f"{entry['overall_changes']} != {expected}"
            )


def validate_result_file(file_path: str) -> None:
    """Validate an analysis result JSON file against the schema.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
        jsonschema.ValidationError: If the result is invalid.
    """
    with open(file_path, encoding="utf-8") as f:
        obj = json.load(f)

    validate_result(obj)
