"""JSON settings documents for parser registries.

A settings document enables parser units by slot name and optionally
overrides their marker, weight and built-in matcher:

    {
        "file": {"marker": "file://", "weight": 10},
        "stdin": {"marker": "<stdin>", "match": "exact"},
        "text": {}
    }

Documents are validated against a JSON Schema before use. Custom matcher
callables cannot be represented, so builders using them cannot be saved
(they must be re-applied in code after loading).
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator

from grab_input.builder import Builder, Config
from grab_input.errors import SettingsError
from grab_input.parsers import MATCHERS, MAX_WEIGHT, FileParser, ParserUnit, StdinParser, TextParser

SETTINGS_ENV_VAR = "GRAB_INPUT_SETTINGS"

_UNIT_TYPES: dict[str, type[ParserUnit]] = {
    "file": FileParser,
    "stdin": StdinParser,
    "text": TextParser,
}

# =============================================================================
# SCHEMA
# =============================================================================


def _unit_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "marker": {"type": "string"},
            "weight": {"type": "integer", "minimum": 0, "maximum": MAX_WEIGHT},
            "match": {"type": "string", "enum": sorted(MATCHERS)},
        },
        "additionalProperties": False,
    }


def settings_schema() -> dict[str, Any]:
    """JSON Schema for a settings document."""
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "GrabInputSettings",
        "type": "object",
        "properties": {name: _unit_schema() for name in _UNIT_TYPES},
        "additionalProperties": False,
        "minProperties": 1,
    }


_VALIDATOR = Draft7Validator(settings_schema())


def validate_settings(data: Any) -> list[str]:
    """Return validation errors (empty list means valid)."""
    return [e.message for e in _VALIDATOR.iter_errors(data)]


# =============================================================================
# CONVERSION
# =============================================================================


def builder_from_settings(data: Any) -> Builder:
    """Build a Builder from a settings document.

    Raises:
        SettingsError: The document does not match the schema.
    """
    if errors := validate_settings(data):
        raise SettingsError("invalid settings", errors)

    units: dict[str, ParserUnit] = {}
    for name, unit_type in _UNIT_TYPES.items():
        if name not in data:
            continue
        options = data[name]
        kwargs: dict[str, Any] = {}
        if "marker" in options:
            kwargs["marker"] = options["marker"]
        if "weight" in options:
            kwargs["weight"] = options["weight"]
        if "match" in options:
            kwargs["matcher"] = MATCHERS[options["match"]]
        units[name] = unit_type(**kwargs)

    return Builder(
        file_parser=units.get("file"),  # type: ignore[arg-type]
        stdin_parser=units.get("stdin"),  # type: ignore[arg-type]
        text_parser=units.get("text"),  # type: ignore[arg-type]
    )


def settings_from_builder(builder: Builder) -> dict[str, Any]:
    """Serialize a builder to a settings document.

    Raises:
        SettingsError: A unit uses a matcher that is not a built-in one.
    """
    names_by_matcher = {matcher: name for name, matcher in MATCHERS.items()}
    data: dict[str, Any] = {}

    for unit in builder.slots():
        if unit is None:
            continue
        options: dict[str, Any] = {"marker": unit.marker, "weight": unit.weight}
        if unit.matcher is not None:
            if unit.matcher not in names_by_matcher:
                raise SettingsError(f"{unit.name} parser uses a custom matcher that cannot be saved")
            options["match"] = names_by_matcher[unit.matcher]
        data[unit.name] = options

    return data


# =============================================================================
# FILES
# =============================================================================


def load_settings(path: Path) -> Config:
    """Load a settings file and build its Config."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SettingsError(f"{path} is not valid JSON", [str(e)]) from e
    except UnicodeDecodeError as e:
        raise SettingsError(f"{path} is not valid UTF-8", [str(e)]) from e
    return builder_from_settings(data).build()


def save_settings(builder: Builder, path: Path) -> None:
    """Save a builder to a settings file."""
    path.write_text(json.dumps(settings_from_builder(builder), indent=2), encoding="utf-8")


def settings_path_from_env() -> Path | None:
    """Settings file named by the GRAB_INPUT_SETTINGS environment variable."""
    value = os.environ.get(SETTINGS_ENV_VAR)
    return Path(value) if value else None
