"""Schema validation for cbtr configuration documents.

Config documents are validated with JSON Schema. The schema is stored as YAML
(``cbtr/data/schemas/config.schema.yaml``) and bundled with the package.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator

from cbtr.core.exceptions import ConfigError
from cbtr.data import read_yaml

CONFIG_SCHEMA = "config.schema.yaml"


def load_schema(schema_name: str = CONFIG_SCHEMA) -> Dict[str, Any]:
    """Load a bundled schema.

    Raises:
        ValueError: If the schema is not a YAML mapping.
    """
    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def _format_error_path(path: Any) -> str:
    parts = [str(p) for p in path]
    return ".".join(parts) if parts else "<root>"


def collect_errors(payload: Any, schema_name: str = CONFIG_SCHEMA) -> List[str]:
    """Return validation error messages (empty if valid), sorted by location."""
    validator = Draft202012Validator(load_schema(schema_name))
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(map(str, e.path)))
    return [f"{_format_error_path(e.path)}: {e.message}" for e in errors]


def validate_config(payload: Any, *, source: Optional[Path] = None) -> None:
    """Validate a parsed config document.

    Raises:
        ConfigError: If the document does not conform to the schema.
    """
    errors = collect_errors(payload)
    if errors:
        where = f" in {source}" if source is not None else ""
        details = "\n".join(f"  - {msg}" for msg in errors)
        raise ConfigError(
            f"Invalid configuration{where}:\n{details}",
            context={"path": str(source) if source else None, "errors": errors},
        )


__all__ = ["CONFIG_SCHEMA", "load_schema", "collect_errors", "validate_config"]
