from __future__ import annotations

import json
from threading import Lock
from typing import Any, Dict, List

from jsonschema import ValidationError
from jsonschema.exceptions import SchemaError
from jsonschema.validators import Draft202012Validator, validator_for

JsonSchema = Dict[str, Any]
ValidatorType = Draft202012Validator

_validator_cache: Dict[str, ValidatorType] = {}
_cache_lock = Lock()


def _cache_key(schema: JsonSchema, schema_id: str | None) -> str:
    if schema_id:
        return schema_id
    return json.dumps(schema, sort_keys=True, separators=(",", ":"))


def get_validator(schema: JsonSchema, *, schema_id: str | None = None) -> ValidatorType:
    """
    Compile (and cache) a jsonschema validator for the provided schema.

    The schema itself is checked once, when its validator is first built.
    """

    key = _cache_key(schema, schema_id)
    with _cache_lock:
        validator = _validator_cache.get(key)
        if validator is None:
            validator_cls = validator_for(schema, default=Draft202012Validator)
            validator_cls.check_schema(schema)
            validator = validator_cls(schema)
            _validator_cache[key] = validator
    return validator


def collect_errors(
    schema: JsonSchema,
    instance: Any,
    *,
    schema_id: str | None = None,
    prefix: str = "$",
) -> List[str]:
    """
    Validate an instance and return every error as a formatted string, ordered
    by the location of the offending value.
    """

    validator = get_validator(schema, schema_id=schema_id)
    errors = sorted(
        validator.iter_errors(instance),
        key=lambda error: [str(token) for token in error.absolute_path],
    )
    return [format_validation_error(error, prefix=prefix) for error in errors]


def format_validation_error(error: ValidationError, *, prefix: str = "$") -> str:
    """
    Convert a jsonschema.ValidationError into a human-friendly error string.
    """

    path = prefix
    for token in error.absolute_path:
        if isinstance(token, int):
            path += f"[{token}]"
        else:
            path += f".{token}"
    return f"{path}: {error.message}"


__all__ = [
    "SchemaError",
    "ValidationError",
    "collect_errors",
    "format_validation_error",
    "get_validator",
]
