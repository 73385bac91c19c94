"""
JSON Schema for one entry of ``stepFunctions.stateMachines``.

Unknown keys are rejected so typos surface before anything is compiled.
"""

from __future__ import annotations

from state_machine_compiler.schema.jsonschema_adapter import JsonSchema

STATE_MACHINE_SCHEMA_ID = "stepFunctions.stateMachine@v1"


def _single_key(key: str, value_schema: JsonSchema) -> JsonSchema:
    return {
        "type": "object",
        "properties": {key: value_schema},
        "required": [key],
        "additionalProperties": False,
    }


ARN_SCHEMA: JsonSchema = {
    "anyOf": [
        {"type": "string", "pattern": "^arn:"},
        _single_key("Ref", {"type": "string"}),
        _single_key(
            "Fn::GetAtt",
            {
                "anyOf": [
                    {"type": "array", "items": {"type": "string"}, "minItems": 2, "maxItems": 2},
                    {"type": "string", "pattern": r"^[^.]+\..+$"},
                ]
            },
        ),
        _single_key("Fn::Join", {"type": "array", "minItems": 2, "maxItems": 2}),
        _single_key("Fn::Sub", {"anyOf": [{"type": "string"}, {"type": "array"}]}),
        _single_key("Fn::ImportValue", {}),
    ]
}

STATE_MACHINE_SCHEMA: JsonSchema = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "id": {"type": "string", "pattern": "^[A-Za-z0-9]+$"},
        "name": {"type": "string", "minLength": 1},
        "definition": {"type": ["object", "string"]},
        "role": ARN_SCHEMA,
        "useExactVersion": {"type": "boolean"},
        "dependsOn": {
            "anyOf": [
                {"type": "string"},
                {"type": "array", "items": {"type": "string"}},
            ]
        },
        "tags": {
            "type": "object",
            "additionalProperties": {"type": ["string", "number", "boolean"]},
        },
        # Consumed by the event, alarm and notification compile steps.
        "events": {"type": "array"},
        "alarms": {"type": "object"},
        "notifications": {"type": "object"},
    },
    "required": ["definition"],
    "additionalProperties": False,
}
