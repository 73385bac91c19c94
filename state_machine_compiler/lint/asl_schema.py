"""
JSON Schema fragments for Amazon States Language documents.

Values that may be written as CloudFormation intrinsics (``Resource`` and the
like) accept any object, since linting runs before intrinsics are extracted.
"""

from __future__ import annotations

from state_machine_compiler.schema.jsonschema_adapter import JsonSchema

STATE_MACHINE_DOCUMENT_ID = "asl.stateMachine@v1"
STATE_ID = "asl.state@v1"

STATE_TYPES = ("Task", "Pass", "Choice", "Wait", "Succeed", "Fail", "Parallel", "Map")

_STRING_OR_INTRINSIC: JsonSchema = {"anyOf": [{"type": "string"}, {"type": "object"}]}
_PATH: JsonSchema = {"type": ["string", "null"]}
_SECONDS: JsonSchema = {"anyOf": [{"type": "integer", "minimum": 0}, {"type": "object"}]}

_RETRIER: JsonSchema = {
    "type": "object",
    "properties": {
        "ErrorEquals": {"type": "array", "items": {"type": "string"}, "minItems": 1},
        "IntervalSeconds": {"type": "integer", "minimum": 1},
        "MaxAttempts": {"type": "integer", "minimum": 0},
        "BackoffRate": {"type": "number", "minimum": 1},
    },
    "required": ["ErrorEquals"],
}

_CATCHER: JsonSchema = {
    "type": "object",
    "properties": {
        "ErrorEquals": {"type": "array", "items": {"type": "string"}, "minItems": 1},
        "Next": {"type": "string"},
        "ResultPath": _PATH,
    },
    "required": ["ErrorEquals", "Next"],
}

_CHOICE_RULE: JsonSchema = {
    "type": "object",
    "properties": {"Next": {"type": "string"}},
    "required": ["Next"],
}


def _when(state_type: str, then: JsonSchema) -> JsonSchema:
    return {
        "if": {"properties": {"Type": {"const": state_type}}, "required": ["Type"]},
        "then": then,
    }


STATE_SCHEMA: JsonSchema = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "Type": {"enum": list(STATE_TYPES)},
        "Comment": {"type": "string"},
        "Next": {"type": "string", "minLength": 1},
        "End": {"type": "boolean"},
        "InputPath": _PATH,
        "OutputPath": _PATH,
        "ResultPath": _PATH,
        "Parameters": {"type": "object"},
        "ResultSelector": {"type": "object"},
        "Retry": {"type": "array", "items": _RETRIER},
        "Catch": {"type": "array", "items": _CATCHER},
        "TimeoutSeconds": _SECONDS,
        "HeartbeatSeconds": _SECONDS,
    },
    "required": ["Type"],
    "allOf": [
        _when("Task", {"properties": {"Resource": _STRING_OR_INTRINSIC}, "required": ["Resource"]}),
        _when(
            "Choice",
            {
                "properties": {
                    "Choices": {"type": "array", "items": _CHOICE_RULE, "minItems": 1},
                    "Default": {"type": "string"},
                },
                "required": ["Choices"],
            },
        ),
        _when(
            "Wait",
            {
                "properties": {
                    "Seconds": _SECONDS,
                    "Timestamp": {"type": "string"},
                    "SecondsPath": {"type": "string"},
                    "TimestampPath": {"type": "string"},
                },
                "oneOf": [
                    {"required": ["Seconds"]},
                    {"required": ["Timestamp"]},
                    {"required": ["SecondsPath"]},
                    {"required": ["TimestampPath"]},
                ],
            },
        ),
        _when(
            "Fail",
            {"properties": {"Error": {"type": "string"}, "Cause": {"type": "string"}}},
        ),
        _when(
            "Parallel",
            {
                "properties": {"Branches": {"type": "array", "items": {"type": "object"}, "minItems": 1}},
                "required": ["Branches"],
            },
        ),
        _when(
            "Map",
            {
                "properties": {
                    "Iterator": {"type": "object"},
                    "ItemProcessor": {"type": "object"},
                    "MaxConcurrency": {"type": "integer", "minimum": 0},
                },
                "anyOf": [{"required": ["Iterator"]}, {"required": ["ItemProcessor"]}],
            },
        ),
    ],
}

STATE_MACHINE_DOCUMENT_SCHEMA: JsonSchema = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "Comment": {"type": "string"},
        "StartAt": {"type": "string", "minLength": 1},
        "States": {"type": "object", "minProperties": 1},
        "Version": {"type": "string"},
        "TimeoutSeconds": {"type": "integer", "minimum": 0},
    },
    "required": ["StartAt", "States"],
}
