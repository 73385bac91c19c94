from __future__ import annotations

import json

from state_machine_compiler.lint import lint_definition


def _codes(result):
    return [(error.code, error.path) for error in result.errors]


def test_valid_definition_with_intrinsic_resource() -> None:
    definition = {
        "Comment": "Order pipeline",
        "StartAt": "Charge",
        "States": {
            "Charge": {
                "Type": "Task",
                "Resource": {"Fn::GetAtt": ["charge", "Arn"]},
                "Retry": [{"ErrorEquals": ["States.Timeout"], "MaxAttempts": 2}],
                "Catch": [{"ErrorEquals": ["States.ALL"], "Next": "Failed"}],
                "Next": "Route",
            },
            "Route": {
                "Type": "Choice",
                "Choices": [{"Variable": "$.paid", "BooleanEquals": True, "Next": "Wait"}],
                "Default": "Failed",
            },
            "Wait": {"Type": "Wait", "Seconds": 10, "Next": "Done"},
            "Done": {"Type": "Succeed"},
            "Failed": {"Type": "Fail", "Error": "PaymentFailed"},
        },
    }

    result = lint_definition(definition)

    assert result.is_valid, result.errors
    assert result.errors == []


def test_missing_start_state() -> None:
    result = lint_definition({"StartAt": "Nope", "States": {"A": {"Type": "Succeed"}}})

    assert not result.is_valid
    assert _codes(result) == [("MISSING_TRANSITION_TARGET", "$.StartAt")]


def test_unknown_transition_targets() -> None:
    result = lint_definition(
        {
            "StartAt": "A",
            "States": {
                "A": {"Type": "Pass", "Next": "Ghost"},
                "B": {
                    "Type": "Choice",
                    "Choices": [{"Variable": "$.x", "IsPresent": True, "Next": "Phantom"}],
                    "Default": "Spirit",
                },
            },
        }
    )

    assert _codes(result) == [
        ("MISSING_TRANSITION_TARGET", "$.States.A.Next"),
        ("MISSING_TRANSITION_TARGET", "$.States.B.Default"),
        ("MISSING_TRANSITION_TARGET", "$.States.B.Choices[0].Next"),
    ]


def test_transition_rules() -> None:
    result = lint_definition(
        {
            "StartAt": "A",
            "States": {
                "A": {"Type": "Pass"},
                "B": {"Type": "Pass", "Next": "C", "End": True},
                "C": {"Type": "Succeed", "Next": "A"},
            },
        }
    )

    assert _codes(result) == [
        ("MISSING_TRANSITION", "$.States.A"),
        ("CONFLICTING_TRANSITION", "$.States.B"),
        ("TERMINAL_STATE_TRANSITION", "$.States.C"),
    ]


def test_state_shape_errors() -> None:
    result = lint_definition(
        {
            "StartAt": "A",
            "States": {
                "A": {"Type": "Task", "End": True},
                "B": {"Type": "Teleport", "End": True},
                "C": {"Type": "Wait", "End": True},
            },
        }
    )

    assert [code for code, _ in _codes(result)] == ["SCHEMA_VALIDATION_FAILED"] * 3
    messages = [error.message for error in result.errors]
    assert "'Resource' is a required property" in messages[0]
    assert messages[1].startswith("$.States.B.Type")


def test_document_shape_errors() -> None:
    result = lint_definition({"States": {}})

    assert not result.is_valid
    assert {code for code, _ in _codes(result)} == {"SCHEMA_VALIDATION_FAILED"}
    assert any("'StartAt' is a required property" in error.message for error in result.errors)


def test_parallel_branches_and_map_are_linted_recursively() -> None:
    result = lint_definition(
        {
            "StartAt": "Fan",
            "States": {
                "Fan": {
                    "Type": "Parallel",
                    "Branches": [
                        {"StartAt": "One", "States": {"One": {"Type": "Pass", "End": True}}},
                        {"StartAt": "Two", "States": {"Two": {"Type": "Pass", "Next": "Three"}}},
                    ],
                    "Next": "Each",
                },
                "Each": {
                    "Type": "Map",
                    "ItemProcessor": {"StartAt": "Missing", "States": {"Item": {"Type": "Succeed"}}},
                    "End": True,
                },
            },
        }
    )

    assert _codes(result) == [
        ("MISSING_TRANSITION_TARGET", "$.States.Fan.Branches[1].States.Two.Next"),
        ("MISSING_TRANSITION_TARGET", "$.States.Each.ItemProcessor.StartAt"),
    ]


def test_string_definitions_are_parsed() -> None:
    definition = {"StartAt": "A", "States": {"A": {"Type": "Succeed"}}}

    assert lint_definition(json.dumps(definition)).is_valid

    result = lint_definition("{not json")
    assert not result.is_valid
    assert result.errors[0].code == "INVALID_JSON"


def test_lint_error_as_dict() -> None:
    error = lint_definition({"StartAt": "B", "States": {"A": {"Type": "Succeed"}}}).errors[0]

    assert error.as_dict() == {
        "Error code": "MISSING_TRANSITION_TARGET",
        "Message": "StartAt 'B' does not name a state",
        "Path": "$.StartAt",
    }
