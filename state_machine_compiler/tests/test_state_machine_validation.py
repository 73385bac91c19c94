from __future__ import annotations

import pytest

from state_machine_compiler.compiler.validate import lint_state_machine, validate_state_machine
from state_machine_compiler.errors import InvalidDefinitionError, MalformedStateMachineError
from state_machine_compiler.lint.asl import LintError, LintResult

DEFINITION = {"StartAt": "A", "States": {"A": {"Type": "Succeed"}}}


@pytest.mark.parametrize(
    "state_machine",
    [
        {"definition": DEFINITION},
        {"definition": '{"StartAt": "A"}'},
        {
            "id": "Orders",
            "name": "orders-flow",
            "definition": DEFINITION,
            "role": {"Fn::GetAtt": ["CustomRole", "Arn"]},
            "useExactVersion": True,
            "dependsOn": ["Table", "Queue"],
            "tags": {"team": "payments", "tier": 1, "public": False},
            "events": [{"http": {"path": "start", "method": "post"}}],
            "alarms": {"metrics": ["executionsFailed"]},
            "notifications": {"FAILED": [{"sns": "arn:aws:sns:us-east-1:123:topic"}]},
        },
        {"definition": DEFINITION, "role": "arn:aws:iam::123456789012:role/sfn"},
        {"definition": DEFINITION, "role": {"Fn::GetAtt": "CustomRole.Arn"}},
        {"definition": DEFINITION, "role": {"Fn::ImportValue": "shared-role-arn"}},
        {"definition": DEFINITION, "dependsOn": "Table"},
    ],
)
def test_valid_state_machines_pass(state_machine) -> None:
    validate_state_machine("flow", state_machine)


@pytest.mark.parametrize(
    "state_machine, fragment",
    [
        ({}, "'definition' is a required property"),
        ({"definition": DEFINITION, "definitoin": {}}, "'definitoin' was unexpected"),
        ({"definition": DEFINITION, "role": "my-role"}, "$.role"),
        ({"definition": DEFINITION, "dependsOn": 5}, "$.dependsOn"),
        ({"definition": DEFINITION, "useExactVersion": "yes"}, "$.useExactVersion"),
        ({"definition": DEFINITION, "tags": {"nested": {"x": 1}}}, "$.tags.nested"),
        ({"definition": 42}, "$.definition"),
        ({"definition": DEFINITION, "id": "has-dash"}, "$.id"),
        (["not", "a", "mapping"], "is not of type 'object'"),
    ],
)
def test_malformed_state_machines_raise(state_machine, fragment) -> None:
    with pytest.raises(MalformedStateMachineError) as excinfo:
        validate_state_machine("broken", state_machine)

    message = str(excinfo.value)
    assert message.startswith("State machine [broken] is malformed.")
    assert fragment in message
    assert excinfo.value.state_machine == "broken"


def test_lint_state_machine_passes_valid_definition() -> None:
    lint_state_machine("flow", {"definition": DEFINITION}, lambda definition: LintResult(is_valid=True))


def test_lint_state_machine_reports_errors() -> None:
    errors = [LintError("MISSING_TRANSITION_TARGET", "State 'A' transitions to unknown state 'B'", "$.States.A.Next")]

    with pytest.raises(InvalidDefinitionError) as excinfo:
        lint_state_machine("flow", {"definition": DEFINITION}, lambda definition: LintResult(False, errors))

    message = str(excinfo.value)
    assert message.splitlines()[0] == '✕ State machine "flow" definition is invalid:'
    assert "MISSING_TRANSITION_TARGET" in message
    assert excinfo.value.errors == errors
    assert excinfo.value.state_machine == "flow"
