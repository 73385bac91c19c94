"""
Logical ID derivation following the Serverless Framework conventions.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

EXECUTION_ROLE_LOGICAL_ID = "IamRoleStateMachineExecution"


def normalize_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def normalized_function_name(name: str) -> str:
    return normalize_name(name.replace("-", "Dash").replace("_", "Underscore"))


def lambda_logical_id(function_name: str) -> str:
    return f"{normalized_function_name(function_name)}LambdaFunction"


class ServerlessNaming:
    """
    Names state machine resources and outputs.

    A state machine declaring ``id`` (or, failing that, ``name``) is keyed by
    that value; otherwise the key under ``stateMachines`` is used with a
    ``StepFunctionsStateMachine`` suffix.
    """

    def state_machine_logical_id(self, name: str, state_machine: Optional[Mapping[str, Any]] = None) -> str:
        custom = _custom_id(state_machine)
        if custom:
            return normalized_function_name(custom)
        return f"{normalized_function_name(name)}StepFunctionsStateMachine"

    def state_machine_output_logical_id(
        self, name: str, state_machine: Optional[Mapping[str, Any]] = None
    ) -> str:
        return f"{self.state_machine_logical_id(name, state_machine)}Arn"


def _custom_id(state_machine: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not state_machine:
        return None
    return state_machine.get("id") or state_machine.get("name")
