"""
Assemble the resource and output entries for one compiled state machine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from state_machine_compiler.aws.naming import EXECUTION_ROLE_LOGICAL_ID
from state_machine_compiler.compiler.context import CompilerContext
from state_machine_compiler.compiler.tags import to_tags
from state_machine_compiler.compiler.template import DefinitionString, to_property
from state_machine_compiler.schema.models import (
    StateMachineOutput,
    StateMachineProperties,
    StateMachineResource,
    Tag,
)


@dataclass(frozen=True)
class CompiledStateMachine:
    name: str
    logical_id: str
    resource: StateMachineResource
    output_logical_id: str
    output: StateMachineOutput

    def resources_fragment(self) -> Dict[str, Any]:
        return {self.logical_id: self.resource.to_template()}

    def outputs_fragment(self) -> Dict[str, Any]:
        return {self.output_logical_id: self.output.to_template()}


def resolve_role(state_machine: Mapping[str, Any]) -> Tuple[Any, List[str]]:
    """
    Return the role reference and the dependencies it introduces.
    """

    role = state_machine.get("role")
    if role:
        return role, []
    return {"Fn::GetAtt": [EXECUTION_ROLE_LOGICAL_ID, "Arn"]}, [EXECUTION_ROLE_LOGICAL_ID]


def resolve_depends_on(state_machine: Mapping[str, Any], role_dependencies: List[str]) -> List[str]:
    depends_on = list(role_dependencies)
    declared = state_machine.get("dependsOn")
    if not declared:
        return depends_on
    if isinstance(declared, list):
        depends_on.extend(declared)
    else:
        depends_on.append(declared)
    return depends_on


def resolve_tags(
    provider_tags: Optional[Mapping[str, Any]],
    state_machine_tags: Optional[Mapping[str, Any]],
) -> List[Dict[str, str]]:
    # Duplicate keys are kept; CloudFormation applies the last one.
    return to_tags(provider_tags) + to_tags(state_machine_tags)


def build_state_machine(
    name: str,
    state_machine: Mapping[str, Any],
    definition: DefinitionString,
    context: CompilerContext,
) -> CompiledStateMachine:
    role_arn, role_dependencies = resolve_role(state_machine)
    tags = resolve_tags(context.provider_tags, state_machine.get("tags"))

    logical_id = context.naming.state_machine_logical_id(name, state_machine)
    output_logical_id = context.naming.state_machine_output_logical_id(name, state_machine)

    resource = StateMachineResource(
        properties=StateMachineProperties(
            definition_string=to_property(definition),
            role_arn=role_arn,
            tags=[Tag.model_validate(tag) for tag in tags],
            state_machine_name=state_machine.get("name"),
        ),
        depends_on=resolve_depends_on(state_machine, role_dependencies),
    )
    output = StateMachineOutput(value={"Ref": logical_id})
    return CompiledStateMachine(
        name=name,
        logical_id=logical_id,
        resource=resource,
        output_logical_id=output_logical_id,
        output=output,
    )
