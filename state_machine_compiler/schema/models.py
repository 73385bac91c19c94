"""
Pydantic models for the CloudFormation entries emitted per state machine.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

STATE_MACHINE_RESOURCE_TYPE = "AWS::StepFunctions::StateMachine"
STATE_MACHINE_OUTPUT_DESCRIPTION = "Current StateMachine Arn"

# Either a literal string or an intrinsic such as {"Fn::GetAtt": [...]}.
TemplateValue = Union[str, Dict[str, Any]]


class StrictModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        validate_assignment=True,
    )


class Tag(StrictModel):
    key: str = Field(alias="Key")
    value: str = Field(alias="Value")


class StateMachineProperties(StrictModel):
    definition_string: TemplateValue = Field(alias="DefinitionString")
    role_arn: TemplateValue = Field(alias="RoleArn")
    tags: List[Tag] = Field(default_factory=list, alias="Tags")
    state_machine_name: Optional[str] = Field(default=None, alias="StateMachineName")


class StateMachineResource(StrictModel):
    type: Literal["AWS::StepFunctions::StateMachine"] = Field(
        default=STATE_MACHINE_RESOURCE_TYPE, alias="Type"
    )
    properties: StateMachineProperties = Field(alias="Properties")
    depends_on: List[str] = Field(default_factory=list, alias="DependsOn")

    def to_template(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        if self.properties.state_machine_name is None:
            del data["Properties"]["StateMachineName"]
        return data


class StateMachineOutput(StrictModel):
    description: str = Field(default=STATE_MACHINE_OUTPUT_DESCRIPTION, alias="Description")
    value: Dict[str, str] = Field(alias="Value")

    def to_template(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
