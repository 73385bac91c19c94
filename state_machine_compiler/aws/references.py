"""
Reference translation for intrinsics extracted from state machine definitions.

``translate_local_function_names`` rewrites references to functions declared in
the service (``{"Fn::GetAtt": ["hello", "Arn"]}``) into references to their
compiled Lambda resources (``{"Fn::GetAtt": ["HelloLambdaFunction", "Arn"]}``).

``convert_to_function_version`` pins a Lambda reference to the
``AWS::Lambda::Version`` resource published for it in the template.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from state_machine_compiler.aws.naming import lambda_logical_id
from state_machine_compiler.errors import VersionResolutionError

LAMBDA_FUNCTION_TYPE = "AWS::Lambda::Function"
LAMBDA_VERSION_TYPE = "AWS::Lambda::Version"


class AwsReferenceResolver:
    def __init__(self, functions: Iterable[str], template: Mapping[str, Any]) -> None:
        self._functions = set(functions)
        # Read lazily: earlier compile steps keep adding resources to the template.
        self._template = template

    @property
    def resources(self) -> Mapping[str, Any]:
        return self._template.get("Resources") or {}

    def translate_local_function_names(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self.translate_local_function_names(item) for item in value]
        if not isinstance(value, Mapping):
            return value

        if set(value) == {"Ref"} and self._is_local_function(value["Ref"]):
            return {"Ref": lambda_logical_id(value["Ref"])}

        if set(value) == {"Fn::GetAtt"}:
            target, attribute = _split_get_att(value["Fn::GetAtt"])
            if self._is_local_function(target):
                return {"Fn::GetAtt": [lambda_logical_id(target), attribute]}
            return value

        return {key: self.translate_local_function_names(item) for key, item in value.items()}

    def _is_local_function(self, name: Any) -> bool:
        return isinstance(name, str) and name in self._functions

    def convert_to_function_version(self, value: Any) -> Any:
        logical_id = self._lambda_target(value)
        if logical_id is None:
            return value

        version_id = self._find_version(logical_id)
        if version_id is None:
            raise VersionResolutionError(
                f"Cannot pin {logical_id} to an exact version: no {LAMBDA_VERSION_TYPE} "
                f"resource references it. Enable function versioning for it."
            )
        return {"Ref": version_id}

    def _lambda_target(self, value: Any) -> Optional[str]:
        if not isinstance(value, Mapping) or len(value) != 1:
            return None

        if "Fn::GetAtt" in value:
            target, attribute = _split_get_att(value["Fn::GetAtt"])
            if attribute != "Arn":
                return None
        elif "Ref" in value:
            target = value["Ref"]
        else:
            return None

        if not isinstance(target, str):
            return None
        resource = self.resources.get(target)
        if isinstance(resource, Mapping) and resource.get("Type") == LAMBDA_FUNCTION_TYPE:
            return target
        return None

    def _find_version(self, function_logical_id: str) -> Optional[str]:
        for logical_id, resource in self.resources.items():
            if not isinstance(resource, Mapping) or resource.get("Type") != LAMBDA_VERSION_TYPE:
                continue
            function_name = (resource.get("Properties") or {}).get("FunctionName")
            if function_name == {"Ref": function_logical_id} or function_name == function_logical_id:
                return logical_id
        return None


def _split_get_att(arguments: Any) -> tuple:
    if isinstance(arguments, str):
        target, _, attribute = arguments.partition(".")
        return target, attribute
    if isinstance(arguments, list) and len(arguments) == 2:
        return arguments[0], arguments[1]
    return None, None
