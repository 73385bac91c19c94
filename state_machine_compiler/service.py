"""
Loading of service documents (``serverless.yml`` style) and existing
CloudFormation templates, and wiring of the AWS collaborators.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Dict, MutableMapping, Optional

import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from state_machine_compiler.aws.references import AwsReferenceResolver
from state_machine_compiler.cfn_yaml import load_yaml
from state_machine_compiler.compiler.context import CompilerContext
from state_machine_compiler.errors import ServiceLoadError


def _empty_section(value: Any) -> Any:
    # A section key with nothing under it (`functions:`) loads as None.
    return {} if value is None else value


Section = Annotated[Dict[str, Any], BeforeValidator(_empty_section)]


class LenientModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ProviderConfig(LenientModel):
    tags: Section = Field(default_factory=dict)


class StepFunctionsConfig(LenientModel):
    state_machines: Section = Field(default_factory=dict, alias="stateMachines")
    validate_definitions: Optional[bool] = Field(default=None, alias="validate")


class ServiceDocument(LenientModel):
    service: Any = None
    provider: Annotated[ProviderConfig, BeforeValidator(_empty_section)] = Field(default_factory=ProviderConfig)
    functions: Section = Field(default_factory=dict)
    step_functions: Annotated[StepFunctionsConfig, BeforeValidator(_empty_section)] = Field(
        default_factory=StepFunctionsConfig, alias="stepFunctions"
    )


def _read(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix.lower() == ".json":
                return json.load(handle)
            return load_yaml(handle)
    except OSError as exc:
        raise ServiceLoadError(f"Cannot read {path}: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ServiceLoadError(f"Cannot parse {path}: {exc}") from exc


def parse_service_document(data: Any) -> ServiceDocument:
    try:
        return ServiceDocument.model_validate(data)
    except ValidationError as exc:
        raise ServiceLoadError(f"Service document is malformed: {exc}") from exc


def load_service_document(path: str | Path) -> ServiceDocument:
    return parse_service_document(_read(Path(path)))


def load_template(path: str | Path | None = None) -> MutableMapping[str, Any]:
    """
    Load an existing CloudFormation template to merge into, or start empty.
    """

    if path is None:
        return {"Resources": {}, "Outputs": {}}
    template = _read(Path(path))
    if not isinstance(template, dict):
        raise ServiceLoadError(f"Template {path} must be a JSON object")
    template.setdefault("Resources", {})
    template.setdefault("Outputs", {})
    return template


def build_context(
    service: ServiceDocument,
    template: MutableMapping[str, Any],
    *,
    validate: Optional[bool] = None,
) -> CompilerContext:
    resolver = AwsReferenceResolver(service.functions.keys(), template)
    options: Dict[str, Any] = {}
    if validate is None:
        validate = service.step_functions.validate_definitions
    if validate is not None:
        options["validate"] = validate
    return CompilerContext(
        provider_tags=service.provider.tags,
        translate_reference=resolver.translate_local_function_names,
        resolve_version=resolver.convert_to_function_version,
        **options,
    )
