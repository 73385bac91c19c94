"""
Render a state machine definition into the ``DefinitionString`` property.

Definitions without intrinsics become plain JSON text. Definitions with
intrinsics become an ``Fn::Sub`` whose parameters hold the translated
references, optionally pinned to published function versions.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Union

from state_machine_compiler.compiler.intrinsics import IntrinsicPair, extract_intrinsic_functions
from state_machine_compiler.compiler.placeholders import TokenGenerator

Translator = Callable[[Any], Any]


@dataclass
class SubstitutionTemplate:
    text: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_intrinsic(self) -> Dict[str, List[Any]]:
        return {"Fn::Sub": [self.text, dict(self.parameters)]}


DefinitionString = Union[str, SubstitutionTemplate]


def serialize_definition(tree: Any, *, indent: int = 2) -> str:
    return json.dumps(tree, indent=indent, ensure_ascii=False)


def render_literal_definition(definition: str) -> str:
    """
    Literal definitions are passed through with line breaks removed.
    """

    return definition.replace("\r", "").replace("\n", "")


def assemble_definition(
    tree: Any,
    pairs: List[IntrinsicPair],
    translate: Translator,
    *,
    indent: int = 2,
) -> DefinitionString:
    text = serialize_definition(tree, indent=indent)
    if not pairs:
        return text

    parameters = {token: translate(reference) for token, reference in pairs}
    return SubstitutionTemplate(text=text, parameters=parameters)


def build_definition_string(
    definition: Any,
    next_token: TokenGenerator,
    translate: Translator,
    *,
    indent: int = 2,
) -> DefinitionString:
    if isinstance(definition, str):
        return render_literal_definition(definition)

    tree, pairs = extract_intrinsic_functions(definition, next_token)
    return assemble_definition(tree, pairs, translate, indent=indent)


def pin_exact_versions(
    definition: DefinitionString,
    resolve_version: Translator,
    *,
    enabled: bool,
) -> DefinitionString:
    """
    Rewrite every ``Fn::Sub`` parameter to its published version reference.

    Plain string definitions have nothing to pin and are returned unchanged.
    """

    if not enabled or not isinstance(definition, SubstitutionTemplate):
        return definition
    return SubstitutionTemplate(
        text=definition.text,
        parameters={token: resolve_version(value) for token, value in definition.parameters.items()},
    )


def to_property(definition: DefinitionString) -> Union[str, Dict[str, List[Any]]]:
    if isinstance(definition, SubstitutionTemplate):
        return definition.to_intrinsic()
    return definition
