"""
Public entrypoint for compiling Step Functions state machines into
CloudFormation resources.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping

from shared.logger import get_logger
from state_machine_compiler.compiler.context import CompilerContext
from state_machine_compiler.compiler.merge import deep_merge
from state_machine_compiler.compiler.placeholders import TokenGenerator
from state_machine_compiler.compiler.resources import CompiledStateMachine, build_state_machine
from state_machine_compiler.compiler.template import (
    SubstitutionTemplate,
    build_definition_string,
    pin_exact_versions,
)
from state_machine_compiler.compiler.validate import lint_state_machine, validate_state_machine
from state_machine_compiler.errors import (
    PlaceholderExhaustedError,
    StateMachineCompilerError,
    VersionResolutionError,
)

logger = get_logger(__name__)


def compile_state_machine(
    name: str,
    state_machine: Mapping[str, Any],
    context: CompilerContext,
    next_token: TokenGenerator,
) -> CompiledStateMachine:
    """
    Validate and compile a single state machine block.
    """

    validate_state_machine(name, state_machine)
    if context.validate:
        lint_state_machine(name, state_machine, context.lint_definition)

    try:
        definition = build_definition_string(
            state_machine["definition"],
            next_token,
            context.translate_reference,
            indent=context.indent,
        )
    except PlaceholderExhaustedError as exc:
        raise PlaceholderExhaustedError(
            f"State machine [{name}] cannot be compiled: {exc}",
            state_machine=name,
        ) from exc
    if isinstance(definition, SubstitutionTemplate):
        logger.debug(
            f'State machine "{name}" substitutes {len(definition.parameters)} '
            f"intrinsic(s): {list(definition.parameters)}"
        )
    try:
        definition = pin_exact_versions(
            definition,
            context.resolve_version,
            enabled=state_machine.get("useExactVersion") is True,
        )
    except VersionResolutionError as exc:
        raise VersionResolutionError(
            f"State machine [{name}] cannot use exact versions: {exc}",
            state_machine=name,
        ) from exc

    return build_state_machine(name, state_machine, definition, context)


def compile_state_machines(
    state_machines: Mapping[str, Mapping[str, Any]],
    template: MutableMapping[str, Any],
    context: CompilerContext,
) -> MutableMapping[str, Any]:
    """
    Compile every state machine in declaration order and merge the results
    into ``template``'s ``Resources`` and ``Outputs``.

    The first failure aborts the run; nothing is merged for the failing state
    machine.
    """

    next_token = context.token_factory()
    resources = template.setdefault("Resources", {})
    outputs = template.setdefault("Outputs", {})

    for name, state_machine in state_machines.items():
        compiled = compile_state_machine(name, state_machine, context, next_token)
        deep_merge(resources, compiled.resources_fragment())
        deep_merge(outputs, compiled.outputs_fragment())
        logger.info(f'Compiled state machine "{name}" as {compiled.logical_id}')

    return template


__all__ = [
    "CompiledStateMachine",
    "CompilerContext",
    "StateMachineCompilerError",
    "compile_state_machine",
    "compile_state_machines",
]
