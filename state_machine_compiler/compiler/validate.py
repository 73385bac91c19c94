"""
Shape validation and optional linting of one state machine block.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping

from shared.logger import get_logger
from state_machine_compiler.errors import InvalidDefinitionError, MalformedStateMachineError
from state_machine_compiler.lint.asl import LintResult
from state_machine_compiler.schema.jsonschema_adapter import collect_errors
from state_machine_compiler.schema.state_machine_schema import (
    STATE_MACHINE_SCHEMA,
    STATE_MACHINE_SCHEMA_ID,
)

logger = get_logger(__name__)


def validate_state_machine(name: str, state_machine: Any) -> None:
    errors = collect_errors(STATE_MACHINE_SCHEMA, state_machine, schema_id=STATE_MACHINE_SCHEMA_ID)
    if errors:
        raise MalformedStateMachineError(
            f"State machine [{name}] is malformed. "
            "Please check the README for more info. "
            + "; ".join(errors),
            state_machine=name,
        )


def lint_state_machine(
    name: str,
    state_machine: Mapping[str, Any],
    lint: Callable[[Any], LintResult],
) -> None:
    result = lint(state_machine["definition"])
    if result.is_valid:
        logger.info(f'✓ State machine "{name}" definition is valid')
        return

    details = [error.as_dict() if hasattr(error, "as_dict") else error for error in result.errors]
    raise InvalidDefinitionError(
        "\n".join(
            [
                f'✕ State machine "{name}" definition is invalid:',
                json.dumps(details, default=str),
            ]
        ),
        state_machine=name,
        errors=result.errors,
    )
