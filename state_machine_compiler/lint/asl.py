"""
Structural linter for Amazon States Language definitions.

The linter checks the document shape with JSON Schema and then walks the state
graph: the start state must exist, every transition must land on a declared
state, and each state must either continue or end. ``Parallel`` branches and
``Map`` iterators are linted as nested state machines.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Tuple

from state_machine_compiler.lint.asl_schema import (
    STATE_ID,
    STATE_MACHINE_DOCUMENT_ID,
    STATE_MACHINE_DOCUMENT_SCHEMA,
    STATE_SCHEMA,
)
from state_machine_compiler.schema.jsonschema_adapter import collect_errors

TERMINAL_TYPES = frozenset({"Choice", "Succeed", "Fail"})


@dataclass(frozen=True)
class LintError:
    code: str
    message: str
    path: str = "$"

    def as_dict(self) -> dict:
        return {"Error code": self.code, "Message": self.message, "Path": self.path}


@dataclass(frozen=True)
class LintResult:
    is_valid: bool
    errors: List[LintError] = field(default_factory=list)


def lint_definition(definition: Any) -> LintResult:
    if isinstance(definition, str):
        try:
            definition = json.loads(definition)
        except json.JSONDecodeError as exc:
            error = LintError("INVALID_JSON", f"Definition is not valid JSON: {exc}")
            return LintResult(is_valid=False, errors=[error])

    errors = list(_lint_machine(definition, "$"))
    return LintResult(is_valid=not errors, errors=errors)


def _lint_machine(document: Any, path: str) -> Iterator[LintError]:
    shape_errors = collect_errors(
        STATE_MACHINE_DOCUMENT_SCHEMA,
        document,
        schema_id=STATE_MACHINE_DOCUMENT_ID,
        prefix=path,
    )
    if shape_errors:
        for message in shape_errors:
            yield LintError("SCHEMA_VALIDATION_FAILED", message, path)
        return

    states: Mapping[str, Any] = document["States"]
    if document["StartAt"] not in states:
        yield LintError(
            "MISSING_TRANSITION_TARGET",
            f"StartAt '{document['StartAt']}' does not name a state",
            f"{path}.StartAt",
        )

    for name, state in states.items():
        yield from _lint_state(name, state, states, f"{path}.States.{name}")


def _lint_state(name: str, state: Any, states: Mapping[str, Any], path: str) -> Iterator[LintError]:
    shape_errors = collect_errors(STATE_SCHEMA, state, schema_id=STATE_ID, prefix=path)
    if shape_errors:
        for message in shape_errors:
            yield LintError("SCHEMA_VALIDATION_FAILED", message, path)
        return

    state_type = state["Type"]
    has_next = "Next" in state
    has_end = state.get("End") is True

    if state_type in TERMINAL_TYPES:
        if has_next or "End" in state:
            yield LintError(
                "TERMINAL_STATE_TRANSITION",
                f"{state_type} state '{name}' cannot declare Next or End",
                path,
            )
    elif has_next and has_end:
        yield LintError("CONFLICTING_TRANSITION", f"State '{name}' declares both Next and End", path)
    elif not has_next and not has_end:
        yield LintError("MISSING_TRANSITION", f"State '{name}' must declare Next or End", path)

    for target, target_path in _transitions(state, path):
        if target not in states:
            yield LintError(
                "MISSING_TRANSITION_TARGET",
                f"State '{name}' transitions to unknown state '{target}'",
                target_path,
            )

    if state_type == "Parallel":
        for index, branch in enumerate(state["Branches"]):
            yield from _lint_machine(branch, f"{path}.Branches[{index}]")
    elif state_type == "Map":
        key = "ItemProcessor" if "ItemProcessor" in state else "Iterator"
        yield from _lint_machine(state[key], f"{path}.{key}")


def _transitions(state: Mapping[str, Any], path: str) -> Iterator[Tuple[str, str]]:
    if "Next" in state:
        yield state["Next"], f"{path}.Next"
    if state["Type"] == "Choice":
        if "Default" in state:
            yield state["Default"], f"{path}.Default"
        for index, rule in enumerate(state["Choices"]):
            yield rule["Next"], f"{path}.Choices[{index}].Next"
    for index, catcher in enumerate(state.get("Catch", [])):
        yield catcher["Next"], f"{path}.Catch[{index}].Next"
