"""
Container for the collaborators the compiler calls out to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol

from state_machine_compiler.aws.naming import ServerlessNaming
from state_machine_compiler.compiler.placeholders import TokenFactory, token_factory_from_config
from state_machine_compiler.errors import VersionResolutionError
from state_machine_compiler.lint.asl import LintResult, lint_definition


class LogicalIdNaming(Protocol):
    def state_machine_logical_id(self, name: str, state_machine: Mapping[str, Any]) -> str:
        ...

    def state_machine_output_logical_id(self, name: str, state_machine: Mapping[str, Any]) -> str:
        ...


def _identity(value: Any) -> Any:
    return value


def _no_version_resolver(value: Any) -> Any:
    raise VersionResolutionError(f"No version resolver configured to pin {value!r}")


def _validate_from_config() -> bool:
    from shared.config import config

    return config.validate_definitions


def _indent_from_config() -> int:
    from shared.config import config

    return config.definition_indent


@dataclass(frozen=True)
class CompilerContext:
    provider_tags: Optional[Mapping[str, Any]] = None
    naming: LogicalIdNaming = field(default_factory=ServerlessNaming)
    translate_reference: Callable[[Any], Any] = _identity
    resolve_version: Callable[[Any], Any] = _no_version_resolver
    lint_definition: Callable[[Any], LintResult] = lint_definition
    token_factory: TokenFactory = field(default_factory=token_factory_from_config)
    validate: bool = field(default_factory=_validate_from_config)
    indent: int = field(default_factory=_indent_from_config)
