"""
Shared exception hierarchy for the state machine compiler.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class StateMachineCompilerError(Exception):
    """Base class for all compiler related errors."""

    def __init__(self, message: str, *, state_machine: Optional[str] = None) -> None:
        super().__init__(message)
        self.state_machine = state_machine


class MalformedStateMachineError(StateMachineCompilerError):
    """Raised when a state machine block does not match the configuration schema."""


class InvalidDefinitionError(StateMachineCompilerError):
    """Raised when the linter rejects a state machine definition."""

    def __init__(
        self,
        message: str,
        *,
        state_machine: Optional[str] = None,
        errors: Sequence[Any] = (),
    ) -> None:
        super().__init__(message, state_machine=state_machine)
        self.errors = list(errors)


class VersionResolutionError(StateMachineCompilerError):
    """Raised when a reference cannot be pinned to a published function version."""


class ServiceLoadError(StateMachineCompilerError):
    """Raised when a service document or template cannot be read."""


class PlaceholderExhaustedError(StateMachineCompilerError):
    """Raised when a compilation pass runs out of placeholder names."""
