"""
Type-safe configuration for the state machine compiler using Pydantic Settings.

Values are loaded from environment variables and an optional .env file.

Usage:
    from shared.config import config

    if config.validate_definitions:
        ...
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CompilerConfig(BaseSettings):
    """
    Central configuration for the compiler.

    All configuration is loaded from environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ============================================================================
    # Compilation
    # ============================================================================

    validate_definitions: bool = Field(
        default=False,
        description="Lint every definition when the service document does not set stepFunctions.validate",
    )
    placeholder_strategy: Literal["sequential", "random"] = Field(
        default="sequential",
        description="How Fn::Sub parameter names are generated: 'sequential' (deterministic) or 'random'",
    )
    placeholder_length: int = Field(
        default=10,
        ge=4,
        description="Length of generated Fn::Sub parameter names",
    )
    definition_indent: int = Field(
        default=2,
        ge=0,
        description="Indentation used when serializing definitions",
    )

    # ============================================================================
    # Logging
    # ============================================================================

    log_level: str = Field(default="INFO", description="Log level for compiler loggers")

# ============================================================================
# Global Config Instance
# ============================================================================

config = CompilerConfig()
