"""Command Context Configuration Module.

This module provides centralized configuration for context assembly and
request building. All settings support environment variable overrides with
the COMMAND_CONTEXT_ prefix.

Usage:
    from command_context.config import settings

    # Access context settings
    print(settings.context.max_human_input_tokens)

    # Derived result bound used by the assembler
    print(settings.context.max_snippets)

The assembler and request builder take a ContextSettings instance at
construction time; the module-level singleton is only their default.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "Settings",
    "ContextSettings",
    "LoggingSettings",
    "settings",
]


class ContextSettings(BaseSettings):
    """Configuration for context assembly and instruction truncation.

    These settings control how many context snippets survive the final
    bound, how long the instruction sent to the model may be, and how much
    of each file the workspace providers read.
    """

    model_config = SettingsConfigDict(env_prefix="COMMAND_CONTEXT_CONTEXT__")

    # Result budgets
    num_code_results: int = Field(
        default=12,
        ge=0,
        description="Budget for code results returned by codebase search",
    )
    num_text_results: int = Field(
        default=3,
        ge=0,
        description="Budget for text results returned by codebase search",
    )

    # Instruction truncation
    max_human_input_tokens: int = Field(
        default=1000,
        ge=0,
        description="Maximum tokens of instruction text sent to the model",
    )
    chars_per_token: int = Field(
        default=4,
        ge=1,
        description="Characters per token used for estimation and truncation",
    )

    # Workspace providers
    max_file_chars: int = Field(
        default=12_000,
        ge=0,
        description="Maximum characters of a file included in one snippet",
    )
    max_listing_entries: int = Field(
        default=200,
        ge=0,
        description="Maximum entries in a directory listing snippet",
    )
    max_dir_files: int = Field(
        default=10,
        ge=0,
        description="Maximum files read by the directory providers",
    )

    deduplicate: bool = Field(
        default=False,
        description=(
            "Collapse exact duplicate snippets before the final bound. Off by "
            "default: the bound then keeps an exact suffix of the gathered snippets"
        ),
    )

    command_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for capturing the output of a policy command",
    )

    @property
    def max_results(self) -> int:
        """Combined code/text result budget, rounded down to an even number."""
        return ((self.num_code_results + self.num_text_results) // 2) * 2

    @property
    def max_snippets(self) -> int:
        """Number of snippets kept by the assembler's final bound."""
        return self.max_results * 2

    @property
    def codebase_result_limit(self) -> int:
        """Number of results requested from codebase search."""
        return self.num_code_results + self.num_text_results

    @property
    def max_human_input_chars(self) -> int:
        return self.max_human_input_tokens * self.chars_per_token


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseSettings):
    """Configuration for structlog output."""

    model_config = SettingsConfigDict(env_prefix="COMMAND_CONTEXT_LOG__")

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log format: 'json' for JSON lines, 'console' for humans",
    )

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level


class Settings(BaseSettings):
    """Root settings class that composes all configuration sections.

    Each section validates its own fields, so a ContextSettings built on
    its own is held to the same bounds as one read through Settings.

    Example:
        from command_context.config import settings

        settings.context.num_code_results
        settings.logging.level
    """

    model_config = SettingsConfigDict(env_prefix="COMMAND_CONTEXT_")

    context: ContextSettings = Field(default_factory=ContextSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Module-level singleton instance
settings = Settings()
