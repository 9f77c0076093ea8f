"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use STPP_ prefix (e.g., STPP_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use STPP_ prefix.

    Examples:
        STPP_DIRECTIVE_MARKER=@
        STPP_STRICT_MODE=true
        STPP_MAX_DEPTH=64
    """

    model_config = SettingsConfigDict(
        env_prefix="STPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Scanner configuration
    directive_marker: str = Field(
        default="#",
        min_length=1,
        max_length=1,
        description="Character that starts every directive",
    )

    keyword_capacity: int = Field(
        default=16,
        ge=1,
        description="Maximum directive keyword length; longer words are truncated",
    )

    # Interpreter configuration
    max_depth: int = Field(
        default=200,
        ge=1,
        description="Maximum conditional nesting depth before the run is aborted",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: treat malformed operator warnings as errors",
    )

    # I/O configuration
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read input and write output files",
    )

    encoding_errors: str = Field(
        default="surrogateescape",
        description="Codec error handler; surrogateescape passes undecodable bytes through unchanged",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
