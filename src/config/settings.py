"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use HTMLINCLUDE_ prefix (e.g., HTMLINCLUDE_WATCH=false).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use HTMLINCLUDE_ prefix.

    Examples:
        HTMLINCLUDE_EXTENSIONS='[".html", ".svg", ".htm"]'
        HTMLINCLUDE_DELIMITER_OPEN='[['
        HTMLINCLUDE_DELIMITER_CLOSE=']]'
        HTMLINCLUDE_ALLOW_ABSOLUTE_PATHS=true
        HTMLINCLUDE_OPTIONS_FILE=htmlinclude.yaml
        HTMLINCLUDE_VERBOSITY=2
    """

    model_config = SettingsConfigDict(
        env_prefix="HTMLINCLUDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Expansion configuration
    extensions: List[str] = Field(
        default=[".html", ".svg"],
        description="Allowed include-target suffixes",
    )

    delimiter_open: str = Field(
        default="{{",
        description="Opening marker for {{$variable}} interpolation",
    )

    delimiter_close: str = Field(
        default="}}",
        description="Closing marker for {{$variable}} interpolation",
    )

    allow_absolute_paths: bool = Field(
        default=False,
        description="Resolve include paths against the base directory directly instead of forcing them relative",
    )

    watch: bool = Field(
        default=True,
        description="Report files read during expansion for file watching",
    )

    options_file: Optional[str] = Field(
        default=None,
        description="YAML options file (extensions, delimiters, aliases, ...); overrides the fields above",
    )

    # Output configuration
    verbosity: int = Field(
        default=1,
        description="Logging verbosity (0=warnings only, 1=normal, 2=verbose, 3=debug)",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
