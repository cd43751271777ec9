"""
Expansion options

IncludeOptions is the immutable configuration value threaded through every
recursive expansion call. It can be built directly, from the environment
backed AppSettings, or from a YAML options file using the camelCase keys
common to JavaScript build-tool configs:

    extensions: [".html", ".svg"]
    delimiters: ["{{", "}}"]
    allowAbsolutePaths: false
    watch: true
    aliases:
      "@partials": src/partials
      "~": src
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..lib.errors import OptionsError

if TYPE_CHECKING:
    from ..config.settings import AppSettings


class Alias(BaseModel):
    """Path-prefix rewrite rule: '<find>/rest' becomes '<replacement>/rest'"""

    model_config = ConfigDict(frozen=True)

    find: str
    replacement: str


class IncludeOptions(BaseModel):
    """
    Configuration for an expansion call

    Attributes:
        extensions: Allowed include-target suffixes
        delimiters: Interpolation open/close markers
        allow_absolute_paths: Resolve include paths against the base
                              directory directly instead of forcing them
                              relative with a './' prefix
        watch: Report files read during expansion for file watching
        aliases: Ordered alias rules, first matching prefix wins
        root_dir: Directory that rooted ('/x.html') and aliased paths are
                  resolved against; None means the working directory
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    extensions: Tuple[str, ...] = Field(default=(".html", ".svg"))
    delimiters: Tuple[str, str] = Field(default=("{{", "}}"))
    allow_absolute_paths: bool = Field(default=False, alias="allowAbsolutePaths")
    watch: bool = Field(default=True)
    aliases: Tuple[Alias, ...] = Field(default=())
    root_dir: Optional[Path] = Field(default=None, alias="rootDir")

    @field_validator("extensions")
    @classmethod
    def extensions_validate(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if not value or any(not ext for ext in value):
            raise ValueError("extensions must be a non-empty list of non-empty suffixes")
        return value

    @field_validator("delimiters")
    @classmethod
    def delimiters_validate(cls, value: Tuple[str, str]) -> Tuple[str, str]:
        if not value[0] or not value[1]:
            raise ValueError("delimiters must both be non-empty strings")
        return value

    @field_validator("aliases", mode="before")
    @classmethod
    def aliases_normalize(cls, value: Any) -> Any:
        """Accept {find: replacement} mappings as well as lists of rules"""
        if isinstance(value, dict):
            return [{"find": find, "replacement": repl} for find, repl in value.items()]
        return value

    def root_get(self) -> Path:
        """Directory standing in for the process working directory"""
        return self.root_dir if self.root_dir is not None else Path.cwd()

    @classmethod
    def options_fromSettings(cls, settings: "AppSettings", **overrides: Any) -> "IncludeOptions":
        """
        Build options from application settings

        If settings.options_file is set, that YAML file provides the base
        values; the individual settings fields are used otherwise.

        Args:
            settings: AppSettings instance (usually the appsettings singleton)
            **overrides: Field values that take precedence over both

        Returns:
            IncludeOptions instance
        """
        if settings.options_file:
            return cls.options_fromYAML(Path(settings.options_file), **overrides)
        values: Dict[str, Any] = {
            "extensions": settings.extensions,
            "delimiters": (settings.delimiter_open, settings.delimiter_close),
            "allow_absolute_paths": settings.allow_absolute_paths,
            "watch": settings.watch,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def options_fromYAML(cls, path: Path, **overrides: Any) -> "IncludeOptions":
        """
        Load options from a YAML file

        Args:
            path: Path to the options file
            **overrides: Field values that take precedence over the file

        Returns:
            IncludeOptions instance

        Raises:
            OptionsError: If the file is missing, unparsable or invalid
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data: Any = yaml.safe_load(f)
        except OSError as e:
            raise OptionsError(f"Failed to read options file {path}: {e}")
        except yaml.YAMLError as e:
            raise OptionsError(f"Failed to parse options file {path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise OptionsError(f"Options file {path} must contain a mapping")

        data.update(overrides)
        try:
            return cls(**data)
        except ValidationError as e:
            raise OptionsError(f"Invalid options in {path}: {e}")
