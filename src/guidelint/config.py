"""
guidelint Configuration

Loads settings from a YAML file, environment variables and CLI overrides.
The file schema is validated with pydantic so a typo in a rule option is
reported instead of silently ignored.

Precedence (highest first):
    CLI overrides > GUIDELINT_FAIL_ON > config file > defaults

Config file lookup:
    --config PATH > $GUIDELINT_CONFIG > ./.guidelint.yaml > ~/.guidelint.yaml
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from guidelint.scanner.languages import PROFILES, LanguageProfile

logger = logging.getLogger(__name__)


CONFIG_FILENAME = ".guidelint.yaml"
ENV_CONFIG = "GUIDELINT_CONFIG"
ENV_FAIL_ON = "GUIDELINT_FAIL_ON"

SeverityName = Literal["error", "warning", "info", "hint"]
StyleName = Literal["pascal", "camel", "upper_snake", "snake", "any"]

DECLARATION_KINDS = ("type", "function", "variable", "constant", "enum_case", "property")

DEFAULT_EXCLUDE_DIRS = [
    ".git",
    ".svn",
    ".hg",
    ".idea",
    ".gradle",
    ".build",
    "build",
    "bin",
    "obj",
    "out",
    "node_modules",
    "Pods",
    "Carthage",
    "DerivedData",
]


class ConfigError(Exception):
    """Configuration could not be loaded or is invalid."""


class NamingSettings(BaseModel):
    """Options for the N-series naming rules."""
    model_config = ConfigDict(extra="forbid")

    styles: dict[str, StyleName] = Field(default_factory=dict)
    type_prefix: str = ""
    forbidden_prefixes: list[str] = Field(default_factory=lambda: ["m_", "s_", "g_"])
    min_length: int = Field(default=2, ge=1)
    allowed_short_names: list[str] = Field(
        default_factory=lambda: ["i", "j", "k", "x", "y", "z", "id", "ok", "_"]
    )

    @field_validator("styles")
    @classmethod
    def _known_kinds(cls, value: dict[str, str]) -> dict[str, str]:
        unknown = sorted(set(value) - set(DECLARATION_KINDS))
        if unknown:
            raise ValueError(f"unknown declaration kinds {unknown}; expected {list(DECLARATION_KINDS)}")
        return value


class CommentSettings(BaseModel):
    """Options for the C-series comment rules."""
    model_config = ConfigDict(extra="forbid")

    min_density: float = Field(default=0.05, ge=0.0)
    max_density: float = Field(default=0.6, ge=0.0)
    min_code_lines: int = Field(default=20, ge=0)
    require_docs_for: list[str] = Field(default_factory=lambda: ["public", "open"])
    todo_markers: list[str] = Field(default_factory=lambda: ["TODO", "FIXME"])
    todo_pattern: str = r"^(TODO|FIXME)\([^)]+\):"

    @field_validator("todo_pattern")
    @classmethod
    def _compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _density_range(self) -> "CommentSettings":
        if self.min_density > self.max_density:
            raise ValueError("min_density must not exceed max_density")
        return self


class FormattingSettings(BaseModel):
    """Options for the F-series formatting rules."""
    model_config = ConfigDict(extra="forbid")

    max_line_length: int = Field(default=120, ge=1)
    indent: Literal["spaces", "tabs"] = "spaces"
    max_blank_lines: int = Field(default=2, ge=0)
    brace_style: Literal["auto", "same_line", "next_line"] = "auto"


class DocsSettings(BaseModel):
    """Options for the D-series document rules."""
    model_config = ConfigDict(extra="forbid")

    check_snippets: bool = True
    skip_languages: list[str] = Field(default_factory=list)


class RuleSetting(BaseModel):
    """Per-rule switch and severity override."""
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    severity: Optional[SeverityName] = None


class Settings(BaseModel):
    """Complete linter settings."""
    model_config = ConfigDict(extra="forbid")

    language: Optional[str] = None
    exclude: list[str] = Field(default_factory=list)
    exclude_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    fail_on: SeverityName = "error"
    check_docs: bool = True
    select: list[str] = Field(default_factory=list)
    ignore: list[str] = Field(default_factory=list)

    naming: NamingSettings = Field(default_factory=NamingSettings)
    comments: CommentSettings = Field(default_factory=CommentSettings)
    formatting: FormattingSettings = Field(default_factory=FormattingSettings)
    docs: DocsSettings = Field(default_factory=DocsSettings)
    rules: dict[str, RuleSetting] = Field(default_factory=dict)

    @field_validator("language")
    @classmethod
    def _known_language(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "auto":
            return None
        if value.lower() not in PROFILES:
            raise ValueError(f"unknown language {value!r}; expected one of {sorted(PROFILES)}")
        return value.lower()

    # -------------------------------------------------------------------------
    # Queries used by the engine and rules
    # -------------------------------------------------------------------------

    def rule_enabled(self, rule_id: str) -> bool:
        """
        Check whether a rule should run.

        `select` and `ignore` entries match by prefix, so "N" covers every
        naming rule and "N01" covers N010-N019.
        """
        if self.select and not any(rule_id.startswith(s) for s in self.select):
            return False
        if any(rule_id.startswith(s) for s in self.ignore):
            return False
        setting = self.rules.get(rule_id)
        return setting.enabled if setting else True

    def severity_override(self, rule_id: str) -> Optional[str]:
        setting = self.rules.get(rule_id)
        return setting.severity if setting else None

    def naming_style(self, kind: str, profile: LanguageProfile) -> str:
        return self.naming.styles.get(kind) or profile.naming_styles.get(kind, "any")

    def brace_style(self, profile: LanguageProfile) -> str:
        if self.formatting.brace_style == "auto":
            return profile.brace_style
        return self.formatting.brace_style


def config_search_paths() -> list[Path]:
    """Default configuration file locations (checked in order)."""
    return [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / CONFIG_FILENAME,
    ]


def find_config(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Locate the configuration file to load, if any."""
    if explicit_path is not None:
        if not explicit_path.exists():
            raise ConfigError(f"Config file not found: {explicit_path}")
        return explicit_path

    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        path = Path(env_path)
        if not path.exists():
            raise ConfigError(f"Config file from ${ENV_CONFIG} not found: {path}")
        return path

    for candidate in config_search_paths():
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a mapping. Empty files are allowed."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(data).__name__} in {path}")
    return data


def load_settings(
    config_path: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> Settings:
    """
    Build Settings from file, environment and overrides.

    Args:
        config_path: Explicit config file (must exist).
        overrides: Top-level keys to force, typically from the CLI. None
            values are ignored.

    Raises:
        ConfigError: If the file is missing, unreadable or fails validation.
    """
    path = find_config(config_path)
    data: dict[str, Any] = {}
    if path is not None:
        data = read_config_file(path)
        logger.info(f"Loaded configuration from {path}")
    else:
        logger.debug("No configuration file found, using defaults")

    env_fail_on = os.environ.get(ENV_FAIL_ON)
    if env_fail_on:
        data["fail_on"] = env_fail_on.lower()

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        where = f" in {path}" if path else ""
        raise ConfigError(f"Invalid configuration{where}:\n{exc}") from exc


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a commented default configuration file.

    Returns the path where config was written.
    """
    if path is None:
        path = Path.cwd() / CONFIG_FILENAME

    path.parent.mkdir(parents=True, exist_ok=True)

    config_content = """# guidelint configuration
#
# Every key is optional. Rule IDs in select/ignore match by prefix.

# language: swift          # force one profile (swift, kotlin, java, csharp)
fail_on: error             # lowest severity that fails the run
check_docs: true           # lint Markdown style guides too

exclude:
  - "**/Generated/**"

naming:
  type_prefix: ""
  forbidden_prefixes: [m_, s_, g_]
  min_length: 2
  # styles:
  #   constant: upper_snake

comments:
  min_density: 0.05
  max_density: 0.6
  min_code_lines: 20
  require_docs_for: [public, open]

formatting:
  max_line_length: 120
  indent: spaces
  max_blank_lines: 2
  brace_style: auto

rules:
  N012:
    severity: info
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(config_content)

    return path
