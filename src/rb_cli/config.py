import fnmatch
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from rb_linter.models import Severity

logger = logging.getLogger(__name__)

TOOL_KEY = "rb-lint"
CONFIG_FILES = (".rb-lint.toml", "pyproject.toml")


def find_config_file(directory: Path = Path(".")) -> Path | None:
    """First of .rb-lint.toml / pyproject.toml present in `directory`"""
    for name in CONFIG_FILES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


class ConfigError(Exception):
    """Raised for unreadable or invalid configuration files."""


class LintSettings(BaseModel):
    select: list[str] = Field(default_factory=lambda: ["P"])
    ignore: list[str] = Field(default_factory=list)
    severity: dict[str, Severity] = Field(default_factory=dict)
    exclude: list[str] = Field(default_factory=list)

    @field_validator("severity", mode="before")
    @classmethod
    def _upper_case_levels(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: level.upper() if isinstance(level, str) else level for key, level in value.items()}
        return value


class LintConfig:
    """Handles loading and validation of .rb-lint.toml configuration"""

    def __init__(self, config_path: Path | None = None):
        self.settings = LintSettings()
        self.source: Path | None = None

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    @property
    def select(self) -> list[str]:
        return self.settings.select

    @property
    def ignore(self) -> list[str]:
        return self.settings.ignore

    @property
    def severity_overrides(self) -> dict[str, Severity]:
        return self.settings.severity

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        lint_data = data.get("tool", {}).get(TOOL_KEY, {})
        try:
            self.settings = LintSettings(**lint_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid [tool.{TOOL_KEY}] section in {path}:\n{e}") from e

        self.source = path
        logger.debug(f"Loaded configuration from {path}")

    def override(self, select: list[str] | None = None, ignore: list[str] | None = None):
        """Command-line selections take precedence over the file."""
        if select:
            self.settings.select = list(select)
        if ignore:
            self.settings.ignore = self.settings.ignore + list(ignore)

    def is_excluded(self, file_path: Path) -> bool:
        path = file_path.as_posix()
        return any(
            fnmatch.fnmatch(path, pattern) or fnmatch.fnmatch(file_path.name, pattern)
            for pattern in self.settings.exclude
        )

    def apply_to_registry(self, registry: Any) -> list[Any]:
        """Return list of enabled rules based on this config"""
        return registry.get_enabled_rules(select=self.select, ignore=self.ignore)
