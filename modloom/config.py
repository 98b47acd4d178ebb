"""modloom configuration.

Typed configuration for projects, modules and generator runs.  The project
and module files are plain JSON with camelCase keys; both are validated with
Pydantic v2 models when loaded, so the generator only ever sees well-formed
configuration.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .utils import is_valid_name

PROJECT_CONFIG_FILENAME = "modloom-config.json"
MODULE_CONFIG_FILENAME = "config.json"
SCRIPT_EXTENSION = ".lua"
INIT_SCRIPT_PREFIX = "modloom_init"


class ConfigError(Exception):
    """Raised when a configuration file is missing or invalid."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ProjectType(str, Enum):
    """Kind of Garry's Mod project being generated."""

    ADDON = "addon"
    GAMEMODE = "gamemode"

    @property
    def script_folder(self) -> str:
        """Top-level folder holding the project's scripts."""
        return "lua" if self is ProjectType.ADDON else "gamemode"


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


def _check_name(value: str, what: str) -> str:
    if not is_valid_name(value):
        raise ValueError(
            f"{what} '{value}' is invalid, must be an alphanumeric name (A-Z, 0-9, - or _)"
        )
    return value


def _normalize_prefixes(value: list[str]) -> list[str]:
    prefixes = []
    for prefix in value:
        if not prefix.strip():
            raise ValueError("realm prefixes cannot be empty or whitespace")
        prefixes.append(prefix.lower())
    return prefixes


class ProjectConfig(BaseModel):
    """Project-wide settings read from ``modloom-config.json``.

    Prefix lists decide each script's realm by file name.  ``load_order``
    lists module folder names to generate first; every other module folder
    follows in file-system order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_name: str = Field(..., alias="projectName", description="Used in generated file names")
    project_type: ProjectType = Field(..., alias="projectType")
    folder_name: str = Field(
        ..., alias="folderName", description="Modules folder, conventionally '<name>-modules'"
    )
    client_prefixes: list[str] = Field(default_factory=lambda: ["cl_"], alias="clientPrefixes")
    shared_prefixes: list[str] = Field(default_factory=lambda: ["sh_"], alias="sharedPrefixes")
    server_prefixes: list[str] = Field(default_factory=lambda: ["sv_"], alias="serverPrefixes")
    load_order: list[str] = Field(default_factory=list, alias="loadOrder")

    @field_validator("project_name")
    @classmethod
    def _validate_project_name(cls, value: str) -> str:
        return _check_name(value, "Project name")

    @field_validator("folder_name")
    @classmethod
    def _validate_folder_name(cls, value: str) -> str:
        return _check_name(value, "Project module folder name")

    @field_validator("client_prefixes", "shared_prefixes", "server_prefixes")
    @classmethod
    def _validate_prefixes(cls, value: list[str]) -> list[str]:
        return _normalize_prefixes(value)

    @field_validator("load_order")
    @classmethod
    def _validate_load_order(cls, value: list[str]) -> list[str]:
        for module_name in value:
            _check_name(module_name, "Module in load order")
        return value

    @classmethod
    def create_default(cls, name: str, project_type: ProjectType | str) -> "ProjectConfig":
        """Build the configuration written by ``modloom setup``."""
        return cls(
            project_name=name,
            project_type=ProjectType(project_type),
            folder_name=f"{name.lower()}-modules",
        )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def script_folder(self) -> str:
        return self.project_type.script_folder

    def script_root(self, project_root: Path) -> Path:
        """Folder that generated paths are relative to (``lua/`` or ``gamemode/``)."""
        return Path(project_root) / self.script_folder

    def modules_dir(self, project_root: Path) -> Path:
        """Folder containing one subfolder per module."""
        return self.script_root(project_root) / self.folder_name

    @property
    def server_init_path(self) -> Path:
        """Server bootstrap file, relative to the project root."""
        if self.project_type is ProjectType.ADDON:
            filename = f"{INIT_SCRIPT_PREFIX}_{self.project_name.lower()}{SCRIPT_EXTENSION}"
            return Path("lua") / "autorun" / "server" / filename
        return Path("gamemode") / f"init{SCRIPT_EXTENSION}"

    @property
    def client_init_path(self) -> Path:
        """Client bootstrap file, relative to the project root."""
        if self.project_type is ProjectType.ADDON:
            filename = f"{INIT_SCRIPT_PREFIX}_{self.project_name.lower()}{SCRIPT_EXTENSION}"
            return Path("lua") / "autorun" / "client" / filename
        return Path("gamemode") / f"cl_init{SCRIPT_EXTENSION}"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Write the configuration as pretty-printed JSON."""
        return _save_model(self, path)

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load and validate a project configuration.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(
                path, f"Could not find configuration file at '{path}'. Run modloom setup first!"
            )
        return _load_model(cls, path, "configuration file")


# ---------------------------------------------------------------------------
# Module configuration
# ---------------------------------------------------------------------------


class ModuleConfig(BaseModel):
    """Per-module settings read from ``<module>/config.json``.

    ``load_order`` entries are paths relative to the module folder and may
    name files or directories.  Scripts not covered by any entry are still
    generated, after the listed ones.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    description: str = "No description provided"
    load_order: list[str] = Field(default_factory=list, alias="loadOrder")

    def save(self, path: Path) -> Path:
        """Write the configuration as pretty-printed JSON."""
        return _save_model(self, path)

    @classmethod
    def load(cls, path: Path) -> "ModuleConfig":
        """Load and validate a module configuration.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(path, f"Could not find module configuration file at '{path}'.")
        return _load_model(cls, path, "module configuration file")


# ---------------------------------------------------------------------------
# Run options
# ---------------------------------------------------------------------------


class GenerationOptions(BaseModel):
    """Knobs for a single ``generate`` run."""

    verbose: bool = Field(default=False, description="Print per-file realm decisions")
    sort_paths: bool = Field(
        default=False,
        description="Sort discovered modules and scripts lexically instead of using "
        "file-system enumeration order",
    )

    @classmethod
    def from_env(cls) -> "GenerationOptions":
        """Build options from environment variables.

        Recognised variables (all optional): MODLOOM_VERBOSE, MODLOOM_SORTED.
        """
        return cls(
            verbose=_env_flag("MODLOOM_VERBOSE"),
            sort_paths=_env_flag("MODLOOM_SORTED"),
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def _save_model(model: BaseModel, path: Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(model.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
    return target


def _load_model(cls: type[BaseModel], path: Path, what: str):
    try:
        raw = path.read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(path, f"Invalid {what} at '{path}': {_first_error(exc)}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(path, f"Failed to read {what} at '{path}': {exc}") from exc


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


__all__ = [
    "ConfigError",
    "GenerationOptions",
    "INIT_SCRIPT_PREFIX",
    "MODULE_CONFIG_FILENAME",
    "ModuleConfig",
    "PROJECT_CONFIG_FILENAME",
    "ProjectConfig",
    "ProjectType",
    "SCRIPT_EXTENSION",
]
