"""Project and module scaffolding.

``setup_project`` writes a fresh ``modloom-config.json`` and creates the
modules folder; ``create_module`` adds an empty module with its own
``config.json``.  Both refuse to overwrite anything that already exists.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from .config import (
    MODULE_CONFIG_FILENAME,
    PROJECT_CONFIG_FILENAME,
    ModuleConfig,
    ProjectConfig,
    ProjectType,
)
from .utils import ensure_dir, is_valid_name, print_info, print_success, print_warning


class ScaffoldError(Exception):
    """Raised when a project or module cannot be scaffolded."""


def _require_valid_name(name: str) -> None:
    if not is_valid_name(name):
        raise ScaffoldError(
            f"Name '{name}' is invalid, must be an alphanumeric name (A-Z, 0-9, - or _)."
        )


async def setup_project(
    name: str,
    project_root: str | Path,
    project_type: ProjectType | str,
) -> ProjectConfig:
    """Create the modloom configuration and modules folder for a project.

    Args:
        name: Project name, used in generated file names.
        project_root: Root directory of the addon or gamemode.
        project_type: ``"addon"`` (expects a ``lua/`` folder) or
            ``"gamemode"`` (expects a ``gamemode/`` folder).

    Returns:
        The configuration that was written.

    Raises:
        ScaffoldError: If a configuration already exists, the expected
            script folder is missing, or writing fails.
    """
    _require_valid_name(name)
    project_type = ProjectType(project_type)
    root = Path(project_root)

    print_info(f"Generating configuration and folder structure for {project_type.value} '{name}'")

    config_path = root / PROJECT_CONFIG_FILENAME
    if config_path.exists():
        raise ScaffoldError(
            f"Cannot setup project: {PROJECT_CONFIG_FILENAME} file already exists at '{config_path}'."
        )

    script_root = root / project_type.script_folder
    if not script_root.is_dir():
        raise ScaffoldError(
            f"Cannot setup project: missing expected '{project_type.script_folder}' folder "
            f"for project of type '{project_type.value}' in project directory."
        )

    config = ProjectConfig.create_default(name, project_type)
    try:
        await asyncio.to_thread(config.save, config_path)
    except OSError as exc:
        raise ScaffoldError(f"Failed to generate configuration for project '{name}': {exc}") from exc
    print_info(f"Created configuration file at '{config_path}'.")

    modules_dir = config.modules_dir(root)
    if modules_dir.is_dir():
        print_warning(f"Module folder already exists at '{modules_dir}', skipping.")
    else:
        try:
            await asyncio.to_thread(ensure_dir, modules_dir)
        except OSError as exc:
            raise ScaffoldError(f"Failed to create modules folder at '{modules_dir}': {exc}") from exc

    print_success(f"Successfully setup project '{name}'.")
    return config


async def create_module(project_root: str | Path, module_name: str) -> Path:
    """Create an empty module folder with a default ``config.json``.

    The folder name is the lower-cased module name; the configuration keeps
    the name as given.

    Returns:
        Path to the new module folder.

    Raises:
        ConfigError: If the project configuration is missing or invalid.
        ScaffoldError: If the modules folder is missing or the module exists.
    """
    _require_valid_name(module_name)
    root = Path(project_root)

    print_info(f"Reading configuration for project at '{root.resolve()}'.")
    project = await asyncio.to_thread(ProjectConfig.load, root / PROJECT_CONFIG_FILENAME)

    modules_dir = project.modules_dir(root)
    if not modules_dir.is_dir():
        raise ScaffoldError(f"Could not find modules folder at '{modules_dir}'.")

    module_dir = modules_dir / module_name.lower()
    if module_dir.exists():
        raise ScaffoldError(
            f"Could not create module '{module_name}' as a folder already exists at '{module_dir}'."
        )

    print_info(f"Creating module '{module_name}'")
    try:
        await asyncio.to_thread(module_dir.mkdir)
    except OSError as exc:
        raise ScaffoldError(f"Failed to create module folder at '{module_dir}': {exc}") from exc

    module_config = ModuleConfig(name=module_name, description="No description specified.")
    config_path = module_dir / MODULE_CONFIG_FILENAME
    print_info("Writing configuration for module.")
    try:
        await asyncio.to_thread(module_config.save, config_path)
    except OSError as exc:
        raise ScaffoldError(
            f"Failed to write module configuration file at '{config_path}': {exc}"
        ) from exc

    print_success(
        f"Successfully created module '{module_name}' for {project.project_type.value} "
        f"'{project.project_name}'."
    )
    return module_dir
