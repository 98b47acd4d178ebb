"""Shared pytest fixtures for the modloom test suite.

Provides reusable fixtures for:
- On-disk addon and gamemode project trees
- Module folders with configuration and script files
- Directories that cannot be listed
- Ready-made ``GenerationContext`` objects
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from modloom.config import GenerationOptions, ProjectConfig
from modloom.generator.models import GenerationContext


# ---------------------------------------------------------------------------
# Project trees
# ---------------------------------------------------------------------------


def write_project(
    root: Path,
    *,
    name: str = "Demo",
    project_type: str = "addon",
    load_order: list[str] | None = None,
    **overrides: Any,
) -> ProjectConfig:
    """Write ``modloom-config.json`` and the modules folder under *root*."""
    data: dict[str, Any] = {
        "projectName": name,
        "projectType": project_type,
        "folderName": f"{name.lower()}-modules",
        "loadOrder": load_order or [],
    }
    data.update(overrides)
    root.mkdir(parents=True, exist_ok=True)
    (root / "modloom-config.json").write_text(json.dumps(data, indent=2), encoding="utf-8")
    config = ProjectConfig.model_validate(data)
    config.modules_dir(root).mkdir(parents=True, exist_ok=True)
    return config


def write_module(
    modules_dir: Path,
    name: str,
    files: list[str],
    *,
    load_order: list[str] | None = None,
    with_config: bool = True,
) -> Path:
    """Create a module folder with empty script files and a ``config.json``."""
    module_dir = modules_dir / name
    module_dir.mkdir(parents=True, exist_ok=True)
    for relative in files:
        file_path = module_dir / relative
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(f"-- {relative}\n", encoding="utf-8")
    if with_config:
        config = {"name": name, "description": "test module", "loadOrder": load_order or []}
        (module_dir / "config.json").write_text(json.dumps(config), encoding="utf-8")
    return module_dir


def deny_scandir(folder_name: str):
    """Patch ``os.scandir`` to raise ``PermissionError`` for any folder named *folder_name*."""
    real_scandir = os.scandir

    def scandir(path="."):
        if os.path.basename(os.fspath(path)) == folder_name:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    return patch.object(os, "scandir", scandir)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project root directory (auto-cleanup)."""
    root = tmp_path / "demo-addon"
    root.mkdir()
    yield root


@pytest.fixture
def addon_project(project_root: Path) -> ProjectConfig:
    """An addon project named ``Demo`` with an empty modules folder."""
    return write_project(project_root)


@pytest.fixture
def modules_dir(project_root: Path, addon_project: ProjectConfig) -> Path:
    """The ``lua/demo-modules`` folder of the addon project."""
    return addon_project.modules_dir(project_root).resolve()


@pytest.fixture
def make_context(addon_project: ProjectConfig, modules_dir: Path) -> Callable[..., GenerationContext]:
    """Factory for a fresh ``GenerationContext`` on the addon project."""

    def _make(**option_kwargs: Any) -> GenerationContext:
        return GenerationContext(
            project=addon_project,
            modules_dir=modules_dir,
            options=GenerationOptions(**option_kwargs),
        )

    return _make


@pytest.fixture
def demo_project(project_root: Path) -> Path:
    """The canonical ``Demo`` addon: one ``core`` module, ``sh_a.lua`` declared first."""
    config = write_project(project_root, load_order=["core"])
    write_module(
        config.modules_dir(project_root),
        "core",
        ["sh_a.lua", "cl_b.lua", "sv_c.lua"],
        load_order=["sh_a.lua"],
    )
    return project_root
