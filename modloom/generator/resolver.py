"""Module and script resolution.

Two ordering rules drive the generated bootstraps:

* **Modules** -- names from the project's ``loadOrder`` come first, in the
  declared order, followed by every other folder under the modules directory.
* **Scripts** -- within a module, entries from the module's ``loadOrder``
  come first (directories expand to every script beneath them), followed by
  any script the load order did not mention.

Anything not covered by an explicit load order is appended in file-system
enumeration order.  That order is platform dependent; pass ``sort=True`` /
``GenerationOptions.sort_paths`` to get lexical ordering instead.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..config import SCRIPT_EXTENSION, ModuleConfig
from ..utils import has_parent_traversal, iter_files, iter_subdirectories, normalize_script_path
from .models import GenerationContext


def resolve_module_order(
    load_order: Sequence[str],
    modules_dir: Path,
    *,
    sort: bool = False,
) -> list[str]:
    """Return every module name to generate, each exactly once.

    Declared names are kept even when no matching folder exists; the
    generator reports and skips those.

    Args:
        load_order: Module names from the project configuration.
        modules_dir: Folder holding one subfolder per module.
        sort: Order undeclared folders lexically instead of by enumeration.
    """
    order: list[str] = []
    seen: set[str] = set()

    for name in load_order:
        if name not in seen:
            seen.add(name)
            order.append(name)

    for module_path in iter_subdirectories(modules_dir, sort=sort):
        if module_path.name not in seen:
            seen.add(module_path.name)
            order.append(module_path.name)

    return order


class _PathList:
    """Ordered list of relative script paths that ignores repeats."""

    def __init__(self, script_root: Path) -> None:
        self.script_root = script_root
        self.paths: list[str] = []
        self._seen: set[str] = set()

    def add(self, file_path: Path) -> None:
        relative = normalize_script_path(os.path.relpath(file_path, self.script_root))
        if relative not in self._seen:
            self._seen.add(relative)
            self.paths.append(relative)

    def extend(self, file_paths: Iterable[Path]) -> None:
        for file_path in file_paths:
            self.add(file_path)


def resolve_module_files(
    module_dir: Path,
    module_config: ModuleConfig,
    context: GenerationContext,
) -> list[str]:
    """Return the ordered, de-duplicated script paths for one module.

    Paths are relative to the parent of the modules folder and always use
    ``/`` separators, e.g. ``"demo-modules/core/sh_a.lua"``.  Illegal,
    missing and non-script load-order entries are reported through
    ``context.warn`` and skipped; none of them stop the run.
    """
    sort = context.options.sort_paths
    files = _PathList(context.script_root)

    for entry in module_config.load_order:
        normalized = normalize_script_path(entry)
        if has_parent_traversal(normalized) or os.path.isabs(normalized):
            context.warn(f"Path '{entry}' points outside of the module, and as such is illegal. Ignoring.")
            continue

        full_path = module_dir / normalized
        if full_path.is_dir():
            files.extend(iter_files(full_path, SCRIPT_EXTENSION, sort=sort))
        elif full_path.is_file():
            if not full_path.name.lower().endswith(SCRIPT_EXTENSION):
                context.warn(
                    f"File '{full_path}' is in the load order for the module, but it isn't a "
                    "Lua file. Ignoring."
                )
                continue
            files.add(full_path)
        else:
            context.warn(f"Path '{full_path}' is in the load order, but doesn't exist. Skipping.")

    # Scripts the load order didn't mention.
    files.extend(iter_files(module_dir, SCRIPT_EXTENSION, sort=sort))
    return files.paths
