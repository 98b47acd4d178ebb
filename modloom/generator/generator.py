"""Bootstrap generation orchestrator.

Reads a project's ``modloom-config.json``, walks its modules in load order,
and writes the server and client bootstrap scripts.  A run is all or
nothing: any fatal problem raises ``GenerationError`` (or ``ConfigError``)
before either output file is touched.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from ..config import (
    MODULE_CONFIG_FILENAME,
    PROJECT_CONFIG_FILENAME,
    ConfigError,
    GenerationOptions,
    ModuleConfig,
    ProjectConfig,
)
from ..utils import print_info, print_success, save_text
from .emitter import emit_module
from .models import GenerationContext, Realm, Statement
from .resolver import resolve_module_files, resolve_module_order
from .templates import TemplateRenderer


class GenerationError(Exception):
    """Raised when bootstrap generation cannot complete."""


@dataclass
class GenerationResult:
    """Everything a run produced, before or after writing to disk."""

    project: ProjectConfig
    server_path: Path
    client_path: Path
    server_content: str
    client_content: str
    server_statements: list[Statement] = field(default_factory=list)
    client_statements: list[Statement] = field(default_factory=list)
    module_order: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class InitGenerator:
    """Generates the bootstrap scripts for one project.

    Usage::

        generator = InitGenerator(Path("my-addon"))
        result = await generator.generate()
        print(result.server_path, result.client_path)
    """

    def __init__(
        self,
        project_root: str | Path,
        options: GenerationOptions | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.options = options or GenerationOptions()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self) -> GenerationResult:
        """Load configuration, build both bootstraps and write them."""
        project = await self.load_project()
        result = self.build(project)
        await self.write(result)

        print_success(
            f"Successfully generated init scripts for {project.project_type.value} "
            f"'{project.project_name}'"
        )
        print_info(f"Server: '{result.server_path.resolve()}'")
        print_info(f"Client: '{result.client_path.resolve()}'")
        return result

    async def load_project(self) -> ProjectConfig:
        """Read and validate ``modloom-config.json`` from the project root."""
        config_path = self.project_root / PROJECT_CONFIG_FILENAME
        return await asyncio.to_thread(ProjectConfig.load, config_path)

    def build(self, project: ProjectConfig) -> GenerationResult:
        """Resolve, classify and render every module without writing files.

        Raises:
            GenerationError: If the modules folder or a module configuration
                is missing or invalid, or a folder cannot be listed.
        """
        modules_dir = project.modules_dir(self.project_root).resolve()
        if not modules_dir.is_dir():
            raise GenerationError(f"Could not find modules folder at '{modules_dir}'.")

        context = GenerationContext(project=project, modules_dir=modules_dir, options=self.options)
        self._print_overview(context)

        try:
            module_order = resolve_module_order(
                project.load_order, modules_dir, sort=self.options.sort_paths
            )
        except OSError as exc:
            raise GenerationError(f"Failed to list modules folder at '{modules_dir}': {exc}") from exc

        for module_name in module_order:
            self.generate_module(module_name, context)

        return GenerationResult(
            project=project,
            server_path=self.project_root / project.server_init_path,
            client_path=self.project_root / project.client_init_path,
            server_content=self.renderer.render_init(project, "server", context.server_statements),
            client_content=self.renderer.render_init(project, "client", context.client_statements),
            server_statements=list(context.server_statements),
            client_statements=list(context.client_statements),
            module_order=list(context.module_order),
            warnings=list(context.warnings),
        )

    def generate_module(self, module_name: str, context: GenerationContext) -> None:
        """Emit the statements for one module into *context*.

        A module is generated at most once per run; later requests for the
        same name are ignored.  A missing module folder is only a warning.
        """
        if module_name in context.generated_modules:
            context.verbose(
                f"Attempted to generate module '{module_name}' but it was already generated, skipping."
            )
            return
        if not module_name.strip():
            raise GenerationError(f"Failed to generate module '{module_name}': empty module name.")

        context.generated_modules.add(module_name)
        context.info(f"Generating module '{module_name}'.")

        module_dir = context.modules_dir / module_name
        if not module_dir.is_dir():
            context.warn(f"Could not find module '{module_name}' at '{module_dir}', skipping.")
            return

        module_config = self._load_module_config(module_name, module_dir)
        context.module_order.append(module_name)

        try:
            paths = resolve_module_files(module_dir, module_config, context)
        except OSError as exc:
            raise GenerationError(
                f"Failed to read scripts of module '{module_name}' at '{module_dir}': {exc}"
            ) from exc

        resolved = emit_module(paths, context)
        emitted = sum(1 for f in resolved if f.realm is not Realm.UNMATCHED)
        context.verbose(f"Module '{module_name}': {emitted} of {len(resolved)} script(s) emitted.")

    async def write(self, result: GenerationResult) -> None:
        """Write both bootstraps, creating parent directories as needed.

        Raises:
            GenerationError: If either file cannot be written.
        """
        for label, path, content in (
            ("serverside", result.server_path, result.server_content),
            ("clientside", result.client_path, result.client_content),
        ):
            try:
                await save_text(content, path)
            except OSError as exc:
                raise GenerationError(
                    f"Failed to write {label} init script at path '{path}': {exc}"
                ) from exc

    # -- Internal helpers --------------------------------------------------

    def _load_module_config(self, module_name: str, module_dir: Path) -> ModuleConfig:
        config_path = module_dir / MODULE_CONFIG_FILENAME
        if not config_path.is_file():
            raise GenerationError(
                f"Module '{module_name}' is missing a configuration file at '{config_path}'."
            )
        try:
            return ModuleConfig.load(config_path)
        except ConfigError as exc:
            raise GenerationError(f"Module '{module_name}': {exc}") from exc

    def _print_overview(self, context: GenerationContext) -> None:
        project = context.project
        context.info(
            f"Generating scripts for {project.project_type.value} '{project.project_name}'."
        )
        context.info(f"Module folder: {project.folder_name}")
        if not project.load_order:
            context.info("Load Order: None")
        else:
            context.info("Load Order:")
            for module_name in project.load_order:
                context.info(f" - {module_name}")
        context.info()
