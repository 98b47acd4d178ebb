"""Data model for a single generation run.

Resolution and emission never touch module-level state: everything a run
accumulates (emitted statements, generated modules, warnings) lives on a
``GenerationContext`` created per run and handed to each step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..config import GenerationOptions, ProjectConfig
from ..utils import print_info, print_verbose, print_warning


class Realm(str, Enum):
    """Execution realm of a script, decided by its file-name prefix."""

    CLIENT = "client"
    SHARED = "shared"
    SERVER = "server"
    UNMATCHED = "unmatched"

    @property
    def tag(self) -> str:
        return {
            Realm.CLIENT: "CL",
            Realm.SHARED: "SH",
            Realm.SERVER: "SV",
            Realm.UNMATCHED: "??",
        }[self]


class StatementKind(str, Enum):
    """Kind of line emitted into a bootstrap file."""

    STAGE = "stage"                    # AddCSLuaFile on the server
    EXECUTE_SERVER = "execute_server"  # include on the server
    EXECUTE_CLIENT = "execute_client"  # include on the client


@dataclass(frozen=True)
class Statement:
    """One emitted instruction for a script path."""

    kind: StatementKind
    path: str


@dataclass(frozen=True)
class ResolvedFile:
    """A script path (relative to the script root) and its realm."""

    path: str
    realm: Realm


@dataclass
class GenerationContext:
    """Mutable state for one ``generate`` run.

    Attributes:
        project: The validated project configuration.
        modules_dir: Absolute path of the project's modules folder.
        options: Run options (verbosity, path sorting).
        server_statements: Statements for the server bootstrap, in order.
        client_statements: Statements for the client bootstrap, in order.
        generated_modules: Names of modules already processed this run.
        module_order: Module names in the order they were processed.
        warnings: Every non-fatal problem reported during the run.
    """

    project: ProjectConfig
    modules_dir: Path
    options: GenerationOptions = field(default_factory=GenerationOptions)
    server_statements: list[Statement] = field(default_factory=list)
    client_statements: list[Statement] = field(default_factory=list)
    generated_modules: set[str] = field(default_factory=set)
    module_order: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def script_root(self) -> Path:
        """Parent of the modules folder; emitted paths are relative to it."""
        return self.modules_dir.parent

    def info(self, message: str = "") -> None:
        print_info(message)

    def verbose(self, message: str) -> None:
        print_verbose(message, self.options.verbose)

    def warn(self, message: str) -> None:
        """Record a non-fatal problem and print it."""
        self.warnings.append(message)
        print_warning(message)

    def log_realm(self, resolved: ResolvedFile) -> None:
        self.verbose(f"[{resolved.realm.tag}] {resolved.path}")
