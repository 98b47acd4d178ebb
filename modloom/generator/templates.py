"""Jinja2 rendering of bootstrap scripts.

Provides the TemplateRenderer class which loads the Lua templates from the
``modloom/generator/templates/`` directory and turns the statement lists
collected during a run into the final server and client bootstrap text.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import ProjectConfig
from .models import Statement, StatementKind


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

INIT_TEMPLATE = "init.lua.j2"

REALM_LABELS: dict[str, str] = {
    "server": "Serverside",
    "client": "Clientside",
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders bootstrap scripts from Jinja2 templates.

    The header and footer boilerplate (banner, do-not-edit warning, startup
    and completion notices) lives in the templates; the body is one line per
    ``Statement``.  Rendering is a pure function of its inputs, so identical
    statement lists always produce byte-identical output.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["lua_string"] = _lua_string_filter
        self.env.filters["lua_statement"] = _lua_statement_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_init(
        self,
        project: ProjectConfig,
        realm: str,
        statements: Sequence[Statement],
    ) -> str:
        """Render the bootstrap for *realm* (``"server"`` or ``"client"``).

        Raises:
            ValueError: If *realm* is not a bootstrap realm.
        """
        if realm not in REALM_LABELS:
            raise ValueError(f"Unknown bootstrap realm '{realm}', expected 'server' or 'client'")
        return self.render(
            INIT_TEMPLATE,
            {
                "project_name": project.project_name,
                "project_type": project.project_type.value,
                "realm_label": REALM_LABELS[realm],
                "statements": list(statements),
            },
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _lua_string_filter(value: str) -> str:
    """Quote *value* as a single-quoted Lua string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _lua_statement_filter(statement: Statement) -> str:
    """Render one statement as a line of Lua."""
    path = _lua_string_filter(statement.path)
    if statement.kind is StatementKind.STAGE:
        return f"AddCSLuaFile({path})"
    return f"include({path})"
