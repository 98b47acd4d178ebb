"""modloom generator -- builds the server and client bootstrap scripts.

Modules are resolved in load order, their scripts are resolved and
classified into realms by file-name prefix, and the resulting statements are
rendered through Jinja2 templates.

Quick usage::

    from modloom.generator import InitGenerator

    generator = InitGenerator("/path/to/my-addon")
    result = await generator.generate()
"""

from modloom.generator.emitter import emit_module, statements_for
from modloom.generator.generator import GenerationError, GenerationResult, InitGenerator
from modloom.generator.models import GenerationContext, Realm, ResolvedFile, Statement, StatementKind
from modloom.generator.realm import classify, classify_for_project
from modloom.generator.resolver import resolve_module_files, resolve_module_order
from modloom.generator.templates import TemplateRenderer

__all__ = [
    "GenerationContext",
    "GenerationError",
    "GenerationResult",
    "InitGenerator",
    "Realm",
    "ResolvedFile",
    "Statement",
    "StatementKind",
    "TemplateRenderer",
    "classify",
    "classify_for_project",
    "emit_module",
    "resolve_module_files",
    "resolve_module_order",
    "statements_for",
]
