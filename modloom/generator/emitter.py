"""Realm-to-statement mapping.

Each classified script becomes zero or more ``Statement`` objects on the
server and client side:

=========  ================================  ================
Realm      Server bootstrap                  Client bootstrap
=========  ================================  ================
client     STAGE                             EXECUTE_CLIENT
shared     STAGE, EXECUTE_SERVER             EXECUTE_CLIENT
server     EXECUTE_SERVER                    --
unmatched  --                                --
=========  ================================  ================

Statements are rendered to Lua only at the very end of a run (see
``templates.TemplateRenderer``).
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import GenerationContext, Realm, ResolvedFile, Statement, StatementKind
from .realm import classify_for_project

_SERVER_KINDS: dict[Realm, tuple[StatementKind, ...]] = {
    Realm.CLIENT: (StatementKind.STAGE,),
    Realm.SHARED: (StatementKind.STAGE, StatementKind.EXECUTE_SERVER),
    Realm.SERVER: (StatementKind.EXECUTE_SERVER,),
    Realm.UNMATCHED: (),
}

_CLIENT_KINDS: dict[Realm, tuple[StatementKind, ...]] = {
    Realm.CLIENT: (StatementKind.EXECUTE_CLIENT,),
    Realm.SHARED: (StatementKind.EXECUTE_CLIENT,),
    Realm.SERVER: (),
    Realm.UNMATCHED: (),
}


def statements_for(path: str, realm: Realm) -> tuple[list[Statement], list[Statement]]:
    """Return the ``(server, client)`` statements emitted for one script."""
    server = [Statement(kind, path) for kind in _SERVER_KINDS[realm]]
    client = [Statement(kind, path) for kind in _CLIENT_KINDS[realm]]
    return server, client


def emit_file(resolved: ResolvedFile, context: GenerationContext) -> bool:
    """Append the statements for *resolved* to the context.

    Returns ``False`` (after recording a warning) when the file matched no
    realm prefix and was left out of both bootstraps.
    """
    if resolved.realm is Realm.UNMATCHED:
        context.warn(
            f"File '{resolved.path}' contains no configured clientside, shared or "
            "serverside prefix. Ignoring file!"
        )
        return False

    context.log_realm(resolved)
    server, client = statements_for(resolved.path, resolved.realm)
    context.server_statements.extend(server)
    context.client_statements.extend(client)
    return True


def emit_module(paths: Iterable[str], context: GenerationContext) -> list[ResolvedFile]:
    """Classify and emit every path of one module, preserving order.

    Returns the classified files, including unmatched ones.
    """
    resolved_files = []
    for path in paths:
        resolved = ResolvedFile(path=path, realm=classify_for_project(path, context.project))
        emit_file(resolved, context)
        resolved_files.append(resolved)
    return resolved_files
