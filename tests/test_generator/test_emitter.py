"""Tests for the realm-to-statement mapping (modloom.generator.emitter)."""

from __future__ import annotations

import pytest

from modloom.generator.emitter import emit_file, emit_module, statements_for
from modloom.generator.models import Realm, ResolvedFile, Statement, StatementKind

pytestmark = pytest.mark.unit

PATH = "demo-modules/core/x.lua"


# ---------------------------------------------------------------------------
# statements_for
# ---------------------------------------------------------------------------


class TestStatementsFor:
    def test_client(self):
        server, client = statements_for(PATH, Realm.CLIENT)
        assert server == [Statement(StatementKind.STAGE, PATH)]
        assert client == [Statement(StatementKind.EXECUTE_CLIENT, PATH)]

    def test_shared(self):
        server, client = statements_for(PATH, Realm.SHARED)
        assert server == [
            Statement(StatementKind.STAGE, PATH),
            Statement(StatementKind.EXECUTE_SERVER, PATH),
        ]
        assert client == [Statement(StatementKind.EXECUTE_CLIENT, PATH)]

    def test_server(self):
        server, client = statements_for(PATH, Realm.SERVER)
        assert server == [Statement(StatementKind.EXECUTE_SERVER, PATH)]
        assert client == []

    def test_unmatched(self):
        assert statements_for(PATH, Realm.UNMATCHED) == ([], [])


# ---------------------------------------------------------------------------
# emit_file / emit_module
# ---------------------------------------------------------------------------


class TestEmit:
    def test_emit_file_appends(self, make_context):
        context = make_context()
        assert emit_file(ResolvedFile(PATH, Realm.SHARED), context) is True
        assert len(context.server_statements) == 2
        assert len(context.client_statements) == 1
        assert context.warnings == []

    def test_emit_file_unmatched_warns(self, make_context):
        context = make_context()
        assert emit_file(ResolvedFile("demo-modules/core/helper.lua", Realm.UNMATCHED), context) is False
        assert context.server_statements == []
        assert context.client_statements == []
        assert len(context.warnings) == 1
        assert "helper.lua" in context.warnings[0]
        assert "no configured" in context.warnings[0]

    def test_emit_module_preserves_order(self, make_context):
        context = make_context()
        paths = [
            "demo-modules/core/sh_a.lua",
            "demo-modules/core/sv_c.lua",
            "demo-modules/core/cl_b.lua",
        ]
        resolved = emit_module(paths, context)

        assert [r.realm for r in resolved] == [Realm.SHARED, Realm.SERVER, Realm.CLIENT]
        assert context.server_statements == [
            Statement(StatementKind.STAGE, paths[0]),
            Statement(StatementKind.EXECUTE_SERVER, paths[0]),
            Statement(StatementKind.EXECUTE_SERVER, paths[1]),
            Statement(StatementKind.STAGE, paths[2]),
        ]
        assert context.client_statements == [
            Statement(StatementKind.EXECUTE_CLIENT, paths[0]),
            Statement(StatementKind.EXECUTE_CLIENT, paths[2]),
        ]

    def test_emit_module_excludes_unmatched(self, make_context):
        context = make_context()
        resolved = emit_module(["demo-modules/core/helper.lua", "demo-modules/core/sv_c.lua"], context)

        assert len(resolved) == 2
        assert resolved[0].realm is Realm.UNMATCHED
        assert context.server_statements == [
            Statement(StatementKind.EXECUTE_SERVER, "demo-modules/core/sv_c.lua")
        ]
        assert len(context.warnings) == 1

    def test_emission_is_repeatable(self, make_context):
        paths = ["demo-modules/core/sh_a.lua", "demo-modules/core/cl_b.lua"]
        first, second = make_context(), make_context()
        emit_module(paths, first)
        emit_module(paths, second)
        assert first.server_statements == second.server_statements
        assert first.client_statements == second.client_statements
