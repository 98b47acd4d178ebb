"""Realm classification by file-name prefix."""

from __future__ import annotations

import os
from collections.abc import Sequence

from ..config import ProjectConfig
from .models import Realm


def classify(
    file_name: str,
    client_prefixes: Sequence[str],
    shared_prefixes: Sequence[str],
    server_prefixes: Sequence[str],
) -> Realm:
    """Return the realm for *file_name*.

    Only the base name is considered and the comparison is case-insensitive.
    Prefix lists are checked client first, then shared, then server, so a
    name matching both a client and a shared prefix is always ``CLIENT``.

    Examples::

        classify("cl_menu.lua", ["cl_"], ["sh_"], ["sv_"])       -> Realm.CLIENT
        classify("shared_helper.lua", ["cl_"], ["sh_"], ["sv_"]) -> Realm.UNMATCHED
    """
    base_name = os.path.basename(file_name.replace("\\", "/")).lower()
    for realm, prefixes in (
        (Realm.CLIENT, client_prefixes),
        (Realm.SHARED, shared_prefixes),
        (Realm.SERVER, server_prefixes),
    ):
        if any(base_name.startswith(prefix.lower()) for prefix in prefixes):
            return realm
    return Realm.UNMATCHED


def classify_for_project(file_name: str, project: ProjectConfig) -> Realm:
    """Classify *file_name* using the prefix lists of *project*."""
    return classify(
        file_name,
        project.client_prefixes,
        project.shared_prefixes,
        project.server_prefixes,
    )
