"""Shared pytest fixtures.

``sample_plugins`` writes a small importable plugin module into a temp
directory so manifest and CLI tests can resolve real dotted references.
"""
from __future__ import annotations

import importlib
import sys
import textwrap
from pathlib import Path
from types import ModuleType
from typing import Iterator

import pytest

SAMPLE_MODULE = "sample_plugins_for_tests"

_SAMPLE_SOURCE = textwrap.dedent(
    """
    CALLS = []

    NOT_CALLABLE = 3


    def mark(host):
        CALLS.append("mark")
        host.marked = True


    def deferring(host):
        CALLS.append("deferring")

        def later(target):
            target.later = True

        return later


    def boom(host):
        raise RuntimeError("boom")
    """
)


@pytest.fixture()
def sample_plugins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[ModuleType]:
    (tmp_path / f"{SAMPLE_MODULE}.py").write_text(_SAMPLE_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, SAMPLE_MODULE, raising=False)
    module = importlib.import_module(SAMPLE_MODULE)
    yield module
    sys.modules.pop(SAMPLE_MODULE, None)
