"""Shared test fixtures for layerguard tests."""

import os
from pathlib import Path
from typing import Callable, Mapping

import pytest


@pytest.fixture
def make_tree(tmp_path) -> Callable[[Mapping[str, str]], Path]:
    """Build a project tree from {relative path: file content}.

    The tree lives in a "project" subdirectory so layer names never collide
    with the temporary directory's own path components.
    """

    def _make(files: Mapping[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def isolated_config_env(tmp_path, monkeypatch):
    """Run with no user/project config files and no LAYERGUARD_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.chdir(workdir)
    for key in list(os.environ):
        if key.startswith("LAYERGUARD_"):
            monkeypatch.delenv(key)
    return workdir
