"""Shared pytest fixtures for instr tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from instr.config.settings import InstrSettings
from instr.infrastructure.library import LibraryStore
from instr.services.telemetry import disable_telemetry

LIBRARY_FILES = (
    "core/coding-standards.md",
    "core/security.md",
    "domains/web/react-patterns.md",
    "domains/web/accessibility.md",
    "domains/backend/api-design.md",
    "tools/docker.md",
    "tools/npm.md",
)

LIBRARY_CONFIG = """\
categories:
  default:
    core: [coding-standards]
  web:
    core: [coding-standards]
    domains: [web]
    tools: [docker, npm]
  backend:
    core: [coding-standards, security]
    domains: [backend]
    tools: [docker]
routing:
  "*/frontend/*": web
  "*/api*": backend
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own library settings out of every test."""
    for name in ("INSTR_LIBRARY", "INSTR_CONFIG", "AI_INSTRUCTIONS_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """A verbose CLI run enables telemetry for the rest of the thread."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    """A populated library store with a category table.

    This is the single source of truth for the test library layout.
    """
    root = tmp_path / "library"
    for rel_path in LIBRARY_FILES:
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"# {path.stem}\n")
    (root / "config.yaml").write_text(LIBRARY_CONFIG)
    return root


@pytest.fixture
def library(library_root: Path) -> LibraryStore:
    return LibraryStore(library_root)


@pytest.fixture
def settings(library_root: Path) -> InstrSettings:
    return InstrSettings.from_cli(library_root=library_root)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Parent directory for project checkouts."""
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def project(workspace: Path) -> Path:
    """A project that routes to nothing and so resolves to ``default``."""
    path = workspace / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def web_project(workspace: Path) -> Path:
    """A project matched by the ``*/frontend/*`` routing rule."""
    path = workspace / "frontend" / "shop"
    path.mkdir(parents=True)
    return path


def instructions(project: Path) -> Path:
    return project / ".github" / "instructions"


def linked(project: Path) -> dict[str, str]:
    """Symlinks in *project*'s instructions directory mapped to their targets."""
    directory = instructions(project)
    if not directory.is_dir():
        return {}
    return {p.name: str(p.readlink()) for p in sorted(directory.iterdir()) if p.is_symlink()}
