"""Tests for InstrSettings — CLI flags over environment over defaults."""

from __future__ import annotations

from pathlib import Path

import pytest

from instr.config.settings import InstrSettings


class TestDefaults:
    def test_all_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = InstrSettings.from_cli()
        assert settings.library_root == tmp_path / ".ai-instructions"
        assert settings.config_path is None
        assert settings.config_file == tmp_path / ".ai-instructions" / "config.yaml"
        assert settings.json_output is False
        assert settings.no_interact is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = InstrSettings.from_cli(library_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestSources:
    def test_legacy_env_var(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("AI_INSTRUCTIONS_DIR", str(tmp_path / "legacy"))
        assert InstrSettings.from_cli().library_root == tmp_path / "legacy"

    def test_prefixed_env_var(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("INSTR_LIBRARY", str(tmp_path / "lib"))
        monkeypatch.setenv("INSTR_CONFIG", str(tmp_path / "other.yaml"))
        settings = InstrSettings.from_cli()
        assert settings.library_root == tmp_path / "lib"
        assert settings.config_file == tmp_path / "other.yaml"

    def test_cli_beats_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("AI_INSTRUCTIONS_DIR", str(tmp_path / "env"))
        settings = InstrSettings.from_cli(library_root=tmp_path / "flag")
        assert settings.library_root == tmp_path / "flag"

    def test_tilde_expanded(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = InstrSettings.from_cli(library_root="~/lib")
        assert settings.library_root == tmp_path / "lib"

    def test_flags_pass_through(self, tmp_path: Path) -> None:
        settings = InstrSettings.from_cli(library_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
