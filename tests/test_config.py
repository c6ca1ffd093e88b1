"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from sylan.cli import build_parser, load_config, resolve_options


def _options(tmp_path: Path, *extra: str):
    src = tmp_path / "main.sy"
    src.write_text("")
    ns = build_parser().parse_args([str(src), *extra])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[lexer]\nskip_comments = true\n")
        result = load_config(cfg, tmp_path)
        assert result["lexer"] == {"skip_comments": True}

    def test_auto_discover_sylan_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "sylan.toml"
        cfg.write_text("[output]\npositions = true\n")
        result = load_config(None, tmp_path)
        assert result["output"] == {"positions": True}


class TestConfigMerge:
    def test_defaults(self, tmp_path: Path) -> None:
        opts = _options(tmp_path)
        assert opts.skip_comments is False
        assert opts.positions is False
        assert opts.log_level == "WARNING"

    def test_config_flags_applied(self, tmp_path: Path) -> None:
        (tmp_path / "sylan.toml").write_text(
            "[lexer]\nskip_comments = true\n[output]\npositions = true\n"
        )
        opts = _options(tmp_path)
        assert opts.skip_comments is True
        assert opts.positions is True

    def test_cli_flag_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "sylan.toml").write_text("[lexer]\nskip_comments = false\n")
        opts = _options(tmp_path, "--skip-comments")
        assert opts.skip_comments is True

    def test_non_boolean_flag_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "sylan.toml").write_text('[output]\npositions = "yes"\n')
        assert _options(tmp_path).positions is False

    def test_log_level_from_config(self, tmp_path: Path) -> None:
        (tmp_path / "sylan.toml").write_text('[logging]\nlevel = "info"\n')
        assert _options(tmp_path).log_level == "INFO"

    def test_verbose_overrides_log_level(self, tmp_path: Path) -> None:
        (tmp_path / "sylan.toml").write_text('[logging]\nlevel = "ERROR"\n')
        assert _options(tmp_path, "--verbose").log_level == "DEBUG"

    def test_invalid_log_level(self, tmp_path: Path) -> None:
        (tmp_path / "sylan.toml").write_text('[logging]\nlevel = "LOUD"\n')
        with pytest.raises(argparse.ArgumentTypeError):
            _options(tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "sylan.toml").write_text("[lexer\n")
        with pytest.raises(argparse.ArgumentTypeError, match="invalid config"):
            _options(tmp_path)

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text("[output]\npositions = true\n")
        assert _options(tmp_path, "--config", str(cfg)).positions is True
