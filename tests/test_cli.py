"""Tests for the modkit CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler
from typer.testing import CliRunner

from modkit.cli import app, load_mod
from modkit.core.mod import Mod

runner = CliRunner()


@pytest.fixture(autouse=True)
def _sample_mods_importable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.syspath_prepend(str(Path(__file__).parent))


class TestLoadMod:
    def test_resolves_mod(self) -> None:
        mod = load_mod("modkit_sample_mods:upper_name")
        assert isinstance(mod, Mod)
        assert mod.steps == ("['name'].shout",)

    def test_dotted_attribute(self) -> None:
        from modkit_sample_mods import banner

        assert load_mod("modkit_sample_mods:Styles.loud") is banner

    def test_dotted_attribute_not_a_mod(self) -> None:
        with pytest.raises(TypeError, match="method"):
            load_mod("modkit_sample_mods:upper.appending")

    def test_malformed_target(self) -> None:
        with pytest.raises(ValueError, match="package.module:attribute"):
            load_mod("modkit_sample_mods")

    def test_not_a_mod(self) -> None:
        with pytest.raises(TypeError, match="not a Mod"):
            load_mod("modkit_sample_mods:not_a_mod")

    def test_missing_module(self) -> None:
        with pytest.raises(ImportError):
            load_mod("modkit_no_such_module:upper")


class TestInspect:
    def test_table(self) -> None:
        result = runner.invoke(app, ["inspect", "modkit_sample_mods:banner"])
        assert result.exit_code == 0
        assert "shout" in result.output
        assert "frame" in result.output

    def test_json(self) -> None:
        result = runner.invoke(app, ["inspect", "modkit_sample_mods:banner", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["steps"] == ["shout", "frame"]
        assert data["step_count"] == 2

    def test_output_file(self, tmp_path: Path) -> None:
        path = tmp_path / "steps.json"
        result = runner.invoke(
            app, ["inspect", "modkit_sample_mods:upper_friends", "--json", "--output", str(path)]
        )
        assert result.exit_code == 0
        assert json.loads(path.read_text())["steps"] == ["['friends'][*].['name'].shout"]

    def test_verbose(self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
        pkg_logger = logging.getLogger("modkit")
        monkeypatch.setattr(pkg_logger, "handlers", list(pkg_logger.handlers))
        monkeypatch.setattr(pkg_logger, "level", pkg_logger.level)

        result = runner.invoke(app, ["--verbose", "inspect", "modkit_sample_mods:upper", "--json"])

        assert result.exit_code == 0
        assert pkg_logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in pkg_logger.handlers)
        assert "Resolved modkit_sample_mods:upper" in caplog.text

    def test_bad_target_exits(self) -> None:
        result = runner.invoke(app, ["inspect", "modkit_sample_mods:not_a_mod"])
        assert result.exit_code == 1
        assert "not a Mod" in result.output


class TestApply:
    def test_pullback_record(self) -> None:
        result = runner.invoke(
            app, ["apply", "modkit_sample_mods:upper_name", '{"name": "blob", "age": 78}']
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {"name": "BLOB", "age": 78}

    def test_for_each_records(self) -> None:
        item = {"name": "june", "friends": [{"name": "elie"}, {"name": "aria"}]}
        result = runner.invoke(app, ["apply", "modkit_sample_mods:upper_friends", json.dumps(item)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["name"] == "june"
        assert [f["name"] for f in data["friends"]] == ["ELIE", "ARIA"]

    def test_invalid_json(self) -> None:
        result = runner.invoke(app, ["apply", "modkit_sample_mods:upper_name", "{name"])
        assert result.exit_code == 1
        assert "invalid JSON" in result.output

    def test_missing_target(self) -> None:
        result = runner.invoke(app, ["apply", "modkit_sample_mods:nope", "{}"])
        assert result.exit_code == 1
