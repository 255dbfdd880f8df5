"""Tests for the ``new`` adapter (move_scaffold.new)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import SUI_SOURCE, read_manifest
from move_scaffold.config import Config, FrameworkConfig
from move_scaffold.new import build_request, new_package, render_starter_module
from move_scaffold.scaffolder import AlreadyExistsError, InvalidNameError, ScaffoldIOError

pytestmark = pytest.mark.unit


class TestBuildRequest:
    def test_fixed_parameters(self):
        request = build_request("Coin")
        assert request.package_name == "coin"
        assert request.version == "0.0.1"
        assert [(d.name, d.source) for d in request.dependencies] == [("Sui", SUI_SOURCE)]
        assert [(a.name, a.value) for a in request.addresses] == [("coin", "0x0")]
        assert request.target_path is None
        assert request.seed_content == ""

    def test_path_passed_through(self, tmp_path):
        request = build_request("Coin", tmp_path / "x")
        assert request.target_path == tmp_path / "x"

    def test_config_injected(self):
        config = Config(
            version="2.0.0",
            address_value="0x7",
            framework=FrameworkConfig(name="Framework", rev="v1"),
        )
        request = build_request("Coin", config=config)
        assert request.version == "2.0.0"
        assert request.dependencies[0].name == "Framework"
        assert 'rev = "v1"' in request.dependencies[0].source
        assert request.addresses[0].value == "0x7"


class TestStarterModule:
    def test_module_named_after_package(self):
        text = render_starter_module("Coin")
        assert "module coin::coin {" in text


class TestNewPackage:
    def test_coin_scenario(self, workdir):
        root = new_package("Coin")
        assert root == workdir / "coin"
        manifest = read_manifest(root)
        assert manifest["package"] == {"name": "coin", "version": "0.0.1"}
        assert manifest["dependencies"]["Sui"]["rev"] == "main"
        assert manifest["addresses"] == {"coin": "0x0"}
        assert (root / "sources").is_dir()
        assert not any((root / "sources").iterdir())

    def test_explicit_path(self, tmp_path):
        target = tmp_path / "somewhere"
        assert new_package("Coin", target) == target
        assert read_manifest(target)["addresses"] == {"coin": "0x0"}

    def test_cwd_argument(self, tmp_path):
        root = new_package("Coin", cwd=tmp_path)
        assert root == tmp_path / "coin"

    def test_local_framework_checkout_parses(self, tmp_path):
        config = Config(framework=FrameworkConfig(git=r"C:\repos\sui", rev='a"b'))
        root = new_package("Coin", tmp_path / "coin", config)
        sui = read_manifest(root)["dependencies"]["Sui"]
        assert sui["git"] == r"C:\repos\sui"
        assert sui["rev"] == 'a"b'

    def test_with_module(self, tmp_path):
        root = new_package("Coin", cwd=tmp_path, with_module=True)
        source = root / "sources" / "coin.move"
        assert "module coin::coin" in source.read_text(encoding="utf-8")

    def test_existing_nonempty_target(self, tmp_path):
        target = tmp_path / "existing_nonempty"
        target.mkdir()
        (target / "file.txt").write_text("data", encoding="utf-8")
        with pytest.raises(AlreadyExistsError):
            new_package("Coin", target)
        assert [p.name for p in target.iterdir()] == ["file.txt"]

    def test_second_call_fails(self, workdir):
        new_package("Coin")
        with pytest.raises(AlreadyExistsError):
            new_package("Coin")

    def test_empty_name(self, workdir):
        with pytest.raises(InvalidNameError):
            new_package("")
        assert list(workdir.iterdir()) == []

    def test_io_error_propagates_unchanged(self, tmp_path):
        boom = ScaffoldIOError("EACCES", tmp_path)
        with patch("move_scaffold.new.ScaffoldGenerator.generate", side_effect=boom):
            with pytest.raises(ScaffoldIOError) as exc_info:
                new_package("Coin", cwd=tmp_path)
        assert exc_info.value is boom
