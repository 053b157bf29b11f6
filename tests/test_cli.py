"""Tests for warble.cli — CLI entrypoint and the routes command."""

import json
from pathlib import Path

import pytest

from warble.cli import main

TREE = [
    {"path": "products", "children": [{"path": ":id"}]},
    {"path": "about"},
    {"path": "admin", "data": {"skipRouteLocalization": True}},
    {"path": "**", "redirectTo": "products"},
]


@pytest.fixture
def tree_file(tmp_path: Path) -> Path:
    path = tmp_path / "routes.json"
    path.write_text(json.dumps(TREE), encoding="utf-8")
    return path


@pytest.fixture
def fr_file(tmp_path: Path) -> Path:
    path = tmp_path / "fr.json"
    path.write_text(json.dumps({"routes": {"products": "produits", "about": "a-propos"}}))
    return path


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_tree(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_routes_missing_locales(self, tree_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tree_file)])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "warble" in capsys.readouterr().out


class TestRoutesCommand:
    def test_translated_tree(
        self, tree_file: Path, fr_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(
            [
                "routes",
                str(tree_file),
                "--locales",
                "en,fr",
                "--locale",
                "fr",
                "--dictionary",
                f"fr={fr_file}",
            ]
        )

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["PATH", "REDIRECT"]
        rows = [line.rstrip() for line in lines[2:]]
        assert rows[0].split() == ['""', "fr"]
        assert rows[1] == "fr"
        assert rows[2] == "  produits"
        assert rows[3] == "    :id"
        assert rows[4] == "  a-propos"
        assert rows[5] == "admin"
        assert rows[6].split() == ["**", "/fr/produits"]

    def test_default_locale(self, tree_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(tree_file), "--locales", "en,fr", "--no-prefix"])

        rows = capsys.readouterr().out.splitlines()[2:]
        assert rows[0] == '""'
        assert rows[1] == "  products"

    def test_unreadable_tree(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "missing.json"), "--locales", "en"])
        assert exc_info.value.code == 1
        assert "cannot read" in capsys.readouterr().err

    def test_unsupported_locale(
        self, tree_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tree_file), "--locales", "en,fr", "--locale", "de"])
        assert exc_info.value.code == 1
        assert "'de'" in capsys.readouterr().err

    def test_bad_dictionary_spec(
        self, tree_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tree_file), "--locales", "en", "--dictionary", "fr.json"])
        assert exc_info.value.code == 1
        assert "LOCALE=FILE" in capsys.readouterr().err
