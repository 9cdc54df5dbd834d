import json
from pathlib import Path

from typer.testing import CliRunner

from apistub.cli import app

runner = CliRunner()


def test_cli_generate_writes_units(tmp_path: Path):
    result = runner.invoke(app, ["generate", "stubfixtures.shop", "--out", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "OrderApi.js").is_file()


def test_cli_generate_fails_when_a_class_fails(tmp_path: Path):
    result = runner.invoke(app, ["generate", "stubfixtures.graph", "stubfixtures.shop", "--out", str(tmp_path)])

    assert result.exit_code == 1
    assert (tmp_path / "OrderApi.js").is_file()
    assert not (tmp_path / "CategoryApi.js").exists()


def test_cli_generate_disabled(tmp_path: Path):
    result = runner.invoke(app, ["generate", "stubfixtures.shop", "--out", str(tmp_path), "--disable"])

    assert result.exit_code == 0
    assert "disabled" in result.stdout
    assert list(tmp_path.iterdir()) == []


def test_cli_manifest(tmp_path: Path):
    manifest = tmp_path / "handlers.json"
    manifest.write_text(
        json.dumps(
            {
                "controllers": [
                    {
                        "name": "ItemController",
                        "base_path": "item",
                        "methods": [{"name": "all", "sub_path": "all", "eligible": True}],
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    out = tmp_path / "api"

    result = runner.invoke(app, ["manifest", str(manifest), "--out", str(out), "--request-module", "@/http"])

    assert result.exit_code == 0, result.output
    text = (out / "ItemApi.js").read_text(encoding="utf-8")
    assert text.startswith("import request from '@/http'\n\n")
    assert "\t\turl: '/item/all',\n" in text


def test_cli_manifest_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["manifest", str(tmp_path / "nope.json")])
    assert result.exit_code != 0


def test_cli_endpoints_list_json():
    result = runner.invoke(app, ["endpoints", "list", "stubfixtures.shop", "--format", "json"])

    assert result.exit_code == 0, result.output
    rows = json.loads(result.stdout)
    assert [(r["method"], r["path"]) for r in rows] == [
        ("get", "/order/list"),
        ("post", "/order/create"),
        ("post", "/legacy/orders/cancel"),
    ]


def test_cli_manifest_disabled_skips_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["manifest", str(tmp_path / "nope.json"), "--disable"])

    assert result.exit_code == 0, result.output
    assert "disabled" in result.stdout
