"""Tests for the Typer command line."""
import json

from typer.testing import CliRunner

from cli.commands import app

runner = CliRunner()


def test_types_lists_supported_formats():
    result = runner.invoke(app, ["types"])

    assert result.exit_code == 0
    lines = result.output.split()
    assert "yaml" in lines
    assert "json" in lines


def test_show_prints_resolved_configuration(bundle, work_dir, write, monkeypatch):
    monkeypatch.delenv("DEMO_DB_PORT", raising=False)
    write(bundle / "embeds" / "params" / "db.yaml", "db:\n  port: 5432\n")
    write(work_dir / "params" / "db.yaml", "db:\n  host: disk\n")

    result = runner.invoke(app, [
        "--log-level", "ERROR",
        "show",
        "--embeds", str(bundle),
        "--work-dir", str(work_dir),
        "--app-name", "demo",
    ])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["app_name"] == "demo"
    assert payload["work_dir"] == str(work_dir)
    assert payload["data"] == {"db": {"port": 5432, "host": "disk"}}


def test_show_fails_without_embedded_env(tmp_path, work_dir):
    result = runner.invoke(app, [
        "--log-level", "ERROR",
        "show",
        "--embeds", str(tmp_path / "missing"),
        "--work-dir", str(work_dir),
    ])

    assert result.exit_code == 1
    assert "Initialization failed" in result.output
