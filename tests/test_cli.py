from __future__ import annotations

import json

from funnel_builder.cli import main
from funnel_builder.examples import example_funnel_payload


def _write(tmp_path, payload) -> str:
    path = tmp_path / "funnel.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_validate_command(tmp_path, capsys):
    assert main(["validate", _write(tmp_path, example_funnel_payload())]) == 0
    assert "ok (9 blocks)" in capsys.readouterr().out


def test_validate_command_reports_issues(tmp_path, capsys):
    payload = example_funnel_payload()
    payload["blocks"] = []

    assert main(["validate", _write(tmp_path, payload)]) == 1
    assert "blocks:" in capsys.readouterr().err


def test_lint_command_exit_code_follows_rule_errors(tmp_path, capsys):
    payload = example_funnel_payload()
    assert main(["lint", _write(tmp_path, payload)]) == 0
    assert json.loads(capsys.readouterr().out)["valid"] is True

    payload["blocks"] = [block for block in payload["blocks"] if block["tag"] != "AddToCartButton"]
    assert main(["lint", _write(tmp_path, payload)]) == 1
    report = json.loads(capsys.readouterr().out)
    assert report["errors"] == ["Funnel must include at least one AddToCartButton"]


def test_render_command_writes_html(tmp_path, capsys):
    output = tmp_path / "page.html"

    assert main(["render", _write(tmp_path, example_funnel_payload()), "--output", str(output)]) == 0
    html = output.read_text(encoding="utf-8")
    assert html.count("data-block-id=") == 9


def test_example_command_prints_valid_payload(capsys):
    assert main(["example"]) == 0
    assert json.loads(capsys.readouterr().out) == example_funnel_payload()
