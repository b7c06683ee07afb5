"""CLI output mode behavior for format and config commands."""

from __future__ import annotations

import json

from tsformat.cli.output import (
    OutputConfig,
    normalize_output_format,
    porcelain_lines,
    render_output,
)


def test_json_mode_outputs_render_payload(run_tsformat) -> None:
    result = run_tsformat(["--json", "format", "render", "%#x", "255"])
    assert result.returncode == 0
    assert "Traceback" not in result.stderr
    payload = json.loads(result.stdout)
    assert payload == {
        "consumed": 1,
        "error": "none",
        "message": "",
        "ok": True,
        "required": 1,
        "text": "0xff",
    }


def test_json_mode_reports_errors_in_payload(run_tsformat) -> None:
    result = run_tsformat(["--format", "json", "format", "render", "%*s", "wide", "x"])
    assert result.returncode == 0
    payload = json.loads(result.stdout)
    assert payload["ok"] is False
    assert payload["error"] == "width_arg_is_not_numeric"
    assert payload["consumed"] == 0


def test_porcelain_mode_outputs_stable_key_values(run_tsformat) -> None:
    result = run_tsformat(["--porcelain", "format", "render", "%s", "a"])
    assert result.returncode == 0
    assert result.stdout == (
        "consumed=1\terror=none\tmessage=\tok=True\trequired=1\ttext=a\n"
    )


def test_porcelain_list_output_is_one_line_per_item(run_tsformat) -> None:
    result = run_tsformat(["--porcelain", "format", "errors"])
    assert result.returncode == 0
    payload_line = result.stdout.splitlines()[0]
    assert payload_line.startswith("errors=")


def test_text_mode_is_human_readable(run_tsformat) -> None:
    result = run_tsformat(["--format", "text", "format", "explain", "%s"])
    assert result.returncode == 0
    assert "text: '%s'" in result.stdout
    assert not result.stdout.strip().startswith("{")


def test_json_explain_includes_directives(run_tsformat) -> None:
    result = run_tsformat(["--json", "format", "explain", "%-5s"])
    assert result.returncode == 0
    payload = json.loads(result.stdout)
    assert payload["required"] == 1
    assert payload["directives"][0]["directive"] == "%-5s"
    assert payload["bindings"] == [{"argument": 1, "targets": [[0, ["arg"]]]}]


def test_normalize_output_format_precedence() -> None:
    def resolve(requested: str | None, *, json_mode: bool = False, porcelain: bool = False) -> str:
        return normalize_output_format(
            requested=requested, json_mode=json_mode, porcelain_mode=porcelain
        )

    assert resolve("porcelain", json_mode=True) == "json"
    assert resolve("json", porcelain=True) == "porcelain"
    assert resolve(" JSON ") == "json"
    assert resolve(None) == "text"


def test_render_output_porcelain_nests_json_values() -> None:
    config = OutputConfig(format="porcelain")
    rendered = render_output({"b": [1, 2], "a": "x"}, config)
    assert rendered == 'a=x\tb=[1, 2]'


def test_render_output_text_falls_back_to_indented_json() -> None:
    rendered = render_output({"a": 1}, OutputConfig(format="text"))
    assert rendered == '{\n  "a": 1\n}'


def test_porcelain_lines_one_per_list_item() -> None:
    assert list(porcelain_lines([{"k": 1}, "plain"])) == ["k=1", "plain"]
