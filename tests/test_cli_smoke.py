"""Smoke tests for CLI and server entry points."""

from __future__ import annotations

import json
import signal
import subprocess
import sys

from tsformat import __version__


def test_help_lists_command_groups(run_tsformat) -> None:
    result = run_tsformat(["--help"])
    assert result.returncode == 0
    for expected in ["serve", "format", "config"]:
        assert expected in result.stdout


def test_format_group_help_lists_operations(run_tsformat) -> None:
    result = run_tsformat(["format", "--help"])
    assert result.returncode == 0
    for expected in ["render", "explain", "errors"]:
        assert expected in result.stdout


def test_version_flag_prints_package_version(run_tsformat) -> None:
    result = run_tsformat(["--version"])
    assert result.returncode == 0
    assert __version__ in result.stdout


def test_serve_exits_cleanly_on_eof(project_root, cli_env) -> None:
    proc = subprocess.Popen(
        [sys.executable, "-m", "tsformat", "serve"],
        cwd=project_root,
        env=cli_env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    assert proc.stdin is not None
    proc.stdin.close()
    proc.wait(timeout=5)
    assert proc.returncode == 0


def test_render_prints_line(run_tsformat) -> None:
    result = run_tsformat(["format", "render", "Hello %s, %d times", "world", "3"])
    assert result.returncode == 0
    assert result.stdout == "Hello world, 3 times\n"


def test_render_raw_flag_keeps_text(run_tsformat) -> None:
    result = run_tsformat(["format", "render", "--raw", "%x|%d", "255", "true"])
    assert result.returncode == 0
    assert result.stdout == "255|true\n"


def test_render_syntax_error_exits_nonzero(run_tsformat) -> None:
    result = run_tsformat(["format", "render", "%q"])
    assert result.returncode == 1
    assert result.stdout == ""
    assert "error: unknown specifier (unknown_specifier)" in result.stderr


def test_render_too_few_arguments(run_tsformat) -> None:
    result = run_tsformat(["format", "render", "%s and %s", "one"])
    assert result.returncode == 1
    assert "too_few_arguments" in result.stderr


def test_render_too_many_arguments_still_prints(run_tsformat) -> None:
    result = run_tsformat(["format", "render", "%s", "a", "b"])
    assert result.returncode == 1
    assert result.stdout == "a\n"
    assert "too_many_arguments" in result.stderr


def test_render_honours_newline_config(run_tsformat, project_root) -> None:
    (project_root / ".tsformat" / "config.toml").write_text(
        "[output]\nnewline = false\n", encoding="utf-8"
    )
    result = run_tsformat(["format", "render", "%s!", "done"])
    assert result.returncode == 0
    assert result.stdout == "done!"


def test_abort_policy_config_aborts(run_tsformat, project_root) -> None:
    (project_root / ".tsformat" / "config.toml").write_text(
        "[defaults]\npolicy = 'abort'\n", encoding="utf-8"
    )
    result = run_tsformat(["format", "render", "%q"])
    assert result.returncode == -signal.SIGABRT
    assert 'tsformat "%q": unknown specifier' in result.stderr


def test_explain_shows_bindings(run_tsformat) -> None:
    result = run_tsformat(["format", "explain", "%*d|%1$s"])
    assert result.returncode == 0
    assert "arguments: 3" in result.stdout
    assert "%*d" in result.stdout
    assert "#1:arg" in result.stdout


def test_errors_lists_catalogue(run_tsformat) -> None:
    result = run_tsformat(["format", "errors"])
    assert result.returncode == 0
    assert "missing_fill_character" in result.stdout
    assert "syntax" in result.stdout


def test_config_show_reports_sources(run_tsformat) -> None:
    result = run_tsformat(["config", "show"])
    assert result.returncode == 0
    assert "defaults.policy: report [source: builtin]" in result.stdout
    assert "output.newline: true [source: builtin]" in result.stdout


def test_config_show_env_source(run_tsformat, cli_env) -> None:
    cli_env["TSFORMAT_FLUSH"] = "yes"
    result = run_tsformat(["--json", "config", "show"])
    assert result.returncode == 0
    payload = json.loads(result.stdout)
    flush = next(item for item in payload["values"] if item["key"] == "output.flush")
    assert flush == {
        "key": "output.flush",
        "value": True,
        "source": "env var",
        "env_var": "TSFORMAT_FLUSH",
    }


def test_config_show_project_root_flag(run_tsformat, tmp_path) -> None:
    other = tmp_path / "other"
    (other / ".tsformat").mkdir(parents=True)
    (other / ".tsformat" / "config.toml").write_text(
        "[arguments]\nlocale = 'de'\n", encoding="utf-8"
    )
    result = run_tsformat(["config", "show", "--project-root", str(other)])
    assert result.returncode == 0
    assert "arguments.locale: de [source: file]" in result.stdout


def test_debug_logs_go_to_stderr(run_tsformat) -> None:
    result = run_tsformat(["-vv", "format", "render", "%s", "a"])
    assert result.returncode == 0
    assert result.stdout == "a\n"
    assert "Parsed format string." in result.stderr
