from __future__ import annotations

import sys
from pathlib import Path

import pytest

from cbtr.cli._dispatcher import build_parser, main, operation_for_program, program_name_from
from cbtr.core.exceptions import EXIT_CONFIG_ERROR, EXIT_USAGE_ERROR
from cbtr.core.operations import Operation
from helpers.commands import echo_line, exit_with
from helpers.io_utils import touch, write_config

pytestmark = pytest.mark.skipif(
    " " in sys.executable,
    reason="config tool lists are whitespace-split; interpreter path contains spaces",
)


def test_program_name_selects_operation() -> None:
    assert operation_for_program("b") is Operation.BUILD
    assert operation_for_program("format") is Operation.FORMAT
    assert operation_for_program("cbtr") is None
    assert program_name_from("/usr/local/bin/t") == "t"
    assert program_name_from("C:\\tools\\r.exe".replace("\\", "/")) == "r"


def test_unexpected_program_name_is_a_usage_error(capsys) -> None:
    assert main([], prog="/usr/bin/frobnicate") == EXIT_USAGE_ERROR
    err = capsys.readouterr().err
    assert "unexpected name 'frobnicate'" in err
    assert "f/format" in err


def test_program_name_must_match_exactly() -> None:
    assert main([], prog="/usr/bin/B") == EXIT_USAGE_ERROR


def test_cbtr_requires_an_explicit_operation() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([], prog="cbtr")
    assert excinfo.value.code == 2


def test_multicall_parser_rejects_positional_operation() -> None:
    parser = build_parser("b", multicall=True)
    with pytest.raises(SystemExit):
        parser.parse_args(["build"])
    args = parser.parse_args(["--dry-run", "--no-searchback"])
    assert args.dry_run and args.no_searchback


def test_repo_config_build_runs_one_command(isolated_project_env: Path, capsys) -> None:
    write_config(
        isolated_project_env / ".cbtr.yaml",
        [{"name": "X", "tools": {"build": [echo_line("built")]}}],
    )

    assert main([], prog="b") == 0

    out = capsys.readouterr().out
    assert out.count("Running '") == 1
    assert "  | built\n" in out
    assert "command exited with return code 0" in out


def test_failing_command_exit_code_becomes_process_status(isolated_project_env: Path, capsys) -> None:
    write_config(
        isolated_project_env / ".cbtr.yaml",
        [{"name": "X", "tools": {"test": [exit_with(0), exit_with(5), echo_line("never")]}}],
    )

    assert main(["test"], prog="cbtr") == 5
    assert "never" not in capsys.readouterr().out


def test_dry_run_prints_commands(isolated_project_env: Path, capsys) -> None:
    write_config(
        isolated_project_env / ".cbtr.yaml",
        [{"name": "X", "tools": {"check": [exit_with(9)]}}],
    )

    assert main(["--dry-run"], prog="c") == 0
    assert "[dryrun] Would run" in capsys.readouterr().out


def test_user_config_and_custom_indent(isolated_project_env: Path, user_config_dir: Path, capsys) -> None:
    write_config(
        user_config_dir / "config.yaml",
        [{"name": "user", "tools": {"run": echo_line("hi")}}],
        settings={"indent": "~~ "},
    )

    assert main([], prog="r") == 0
    assert "~~ hi\n" in capsys.readouterr().out


def test_repository_profiles_shadow_user_profiles(isolated_project_env: Path, user_config_dir: Path, capsys) -> None:
    write_config(user_config_dir / "config.yaml", [{"name": "user", "tools": {"run": echo_line("user")}}])
    write_config(isolated_project_env / ".cbtr.yaml", [{"name": "repo", "tools": {"run": echo_line("repo")}}])

    assert main([], prog="r") == 0
    out = capsys.readouterr().out
    assert "  | repo\n" in out
    assert "  | user\n" not in out


def test_marker_file_search_from_subdirectory(isolated_project_env: Path, monkeypatch, capsys) -> None:
    touch(isolated_project_env / "a" / "justfile")
    write_config(
        isolated_project_env / ".cbtr.yaml",
        [
            {
                "name": "just",
                "file": {"name": "justfile", "search-direction": "backwards"},
                "tools": {"build": echo_line("just")},
            },
            {"name": "default", "tools": {"build": echo_line("default")}},
        ],
    )
    monkeypatch.chdir(isolated_project_env / "a" / "b")

    assert main([], prog="b") == 0
    assert "  | just\n" in capsys.readouterr().out


def test_no_config_is_reported(isolated_project_env: Path, capsys) -> None:
    assert main([], prog="f") == EXIT_CONFIG_ERROR
    assert "No cbtr configuration found" in capsys.readouterr().err


def test_no_tools_for_operation_is_reported(isolated_project_env: Path, capsys) -> None:
    write_config(isolated_project_env / ".cbtr.yaml", [{"name": "X", "tools": {"build": "make"}}])

    assert main([], prog="f") == EXIT_CONFIG_ERROR
    assert "No registered format operation for profile 'X'" in capsys.readouterr().err


def test_missing_binary_in_tool_list_is_reported(isolated_project_env: Path, capsys) -> None:
    write_config(
        isolated_project_env / ".cbtr.yaml",
        [{"name": "X", "tools": {"build": ["cbtr-definitely-not-a-real-binary", echo_line("after")]}}],
    )

    assert main([], prog="b") == EXIT_CONFIG_ERROR
    captured = capsys.readouterr()
    assert "Couldn't find cbtr-definitely-not-a-real-binary" in captured.err
    assert "after" not in captured.out


def test_explicit_config_file_flag(isolated_project_env: Path, tmp_path: Path, capsys) -> None:
    custom = write_config(tmp_path / "custom.yaml", [{"name": "c", "tools": {"build": echo_line("custom")}}])

    assert main(["--config-file", str(custom)], prog="b") == 0
    assert "  | custom\n" in capsys.readouterr().out
