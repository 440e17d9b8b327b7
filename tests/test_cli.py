"""Tests for the incontext command line."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from incontext.commands.resolve import parse_lines_option
from incontext.logging_setup import JsonlHandler
from incontext.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def root_args(workspace) -> list[str]:
    return ["--root", f"proj={workspace['proj']}", "--root", f"docs={workspace['docs']}"]


class TestResolve:
    def test_json_payload(self, runner, root_args):
        result = runner.invoke(cli, [*root_args, "resolve", "@proj/src/a.ts:L2:3", "--json"])
        assert result.exit_code == 0, result.output
        wire = json.loads(result.output)
        assert wire["type"] == "text"
        assert wire["excerpt"] == "line2\nline3"

    def test_directory_listing(self, runner, root_args):
        result = runner.invoke(cli, [*root_args, "resolve", "@proj/dir/"])
        assert result.exit_code == 0, result.output
        assert "sub/" in result.output
        assert "b.md" in result.output

    def test_image_summary(self, runner, root_args):
        result = runner.invoke(cli, [*root_args, "resolve", "@proj/media/new.png"])
        assert result.exit_code == 0, result.output
        assert "MIME: image/png" in result.output

    def test_not_found_exits_1(self, runner, root_args):
        result = runner.invoke(cli, [*root_args, "resolve", "@proj/missing.ts"])
        assert result.exit_code == 1

    def test_malformed_exits_1(self, runner, root_args):
        result = runner.invoke(cli, [*root_args, "resolve", "@proj/a.ts:Lzz"])
        assert result.exit_code == 1

    def test_overlong_name_exits_1(self, runner, root_args):
        result = runner.invoke(cli, [*root_args, "resolve", "@proj/" + "a" * 300 + ".ts"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, OSError)

    def test_bad_root_option_exits_1(self, runner):
        result = runner.invoke(cli, ["--root", "nopath", "resolve", "@x/y"])
        assert result.exit_code == 1


class TestSpans:
    def test_lists_spans(self, runner):
        result = runner.invoke(cli, ["spans", "see @proj/src/lib/util.ts"])
        assert result.exit_code == 0, result.output
        assert "@proj/.../util.ts" in result.output
        assert "deemphasize" in result.output

    def test_no_references(self, runner):
        result = runner.invoke(cli, ["spans", "plain text"])
        assert result.exit_code == 0
        assert "No references found" in result.output


class TestRef:
    def test_file_with_lines(self, runner, root_args, workspace):
        path = workspace["proj"] / "src" / "a.ts"
        result = runner.invoke(cli, [*root_args, "ref", str(path), "--lines", "2:4"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "@proj/src/a.ts:L2:4"

    def test_directory_is_detected(self, runner, root_args, workspace):
        result = runner.invoke(cli, [*root_args, "ref", str(workspace["proj"] / "dir")])
        assert result.output.strip() == "@proj/dir/"

    def test_outside_roots(self, runner, workspace):
        args = ["--root", f"docs={workspace['docs']}", "ref", str(workspace["proj"] / "data.bin")]
        result = runner.invoke(cli, args)
        assert result.exit_code == 1

    def test_invalid_lines(self, runner, root_args, workspace):
        result = runner.invoke(cli, [*root_args, "ref", str(workspace["proj"] / "src" / "a.ts"), "--lines", "5:2"])
        assert result.exit_code == 2


class TestScan:
    def test_json_lines(self, runner, workspace):
        result = runner.invoke(cli, ["scan", str(workspace["root"]), "--json"])
        assert result.exit_code == 0, result.output
        records = [json.loads(line) for line in result.output.splitlines()]
        assert records == [
            {
                "file": "docs/guide.md",
                "line": 1,
                "column": 5,
                "reference": "@proj/src/a.ts:L2:3",
                "kind": "file",
            }
        ]

    def test_table(self, runner, workspace):
        result = runner.invoke(cli, ["scan", str(workspace["root"])])
        assert result.exit_code == 0
        assert "1 reference(s) in 1 file(s)" in result.output

    def test_empty(self, runner, tmp_path):
        result = runner.invoke(cli, ["scan", str(tmp_path)])
        assert "No references found" in result.output


class TestRoots:
    def test_add_list_remove(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        (tmp_path / "web").mkdir()

        result = runner.invoke(cli, ["roots", "add", "web", "web"])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load((tmp_path / ".incontext" / "settings.yaml").read_text())
        assert data["roots"] == [{"name": "web", "path": str((tmp_path / "web").resolve())}]

        result = runner.invoke(cli, ["roots", "list"])
        assert "web" in result.output

        result = runner.invoke(cli, ["roots", "remove", "web"])
        assert result.exit_code == 0
        assert "Removed" in result.output

    def test_add_rejects_slash(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["roots", "add", "a/b", str(tmp_path)])
        assert result.exit_code == 1

    def test_list_uses_command_line_roots(self, runner, root_args):
        result = runner.invoke(cli, [*root_args, "roots", "list"])
        assert result.exit_code == 0
        assert "proj" in result.output
        assert "docs" in result.output


@pytest.fixture
def detach_json_logging():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, JsonlHandler):
            root.removeHandler(handler)
            handler.close()


def test_log_file_option(runner, root_args, tmp_path, detach_json_logging):
    log_file = tmp_path / "cli.jsonl"
    result = runner.invoke(
        cli, ["--log-file", str(log_file), "--log-level", "debug", *root_args, "resolve", "@proj/nope.ts"]
    )
    assert result.exit_code == 1
    messages = [json.loads(line)["message"] for line in log_file.read_text().splitlines()]
    assert any("Failed to resolve @proj/nope.ts" in m for m in messages)


def test_logs_no_follow(runner, tmp_path):
    log_file = tmp_path / "x.jsonl"
    log_file.write_text('{"lvl": "INFO", "message": "a"}\n{"lvl": "WARNING", "message": "b"}\n')
    result = runner.invoke(cli, ["logs", "--path", str(log_file), "--no-follow", "--level", "warning"])
    assert result.exit_code == 0
    assert result.output.strip() == '{"lvl": "WARNING", "message": "b"}'


@pytest.mark.parametrize(("value", "expected"), [("3", (3, 3)), ("2:9", (2, 9))])
def test_parse_lines_option(value, expected):
    assert parse_lines_option(value) == expected
