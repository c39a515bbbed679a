"""Unit tests for the collab command line."""

import json
from typing import NoReturn, get_type_hints

import pytest
import typer
from typer.testing import CliRunner

from collab import __version__
from collab.cli import _fail, app
from collab.discovery import ROOT_ENV_VAR

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config search and root discovery away from the real checkout."""
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


def invoke(root, *args):
    return runner.invoke(app, ["--root", str(root), *args])


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"collab version {__version__}" in result.stdout


class TestFail:
    """Test the shared error exit."""

    def test_always_exits(self):
        with pytest.raises(typer.Exit) as exc_info:
            _fail("boom")

        assert exc_info.value.exit_code == 1

    def test_declared_as_never_returning(self):
        assert get_type_hints(_fail)["return"] is NoReturn


class TestValidateCommand:
    """Test the validate command."""

    def test_clean_blackboard(self, blackboard):
        """Test a valid blackboard exits 0 with an empty JSON list."""
        result = invoke(blackboard, "validate")

        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_violations_exit_one(self, blackboard, edit_line):
        """Test violations are emitted as JSON objects and exit 1."""
        edit_line(blackboard / "projects" / "test-tool" / "PROJECT.yaml", "license:", "license: GPL-3.0")

        result = invoke(blackboard, "validate")

        assert result.exit_code == 1
        violations = json.loads(result.stdout)
        assert violations == [{
            "file": "projects/test-tool/PROJECT.yaml",
            "field": "license",
            "message": "Invalid license 'GPL-3.0'",
            "suggestion": "Accepted: MIT, Apache-2.0, BSD-2-Clause, BSD-3-Clause",
        }]

    def test_pretty_output(self, blackboard):
        result = invoke(blackboard, "--pretty", "validate")

        assert result.exit_code == 0
        assert "No violations found!" in result.stdout

    def test_pretty_from_config(self, blackboard, isolated_cwd):
        """Test the configured output format applies without a flag."""
        (isolated_cwd / ".collab.json").write_text(json.dumps({"output": {"format": "pretty"}}), encoding="utf-8")

        result = invoke(blackboard, "validate")

        assert "No violations found!" in result.stdout

    def test_json_flag_overrides_config(self, blackboard, isolated_cwd):
        (isolated_cwd / ".collab.json").write_text(json.dumps({"output": {"format": "pretty"}}), encoding="utf-8")

        result = invoke(blackboard, "--json", "validate")

        assert json.loads(result.stdout) == []

    def test_invalid_config(self, blackboard, isolated_cwd):
        (isolated_cwd / ".collab.json").write_text("{ broken", encoding="utf-8")

        result = invoke(blackboard, "validate")

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_outside_blackboard(self, isolated_cwd):
        """Test a clear error when no root can be found."""
        (isolated_cwd / ".collab.json").write_text(
            json.dumps({"root": {"markers": ["NO-SUCH-MARKER-FILE"]}}), encoding="utf-8")

        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 1
        assert "Not inside a pai-collab blackboard" in result.output

    def test_root_from_environment(self, blackboard, monkeypatch):
        monkeypatch.setenv(ROOT_ENV_VAR, str(blackboard))

        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 0


class TestStatusCommand:
    def test_overview(self, blackboard):
        """Test the blackboard-wide overview document."""
        result = invoke(blackboard, "status")

        assert result.exit_code == 0
        overview = json.loads(result.stdout)
        assert overview["root"] == str(blackboard.resolve())
        assert overview["projects"] == 2
        assert overview["byStatus"] == {"building": 1, "shipped": 1}
        assert overview["contributors"] == {"maintainer": 1, "trusted": 1, "untrusted": 1}
        assert overview["violations"] == 0

    def test_missing_roster(self, blackboard):
        (blackboard / "CONTRIBUTORS.yaml").unlink()

        result = invoke(blackboard, "status")

        # the roster warning is logged to stderr; the JSON document is the last line
        overview = json.loads(result.stdout.strip().splitlines()[-1])

        assert overview["contributors"] is None
        assert overview["violations"] == 1


class TestRegistryCommand:
    def test_tables(self, blackboard):
        result = invoke(blackboard, "registry")

        assert result.exit_code == 0
        registry = json.loads(result.stdout)
        assert [row["name"] for row in registry["projects"]] == ["test-tool", "test-upstream"]
        assert registry["agents"][1]["currentWork"] == "test-upstream"

    def test_missing_registry(self, blackboard):
        (blackboard / "REGISTRY.md").unlink()

        result = invoke(blackboard, "registry")

        assert result.exit_code == 1
        assert "REGISTRY.md not found" in result.output


class TestProjectCommands:
    """Test project list and project status."""

    def test_list(self, blackboard):
        """Test directories without a manifest are left out."""
        rows = json.loads(invoke(blackboard, "project", "list").stdout)

        assert [row["directory"] for row in rows] == ["test-tool", "test-upstream"]
        assert rows[1] == {
            "directory": "test-upstream",
            "name": "Test Upstream",
            "status": "building",
            "type": "skill",
            "maintainer": "bob",
        }

    def test_status_with_journal(self, blackboard):
        result = invoke(blackboard, "project", "status", "test-tool")

        assert result.exit_code == 0
        detail = json.loads(result.stdout)
        assert detail["directory"] == "test-tool"
        assert detail["created"] == "2026-01-15"
        assert detail["journalEntries"] == 2
        assert detail["latestEntry"]["title"] == "Feature Complete"

    def test_status_by_declared_name(self, blackboard):
        """Test lookup by the name declared in PROJECT.yaml."""
        detail = json.loads(invoke(blackboard, "project", "status", "test upstream").stdout)

        assert detail["directory"] == "test-upstream"
        assert detail["journalEntries"] == 0
        assert "latestEntry" not in detail

    def test_status_with_mistyped_fields(self, blackboard, write_file):
        """Test a manifest with wrongly shaped fields is still shown as written."""
        write_file(blackboard / "projects" / "loose" / "PROJECT.yaml",
                   "name: loose\nstatus: building\npaths: src/\ncontributors: [alice]\n")

        result = invoke(blackboard, "project", "status", "loose")

        assert result.exit_code == 0
        detail = json.loads(result.stdout)
        assert detail["paths"] == "src/"
        assert detail["contributors"] == ["alice"]

    def test_status_unknown_project(self, blackboard):
        result = invoke(blackboard, "project", "status", "ghost")

        assert result.exit_code == 1
        assert "Project not found: ghost" in result.output

    def test_pretty_list(self, blackboard):
        result = invoke(blackboard, "--pretty", "project", "list")

        assert result.exit_code == 0
        assert "test-upstream" in result.stdout


class TestJournalCommand:
    def test_show(self, blackboard):
        result = invoke(blackboard, "journal", "show", "test-tool")

        assert result.exit_code == 0
        journal = json.loads(result.stdout)
        assert journal["maintainer"] == "@alice"
        assert [entry["date"] for entry in journal["entries"]] == ["2026-01-20", "2026-01-15"]
        assert journal["entries"][1]["whatEmerged"] == ""

    def test_show_missing_journal(self, blackboard):
        journal = json.loads(invoke(blackboard, "journal", "show", "test-upstream").stdout)

        assert journal == {"maintainer": "", "entries": []}

    def test_show_unknown_project(self, blackboard):
        result = invoke(blackboard, "journal", "show", "ghost")

        assert result.exit_code == 1
