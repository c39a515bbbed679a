"""Unit tests for blackboard root discovery."""

import pytest

from collab.config import CollabConfig, RootConfig
from collab.discovery import (
    ROOT_ENV_VAR,
    find_blackboard_root,
    is_blackboard_root,
    resolve_blackboard_root,
)
from collab.parser.errors import BlackboardNotFoundError


@pytest.fixture(autouse=True)
def clear_root_env(monkeypatch):
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)


class TestFindBlackboardRoot:
    """Test walking up to a blackboard root."""

    def test_root_itself(self, blackboard):
        assert is_blackboard_root(blackboard)
        assert find_blackboard_root(blackboard) == blackboard.resolve()

    def test_from_nested_directory(self, blackboard):
        """Test discovery from inside a project directory."""
        start = blackboard / "projects" / "test-tool"

        assert find_blackboard_root(start) == blackboard.resolve()

    def test_requires_every_marker(self, tmp_path):
        """Test a directory with only some markers is not a root."""
        (tmp_path / "projects").mkdir()

        assert not is_blackboard_root(tmp_path)

    def test_custom_markers(self, tmp_path):
        (tmp_path / "BOARD").write_text("", encoding="utf-8")

        assert is_blackboard_root(tmp_path, ["BOARD"])


class TestResolveBlackboardRoot:
    """Test root resolution order."""

    def test_explicit_path(self, blackboard, tmp_path):
        assert resolve_blackboard_root(blackboard, start_dir=tmp_path) == blackboard.resolve()

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(BlackboardNotFoundError, match="not a directory"):
            resolve_blackboard_root(tmp_path / "missing")

    def test_environment_variable(self, blackboard, tmp_path, monkeypatch):
        """Test PAI_COLLAB_ROOT is used without an explicit path."""
        monkeypatch.setenv(ROOT_ENV_VAR, str(blackboard))

        assert resolve_blackboard_root(start_dir=tmp_path) == blackboard.resolve()

    def test_explicit_beats_environment(self, blackboard, tmp_path, monkeypatch):
        other = tmp_path / "other"
        other.mkdir()
        monkeypatch.setenv(ROOT_ENV_VAR, str(other))

        assert resolve_blackboard_root(blackboard) == blackboard.resolve()

    def test_config_path(self, blackboard, tmp_path):
        config = CollabConfig(root=RootConfig(path=str(blackboard)))

        assert resolve_blackboard_root(config=config, start_dir=tmp_path) == blackboard.resolve()

    def test_walks_up_from_start_dir(self, blackboard):
        start = blackboard / "projects" / "no-yaml"

        assert resolve_blackboard_root(start_dir=start) == blackboard.resolve()

    def test_not_found(self, tmp_path):
        """Test a clear error outside any blackboard."""
        config = CollabConfig(root=RootConfig(markers=["NO-SUCH-MARKER-FILE"]))

        with pytest.raises(BlackboardNotFoundError, match="Not inside a pai-collab blackboard"):
            resolve_blackboard_root(config=config, start_dir=tmp_path)
