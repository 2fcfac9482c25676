"""Tests for addon_bumper.release."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, call, patch

import pytest

from addon_bumper.release import default_message, format_message, record_release


class TestMessages:
    def test_default_with_addon(self) -> None:
        assert default_message("1.2.3", "Alpha") == "Bump Alpha version to 1.2.3"

    def test_default_without_addon(self) -> None:
        assert default_message("1.2.3") == "Bump version to 1.2.3"

    def test_template(self) -> None:
        assert (
            format_message("release({addon}): v{version}", "1.2.3", "Alpha")
            == "release(Alpha): v1.2.3"
        )

    def test_no_template_falls_back(self) -> None:
        assert format_message(None, "1.2.3", "Alpha") == "Bump Alpha version to 1.2.3"


class TestRecordRelease:
    @patch("addon_bumper.release.git")
    def test_dirty_tree_commits_tags_and_pushes(self, mock_git: MagicMock) -> None:
        """Pending changes are staged and committed before tagging."""
        mock_git.side_effect = [" M Alpha.toc", "", "", "", ""]

        ok = record_release("2.0.0", addon="Alpha", cwd="addons/Alpha")

        assert ok is True
        assert mock_git.call_args_list == [
            call("status", "--porcelain", cwd="addons/Alpha"),
            call("add", ".", cwd="addons/Alpha"),
            call("commit", "-m", "Bump Alpha version to 2.0.0", cwd="addons/Alpha"),
            call("tag", "2.0.0", cwd="addons/Alpha"),
            call("push", "origin", "HEAD", "2.0.0", cwd="addons/Alpha"),
        ]

    @patch("addon_bumper.release.git")
    def test_clean_tree_skips_commit(self, mock_git: MagicMock) -> None:
        mock_git.return_value = ""

        assert record_release("1.0.1") is True

        commands = [c.args[0] for c in mock_git.call_args_list]
        assert commands == ["status", "tag", "push"]
        assert all(c.kwargs["cwd"] is None for c in mock_git.call_args_list)

    @patch("addon_bumper.release.git")
    def test_message_with_spaces_is_one_argument(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = ["?? new.toc", "", "", "", ""]

        record_release("1.0.0", message="chore: bump Alpha & Beta", cwd="x")

        assert call("commit", "-m", "chore: bump Alpha & Beta", cwd="x") in (
            mock_git.call_args_list
        )

    @patch("addon_bumper.release.git")
    def test_failure_stops_remaining_steps(
        self, mock_git: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A failing tag means no push, and one consolidated report."""
        mock_git.side_effect = [
            "",
            subprocess.CalledProcessError(
                128, ["git", "tag", "1.0.0"], stderr="fatal: tag '1.0.0' already exists"
            ),
        ]

        ok = record_release("1.0.0", addon="Alpha")

        assert ok is False
        assert mock_git.call_count == 2
        out = capsys.readouterr().out
        assert "Git operations failed: git tag 1.0.0: fatal: tag '1.0.0' already exists" in out

    @patch("addon_bumper.release.git")
    def test_missing_git_is_reported(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = FileNotFoundError("git")

        assert record_release("1.0.0") is False

    @patch("addon_bumper.release.git")
    def test_dry_run_runs_nothing(
        self, mock_git: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        ok = record_release("1.2.0", addon="Beta", dry_run=True)

        assert ok is True
        mock_git.assert_not_called()
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "  Would commit pending changes with message: Bump Beta version to 1.2.0",
            "  Would create tag: 1.2.0",
            "  Would push changes and tag to origin",
        ]
