"""Tests for dependency checking and the database check."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from card_align.config import RunConfig
from card_align.exceptions import DatabaseNotFoundError


class TestCheckDependencies:

    def test_present_tool_not_installed(self):
        with patch("card_align.deps.shutil.which", return_value="/usr/bin/diamond"), \
             patch("card_align.deps.subprocess.run") as mock_run:
            from card_align.deps import check_dependencies
            missing = check_dependencies(["diamond"])
        assert missing == []
        mock_run.assert_not_called()

    def test_missing_tool_triggers_conda_install(self):
        def which(name):
            return "/opt/conda/bin/conda" if name == "conda" else None

        with patch("card_align.deps.shutil.which", side_effect=which), \
             patch("card_align.deps.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stderr="")
            from card_align.deps import check_dependencies
            missing = check_dependencies(["diamond"])

        assert missing == ["diamond"]
        cmd = mock_run.call_args[0][0]
        assert cmd[0] == "/opt/conda/bin/conda"
        assert cmd[1:3] == ["install", "-y"]
        assert "bioconda" in cmd
        assert cmd[-1] == "diamond"

    def test_failed_install_does_not_raise(self):
        def which(name):
            return "/opt/conda/bin/conda" if name == "conda" else None

        with patch("card_align.deps.shutil.which", side_effect=which), \
             patch("card_align.deps.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stderr="PackagesNotFoundError")
            from card_align.deps import check_dependencies
            assert check_dependencies(["diamond"]) == ["diamond"]

    def test_no_conda_available(self):
        with patch("card_align.deps.shutil.which", return_value=None), \
             patch("card_align.deps.subprocess.run") as mock_run:
            from card_align.deps import check_dependencies
            assert check_dependencies(["diamond"]) == ["diamond"]
        mock_run.assert_not_called()


class TestValidateDatabase:

    def test_existing_database(self, tmp_path):
        from card_align.database import validate_database
        (tmp_path / "card.dmnd").touch()
        cfg = RunConfig(database=tmp_path / "card")
        assert validate_database(cfg) == tmp_path / "card.dmnd"

    def test_missing_database_raises(self, tmp_path):
        from card_align.database import validate_database
        cfg = RunConfig(database=tmp_path / "card")
        with pytest.raises(DatabaseNotFoundError, match="card.dmnd"):
            validate_database(cfg)

    def test_bare_name_without_extension_is_not_enough(self, tmp_path):
        from card_align.database import validate_database
        (tmp_path / "card").touch()
        with pytest.raises(DatabaseNotFoundError):
            validate_database(RunConfig(database=tmp_path / "card"))
