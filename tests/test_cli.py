# Tests for doot.cli
# CLI commands using Click testing

from pathlib import Path

import pytest
from click.testing import CliRunner

from doot.cli import cli


@pytest.fixture
def in_repo(repo_dir: Path, config_file: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run commands from the repository root with its doot.yaml."""
    monkeypatch.delenv("DOOT_CONFIG", raising=False)
    monkeypatch.chdir(repo_dir)
    return repo_dir


class TestCliGroup:
    """Tests for main CLI group."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Doot" in result.output
        assert "import" in result.output
        assert "export" in result.output
        assert "status" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "doot" in result.output
        assert "1.0.0" in result.output

    def test_import_help_lists_targets(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["import", "--help"])
        assert result.exit_code == 0
        assert "group" in result.output
        assert "plan" in result.output


class TestListCommand:
    def test_list(self, in_repo: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "Plans" in result.output
        assert "Groups" in result.output
        assert "minimal" in result.output
        assert "nvim" in result.output

    def test_missing_config(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DOOT_CONFIG", raising=False)
        monkeypatch.chdir(temp_dir)

        runner = CliRunner()
        result = runner.invoke(cli, ["list"])

        assert result.exit_code == 1
        assert "Error: Failed to read config file: doot.yaml" in result.output

    def test_explicit_config_path(self, config_file: Path, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(temp_dir)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "list"])
        assert result.exit_code == 0
        assert "bash" in result.output


class TestImportCommand:
    def test_import_group_with_yes(self, in_repo: Path, system_dir: Path, write_files):
        write_files(system_dir / "home", {".bashrc": "rc"})

        runner = CliRunner()
        result = runner.invoke(cli, ["-y", "import", "group", "bash", "nux"])

        assert result.exit_code == 0, result.output
        assert "Import group 'bash'" in result.output
        assert "Created .bashrc" in result.output
        assert "Done!" in result.output
        assert (in_repo / "bash" / ".bashrc").read_text(encoding="utf-8") == "rc"

    def test_import_declined(self, in_repo: Path, system_dir: Path, write_files):
        write_files(system_dir / "home", {".bashrc": "rc"})

        runner = CliRunner()
        result = runner.invoke(cli, ["import", "group", "bash", "nux"], input="n\n")

        assert result.exit_code == 0
        assert "Proceed? [y/N/d]" in result.output
        assert "Aborted." in result.output
        assert not (in_repo / "bash").exists()

    def test_import_plan_confirmed(self, in_repo: Path, system_dir: Path, write_files):
        write_files(system_dir / "home", {".bashrc": "rc"})
        write_files(system_dir / "nvim", {"init.lua": "vim.o.number = true"})

        runner = CliRunner()
        result = runner.invoke(cli, ["import", "plan", "all", "nux"], input="y\n")

        assert result.exit_code == 0, result.output
        assert (in_repo / "bash" / ".bashrc").exists()
        assert (in_repo / "nvim" / "init.lua").exists()

    def test_unknown_group(self, in_repo: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["import", "group", "zsh", "nux"])
        assert result.exit_code == 1
        assert "Error: Group 'zsh' not found" in result.output

    def test_unknown_resolver(self, in_repo: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["import", "group", "nvim", "mac"])
        assert result.exit_code == 1
        assert "Resolver 'mac' not found in group 'nvim'" in result.output


class TestExportCommand:
    def test_export_nothing_to_do(self, in_repo: Path, system_dir: Path, write_files):
        write_files(in_repo / "bash", {".bashrc": "rc"})
        write_files(system_dir / "home", {".bashrc": "rc"})

        runner = CliRunner()
        result = runner.invoke(cli, ["export", "group", "bash", "nux"])

        assert result.exit_code == 0
        assert "Nothing to do." in result.output
        assert "Proceed?" not in result.output

    def test_export_plan_with_yes(self, in_repo: Path, system_dir: Path, write_files):
        write_files(in_repo / "bash", {".bashrc": "new", ".dootignore": "*.bak\n", "old.bak": "x"})
        write_files(system_dir / "home", {".bashrc": "old"})

        runner = CliRunner()
        result = runner.invoke(cli, ["--yes", "export", "plan", "minimal", "nux"])

        assert result.exit_code == 0, result.output
        assert "Updated .bashrc" in result.output
        assert (system_dir / "home" / ".bashrc").read_text(encoding="utf-8") == "new"
        assert not (system_dir / "home" / "old.bak").exists()
        assert not (system_dir / "home" / ".dootignore").exists()

    def test_unknown_plan(self, in_repo: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["export", "plan", "work", "nux"])
        assert result.exit_code == 1
        assert "Plan 'work' not found" in result.output


class TestStatusCommand:
    def test_status(self, in_repo: Path, system_dir: Path, write_files):
        write_files(in_repo / "bash", {".bashrc": "rc"})
        write_files(system_dir / "home", {".bashrc": "changed"})

        runner = CliRunner()
        result = runner.invoke(cli, ["status", "nux"])

        assert result.exit_code == 0, result.output
        assert "Status for resolver 'nux'" in result.output
        assert "bash - out of sync" in result.output
        assert ".bashrc (modified)" in result.output
        assert "nvim - new" in result.output

    def test_status_does_not_modify(self, in_repo: Path, system_dir: Path, write_files):
        write_files(in_repo / "bash", {".bashrc": "rc"})

        runner = CliRunner()
        runner.invoke(cli, ["status", "nux"])

        assert not (system_dir / "home").exists()
