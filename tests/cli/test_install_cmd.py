"""Tests for ``shellcheck-runner install``."""

from __future__ import annotations

from pathlib import Path

from shellcheck_runner.cli import install_cmd
from shellcheck_runner.cli.main import cli
from shellcheck_runner.exceptions import InstallError


class TestInstallCommand:
    """Exit codes and configuration passed to the installer."""

    def test_prints_binary_location(self, runner, tmp_path, monkeypatch) -> None:
        seen = []

        def fake_install(config):
            seen.append(config)
            return Path(config.installer.install_dir) / config.shellcheck_version / "shellcheck"

        monkeypatch.setattr(install_cmd, "install", fake_install)
        result = runner.invoke(cli, [
            "install", "--shellcheck-version", "v0.9.0",
            "--install-dir", str(tmp_path / "tools"),
            "--base-url", "https://mirror.example.org/shellcheck",
        ])
        assert result.exit_code == 0, result.output
        assert "ShellCheck v0.9.0 available at:" in result.output
        config = seen[0]
        assert config.installer.enabled is True
        assert config.installer.base_url == "https://mirror.example.org/shellcheck"
        assert config.installer.install_dir == (tmp_path / "tools").resolve()

    def test_install_error_exit_2(self, runner, monkeypatch) -> None:
        def failing(config):
            raise InstallError("No prebuilt ShellCheck release for windows/amd64")

        monkeypatch.setattr(install_cmd, "install", failing)
        result = runner.invoke(cli, ["install"])
        assert result.exit_code == 2
        assert "InstallError" in result.output
        assert "windows/amd64" in result.output

    def test_config_file_is_read(self, runner, tmp_path, monkeypatch) -> None:
        seen = []
        monkeypatch.setattr(install_cmd, "install", lambda config: seen.append(config) or tmp_path)
        config_path = tmp_path / "shellcheck.yaml"
        config_path.write_text("shellcheck_version: v0.8.0\n")
        result = runner.invoke(cli, ["install", "--config", str(config_path)])
        assert result.exit_code == 0, result.output
        assert seen[0].shellcheck_version == "v0.8.0"
        assert seen[0].working_dir == tmp_path.resolve()
