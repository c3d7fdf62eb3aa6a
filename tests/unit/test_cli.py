#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for the habkit command-line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from provide.testkit.mocking import patch

from habkit.cli.main import cli

CONFIG = """
[provisioner]
package_origin = "example"
package_name = "package"
package_version = "0.1.0"
package_release = "20200406205105"
channel = "stable"
hab_version = "1.5.29"
hab_sup_bind = ["web:web.default", "database:database.default"]
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_path(config_file) -> Path:
    return config_file(CONFIG)


class TestMainCLI:
    """Test main CLI entry point."""

    def test_cli_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "render" in result.output
        assert "ident" in result.output
        assert "paths" in result.output

    def test_cli_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        version_file = Path(__file__).parent.parent.parent / "VERSION"
        assert version_file.read_text().strip() in result.output


class TestRenderCommand:
    """Tests for ``habkit render``."""

    def test_render_linux_install(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(cli, ["render", "install", "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "  sudo -E bash /tmp/install.sh -v 1.5.29\n" in result.output

    def test_render_windows_install(self, runner: CliRunner, config_path: Path) -> None:
        """Test that --os-family overrides the configured family."""
        result = runner.invoke(cli, ["render", "install", "-c", str(config_path), "--os-family", "windows"])

        assert result.exit_code == 0, result.output
        assert "-ArgumentList , 1.5.29" in result.output

    def test_render_supervisor_options(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(cli, ["render", "supervisor-options", "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        assert " --bind web:web.default  --bind database:database.default --channel stable\n" in result.output

    def test_render_run_unwrapped(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(cli, ["render", "run", "--no-wrap", "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "sudo -E hab svc load example/package/0.1.0/20200406205105 --bind" in result.output

    def test_render_run_wrapped(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(cli, ["render", "run", "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "sh -c '\n" in result.output

    def test_render_without_config(self, runner: CliRunner) -> None:
        """Test that rendering with no config file uses an empty configuration."""
        result = runner.invoke(cli, ["render", "service-options"])

        assert result.exit_code == 0, result.output
        assert "--" not in result.output

    def test_render_config_from_env(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(cli, ["render", "remove-user-toml"], env={"HABKIT_CONF": str(config_path)})

        assert result.exit_code == 0, result.output
        assert "sudo -E find /hab/user/package/config -name user.toml -delete" in result.output

    def test_render_missing_package_name_fails(self, runner: CliRunner) -> None:
        """Test that a configuration error exits with status 1."""
        result = runner.invoke(cli, ["render", "copy-user-toml"])

        assert result.exit_code == 1
        assert "package_name" in result.output

    def test_render_missing_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["render", "install", "-c", str(tmp_path / "missing.toml")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_render_unknown_script(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["render", "bogus"])
        assert result.exit_code == 2

    def test_render_unexpected_error_is_logged(self, runner: CliRunner, config_path: Path) -> None:
        with patch("habkit.cli.render_cmds.HabitatProvisioner", side_effect=RuntimeError("boom")):
            result = runner.invoke(cli, ["render", "install", "-c", str(config_path)])

        assert result.exit_code == 1
        assert "boom" in result.output


class TestIdentCommand:
    """Tests for ``habkit ident``."""

    def test_ident(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(cli, ["ident", "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "example/package/0.1.0/20200406205105" in result.output


class TestPathsCommand:
    """Tests for ``habkit paths``."""

    def test_paths(self, runner: CliRunner, config_file, tmp_path: Path) -> None:
        path = config_file(
            f"""
kitchen_root = "{tmp_path}"
config_directory = "config"
artifact_name = "example-package-0.1.0-20200406205105-x86_64-linux.hart"
results_directory = "/kitchen/results"
"""
        )
        result = runner.invoke(cli, ["paths", "-c", str(path), "--sandbox", str(tmp_path / "sb")])

        assert result.exit_code == 0, result.output
        assert "results_directory: /kitchen/results" in result.output
        assert f"user_toml: {tmp_path}/config/user.toml" in result.output
        assert f"sandbox_user_toml: {tmp_path}/sb/config/user.toml" in result.output
        assert "artifact: /tmp/kitchen/results/example-package" in result.output


# 🔼⚙️🔚
