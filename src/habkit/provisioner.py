#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Habitat provisioner lifecycle commands.

``HabitatProvisioner`` composes the individual script builders into the
commands a test framework runs on an instance: install, init, prepare and
run. It never executes anything; transmission and execution belong to the
framework's transport.

Usage:
    provisioner = HabitatProvisioner(config, sandbox_path=sandbox_dir)
    provisioner.create_sandbox()
    for command in provisioner.commands():
        transport.execute(command)
"""

from __future__ import annotations

from pathlib import Path

from provide.foundation.logger import get_logger

from habkit.config.models import HabitatConfig
from habkit.options import service_options, supervisor_options
from habkit.paths import (
    artifact_to_install,
    copy_user_toml_to_service_directory,
    get_artifact_name,
    package_ident,
    remove_previous_user_toml,
    require_setting,
)
from habkit.sandbox import Sandbox
from habkit.scripts import install_cmd, install_service
from habkit.scripts.service import linux_directory_setup, windows_directory_setup

log = get_logger(__name__)


def wrap_shell_code(code: str, windows: bool = False) -> str:
    """Wrap a POSIX script for ``sh -c``. PowerShell code is returned unchanged."""
    if windows:
        return code
    escaped = code.replace("'", "'\\''")
    return f"sh -c '\n{escaped}'\n"


class HabitatProvisioner:
    """Builds the provisioning commands for one test instance."""

    def __init__(
        self,
        config: HabitatConfig,
        sandbox_path: Path | str | None = None,
        wrap: bool = True,
    ) -> None:
        self.config = config
        self.wrap = wrap
        self.sandbox_path = Path(sandbox_path) if sandbox_path is not None else None
        self._log = log.bind(package=package_ident(config) or None, os_family=config.os_family.value)

    @property
    def windows(self) -> bool:
        return self.config.os_family.is_windows

    def _join(self, *parts: str | None) -> str:
        return "\n".join(part.rstrip("\n") for part in parts if part)

    def _wrap(self, code: str) -> str:
        if not self.wrap:
            return code
        return wrap_shell_code(code, windows=self.windows)

    def create_sandbox(self) -> Sandbox:
        """Stage local files into the framework-provided sandbox directory."""
        if self.sandbox_path is None:
            raise ValueError("HabitatProvisioner was created without a sandbox_path")
        sandbox = Sandbox(self.config, self.sandbox_path)
        sandbox.stage()
        return sandbox

    def export_hab_bldr_url(self) -> str | None:
        if self.config.depot_url is None:
            return None
        if self.windows:
            return f"$env:HAB_BLDR_URL = '{self.config.depot_url}'\n"
        return f"export HAB_BLDR_URL={self.config.depot_url}\n"

    def install_command(self) -> str:
        """Install the hab CLI and register the supervisor as an OS service.

        The service installer resets the remote kitchen root, so it runs here,
        before the sandbox is transferred, and never in ``prepare_command``.
        """
        script = self._join(
            self.export_hab_bldr_url(),
            install_cmd(self.config),
            install_service(self.config),
        )
        return self._wrap(script + "\n")

    def init_command(self) -> str:
        lines = windows_directory_setup() if self.windows else linux_directory_setup()
        return self._wrap("\n".join(lines) + "\n")

    def prepare_command(self) -> str:
        """Place the transferred user.toml in the service config directory."""
        if self.config.package_name is None:
            return ""
        steps = [remove_previous_user_toml(self.config)]
        if self.config.config_directory is not None:
            steps.append(copy_user_toml_to_service_directory(self.config))

        script = self._join(*steps)
        self._log.debug("Rendered prepare command")
        return self._wrap(script + "\n")

    def artifact_install(self) -> str | None:
        """Install step for a locally built artifact, if one is configured."""
        artifact = artifact_to_install(self.config)
        if artifact is None:
            return None
        path = get_artifact_name(self.config, artifact)
        if self.windows:
            return f"hab pkg install {path}\n"
        return f"sudo -E hab pkg install {path}\n"

    def load_command(self) -> str:
        require_setting(self.config.package_name, "package_name")
        ident = package_ident(self.config)
        options = service_options(self.config)
        if self.windows:
            return f"hab svc load {ident}{options} --force\n"
        return f"sudo -E hab svc load {ident}{options} --force\n"

    def run_command(self) -> str:
        script = self._join(
            self.export_hab_bldr_url(),
            self.artifact_install(),
            self.load_command(),
        )
        self._log.debug("Rendered run command")
        return self._wrap(script + "\n")

    def supervisor_options(self) -> str:
        return supervisor_options(self.config)

    def service_options(self) -> str:
        return service_options(self.config)

    def commands(self) -> list[str]:
        """All lifecycle commands in execution order."""
        return [
            self.install_command(),
            self.init_command(),
            self.prepare_command(),
            self.run_command(),
        ]


# 🔼⚙️🔚
