#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Staging of local artifacts and settings into the provisioner sandbox.

The sandbox directory itself is created and removed by the test framework.
This module only copies files into it so they are transferred to the target
alongside the generated scripts.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from provide.foundation.logger import get_logger

from habkit.config.models import HabitatConfig
from habkit.paths import (
    SANDBOX_USER_TOML,
    artifact_to_install,
    latest_artifact_name,
    resolve_results_directory,
)

log = get_logger(__name__)


class Sandbox:
    """Copies results, user.toml and package config overrides into a sandbox."""

    def __init__(self, config: HabitatConfig, path: Path | str) -> None:
        self.config = config
        self.path = Path(path)
        self._log = log.bind(sandbox=str(self.path))

    @property
    def results_path(self) -> Path:
        return self.path / "results"

    @property
    def config_path(self) -> Path:
        return self.path / "config"

    def _local_config_directory(self) -> Path | None:
        if self.config.config_directory is None:
            return None
        return Path(self.config.kitchen_root) / self.config.config_directory

    def latest_artifact_name(self) -> str | None:
        """Name of the most recently modified artifact for the configured package."""
        return latest_artifact_name(self.config)

    def artifact_to_stage(self) -> str | None:
        return artifact_to_install(self.config)

    def copy_results_to_sandbox(self) -> Path | None:
        """Copy the artifact to install into ``<sandbox>/results``."""
        artifact = self.artifact_to_stage()
        if artifact is None:
            return None

        source = Path(resolve_results_directory(self.config)) / artifact
        if not source.is_file():
            self._log.warning("Artifact not found, skipping copy", source=str(source))
            return None

        self.results_path.mkdir(parents=True, exist_ok=True)
        destination = self.results_path / artifact
        # A previous stage may already have placed the artifact here
        if source.resolve() != destination.resolve():
            shutil.copy2(source, destination)
        self._log.debug("Copied artifact to sandbox", source=str(source), destination=str(destination))
        return destination

    def copy_user_toml_to_sandbox(self) -> Path | None:
        """Copy the local user.toml to ``<sandbox>/config/user.toml``."""
        local_dir = self._local_config_directory()
        if local_dir is None:
            return None

        source = local_dir / self.config.user_toml_name
        if not source.is_file():
            self._log.debug("No user.toml to stage", source=str(source))
            return None

        self.config_path.mkdir(parents=True, exist_ok=True)
        destination = self.config_path / SANDBOX_USER_TOML
        shutil.copyfile(source, destination)
        self._log.debug("Copied user.toml to sandbox", source=str(source), destination=str(destination))
        return destination

    def copy_package_config_from_override_to_sandbox(self) -> Path | None:
        """Copy the package config override tree to ``<sandbox>/config``."""
        if not self.config.override_package_config:
            return None

        local_dir = self._local_config_directory()
        if local_dir is None or not local_dir.is_dir():
            self.config_path.mkdir(parents=True, exist_ok=True)
            return self.config_path

        shutil.copytree(local_dir, self.config_path, dirs_exist_ok=True)
        self._log.debug(
            "Copied package config override to sandbox",
            source=str(local_dir),
            destination=str(self.config_path),
        )
        return self.config_path

    def stage(self) -> None:
        """Run every copy step."""
        self.path.mkdir(parents=True, exist_ok=True)
        self.copy_results_to_sandbox()
        self.copy_user_toml_to_sandbox()
        self.copy_package_config_from_override_to_sandbox()
        self._log.info("Sandbox staged")


# 🔼⚙️🔚
