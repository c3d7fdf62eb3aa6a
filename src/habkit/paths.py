#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""OS-aware path resolution and user.toml placement scripts.

Everything here is string formatting except ``resolve_results_directory`` and
``latest_artifact_name``, which probe the local filesystem for build output.
"""

from __future__ import annotations

from pathlib import Path

from provide.foundation.logger import get_logger

from habkit.config.models import HabitatConfig
from habkit.errors import ConfigurationError

log = get_logger(__name__)

DEFAULT_RESULTS_DIRECTORY = "results"
RESULTS_SEARCH_PATHS = ("results", "../results", "../../results")
SANDBOX_USER_TOML = "user.toml"
UNIX_HAB_ROOT = "/hab"
WINDOWS_HAB_ROOT = "c:\\hab"


def package_ident(config: HabitatConfig) -> str:
    """``origin/name/version/release``, skipping unset parts."""
    parts = (
        config.package_origin,
        config.package_name,
        config.package_version,
        config.package_release,
    )
    return "/".join(part for part in parts if part)


def resolve_results_directory(config: HabitatConfig) -> str:
    """Locate the local directory holding built ``.hart`` artifacts.

    An explicit ``results_directory`` wins. Otherwise the first existing
    ``results`` directory at, above, or two above the kitchen root is used,
    falling back to the relative default.
    """
    if config.results_directory is not None:
        return config.results_directory

    for candidate in RESULTS_SEARCH_PATHS:
        path = f"{config.kitchen_root}/{candidate}"
        if Path(path).is_dir():
            log.debug("Found results directory", path=path)
            return path

    log.debug("No results directory found", kitchen_root=config.kitchen_root)
    return DEFAULT_RESULTS_DIRECTORY


def latest_artifact_name(config: HabitatConfig) -> str | None:
    """Name of the most recently modified ``.hart`` for the configured package.

    An unset ``package_origin`` matches any origin.
    """
    name = require_setting(config.package_name, "package_name")
    results_dir = Path(resolve_results_directory(config))
    if not results_dir.is_dir():
        return None
    pattern = f"{config.package_origin or '*'}-{name}-*.hart"
    candidates = list(results_dir.glob(pattern))
    if not candidates:
        log.debug("No artifacts found", results_dir=str(results_dir), pattern=pattern)
        return None
    return max(candidates, key=lambda p: p.stat().st_mtime).name


def artifact_to_install(config: HabitatConfig) -> str | None:
    """Artifact the run step installs: the newest build or the configured name."""
    if config.install_latest_artifact:
        return latest_artifact_name(config)
    return config.artifact_name


def full_user_toml_path(config: HabitatConfig) -> str:
    """Local path of the user.toml under the kitchen root."""
    return config.os_family.join(
        config.kitchen_root,
        require_setting(config.config_directory, "config_directory"),
        config.user_toml_name,
    )


def sandbox_user_toml_path(config: HabitatConfig, sandbox_path: str) -> str:
    """Path the user.toml is staged to inside the sandbox."""
    return config.os_family.join(str(sandbox_path), "config", SANDBOX_USER_TOML)


def get_artifact_name(config: HabitatConfig, artifact_name: str | None = None) -> str:
    """Remote path of the staged artifact."""
    name = require_setting(artifact_name or config.artifact_name, "artifact_name")
    return f"{config.os_family.root_path}/results/{name}"


def remote_user_toml_path(config: HabitatConfig) -> str:
    """Where the staged user.toml sits on the target after transfer."""
    return f"{config.os_family.root_path}/config/{SANDBOX_USER_TOML}"


def service_config_directory(config: HabitatConfig) -> str:
    """Supervisor's per-service user config directory on the target."""
    name = require_setting(config.package_name, "package_name")
    if config.os_family.is_windows:
        return f"{WINDOWS_HAB_ROOT}\\user\\{name}\\config"
    return f"{UNIX_HAB_ROOT}/user/{name}/config"


def service_user_toml_path(config: HabitatConfig) -> str:
    return config.os_family.join(service_config_directory(config), SANDBOX_USER_TOML)


def copy_user_toml_to_service_directory(config: HabitatConfig) -> str:
    """Script that copies the staged user.toml into the service config dir."""
    directory = service_config_directory(config)
    source = remote_user_toml_path(config)
    destination = service_user_toml_path(config)
    if config.os_family.is_windows:
        lines = [
            f"New-Item -Path {directory} -ItemType Directory -Force  | Out-Null",
            f"Copy-Item -Path {source} -Destination {destination} -Force",
        ]
    else:
        lines = [
            f"sudo -E mkdir -p {directory}",
            f"sudo -E cp {source} {destination}",
        ]
    return "\n".join(lines) + "\n"


def remove_previous_user_toml(config: HabitatConfig) -> str:
    """Script that deletes a user.toml left behind by an earlier converge."""
    directory = service_config_directory(config)
    if config.os_family.is_windows:
        destination = service_user_toml_path(config)
        lines = [
            f"if (Test-Path {destination}) {{",
            f"  Remove-Item -Path {destination} -Force",
            "}",
        ]
    else:
        lines = [
            f'if [ -d "{directory}" ]; then',
            f"  sudo -E find {directory} -name {SANDBOX_USER_TOML} -delete",
            "fi",
        ]
    return "\n".join(lines) + "\n"


def require_setting(value: str | None, key: str) -> str:
    """Return ``value``, raising ``ConfigurationError`` when it is unset or empty."""
    if not value:
        raise ConfigurationError(f"Configuration key '{key}' is required for this operation", key=key)
    return value


# 🔼⚙️🔚
