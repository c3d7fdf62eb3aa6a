#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Scripts that install the Habitat supervisor as a managed OS service.

Both scripts are idempotent on the target. The systemd variant checks for the
unit file path only and never diffs its contents; the Windows variant checks
whether the ``Habitat`` service is registered.
"""

from __future__ import annotations

from provide.foundation.logger import get_logger

from habkit.config.models import HabitatConfig
from habkit.options import supervisor_options
from habkit.platform import UNIX_ROOT_PATH

log = get_logger(__name__)

SYSTEMD_UNIT_PATH = "/etc/systemd/system/hab-sup.service"
WINDOWS_KITCHEN_PATH = "C:\\Windows\\Temp\\kitchen"
WINDOWS_HAB_PATH = "C:\\ProgramData\\Habitat"
WINDOWS_SERVICE_CONFIG = "c:\\hab\\svc\\windows-service\\HabService.dll.config"


def linux_directory_setup() -> list[str]:
    """Lines that ensure the hab user exists and reset the remote kitchen root."""
    return [
        "id -u hab >/dev/null 2>&1 || sudo -E useradd hab >/dev/null 2>&1",
        f"rm -rf {UNIX_ROOT_PATH}",
        f"mkdir -p {UNIX_ROOT_PATH}/results",
        f"mkdir -p {UNIX_ROOT_PATH}/config",
    ]


def windows_directory_setup() -> list[str]:
    return [
        f"New-Item -Path {WINDOWS_KITCHEN_PATH} -ItemType Directory -Force | Out-Null",
        f"New-Item -Path {WINDOWS_KITCHEN_PATH}\\config -ItemType Directory -Force | Out-Null",
    ]


def systemd_unit_lines(config: HabitatConfig) -> list[str]:
    """Unit file contents, one line per entry, as echoed into ``tee``."""
    lines = [
        "[Unit]",
        "Description=The Chef Habitat Supervisor",
        "[Service]",
    ]
    if config.depot_url is not None:
        lines.append(f'Environment="HAB_BLDR_URL={config.depot_url}"')
    if config.hab_license is not None:
        lines.append(f'Environment="HAB_LICENSE={config.hab_license}"')
    lines.extend(
        [
            f'"ExecStart=/bin/hab sup run {supervisor_options(config)}"',
            "[Install]",
            "WantedBy=default.target",
        ]
    )
    return lines


def linux_install_service(config: HabitatConfig) -> str:
    """POSIX script that installs and starts the ``hab-sup`` systemd unit."""
    unit_lines = systemd_unit_lines(config)
    tee_lines = [f"  echo {unit_lines[0]} | sudo tee {SYSTEMD_UNIT_PATH}"]
    tee_lines.extend(f"  echo {line} | sudo tee -a {SYSTEMD_UNIT_PATH}" for line in unit_lines[1:])

    lines = [
        *linux_directory_setup(),
        f"if [ -f {SYSTEMD_UNIT_PATH} ]",
        "then",
        '  echo "Hab-sup service already exists"',
        "else",
        '  echo "Starting hab-sup service install"',
        "  hab license accept",
        "  if ! id -u hab > /dev/null 2>&1; then",
        '    echo "Adding hab user"',
        "    sudo -E groupadd hab",
        "  fi",
        "  if ! id -g hab > /dev/null 2>&1; then",
        '    echo "Adding hab group"',
        "    sudo -E useradd -g hab hab",
        "  fi",
        *tee_lines,
        "  sudo -E systemctl daemon-reload",
        "  sudo -E systemctl start hab-sup",
        "  sudo -E systemctl enable hab-sup",
        "fi",
    ]
    return "\n".join(lines) + "\n"


def launcher_args(config: HabitatConfig) -> str:
    """Value written to the ``launcherArgs`` app setting of the Windows service.

    The channel is substituted verbatim, so an unset channel leaves ``--channel``
    with an empty value.
    """
    return f"--no-color --channel {config.channel or ''}"


def windows_install_service(config: HabitatConfig) -> str:
    """PowerShell script that installs and starts the Habitat Windows service."""
    lines = [
        *windows_directory_setup(),
        'if (!($env:Path | Select-String "Habitat")) {',
        f'  $env:Path += ";{WINDOWS_HAB_PATH}"',
        "}",
        "if (!(Get-Service -Name Habitat -ErrorAction Ignore)) {",
        "  hab license accept",
        '  Write-Output "Installing Habitat Windows Service"',
        "  hab pkg install core/windows-service",
        '  if ($(Get-Service -Name Habitat).Status -ne "Stopped") {',
        "    Stop-Service -Name Habitat",
        "  }",
        f'  $HabSvcConfig = "{WINDOWS_SERVICE_CONFIG}"',
        "  [xml]$xmlDoc = Get-Content $HabSvcConfig",
        '  $obj = $xmlDoc.configuration.appSettings.add | where {$_.Key -eq "launcherArgs" }',
        f'  $obj.value = "{launcher_args(config)}"',
        "  $xmlDoc.Save($HabSvcConfig)",
        "  Start-Service -Name Habitat",
        "}",
    ]
    return "\n".join(lines) + "\n"


def install_service(config: HabitatConfig) -> str:
    """Service install script for the configured OS family."""
    log.debug("Rendering service install", os_family=config.os_family.value)
    if config.os_family.is_windows:
        return windows_install_service(config)
    return linux_install_service(config)


# 🔼⚙️🔚
