#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Scripts that install the hab CLI when it is not already present."""

from __future__ import annotations

from provide.foundation.logger import get_logger

from habkit.config.models import HabitatConfig

log = get_logger(__name__)

INSTALL_SH_URL = "https://raw.githubusercontent.com/habitat-sh/habitat/master/components/hab/install.sh"
INSTALL_PS1_URL = "https://raw.githubusercontent.com/habitat-sh/habitat/master/components/hab/install.ps1"


def linux_install_cmd(config: HabitatConfig) -> str:
    """POSIX script that downloads and runs install.sh if ``hab`` is missing.

    ``-c`` and ``-v`` are only passed when a channel or version is configured.
    """
    install = "sudo -E bash /tmp/install.sh"
    if config.hab_channel is not None:
        install += f" -c {config.hab_channel}"
    if config.hab_version is not None:
        install += f" -v {config.hab_version}"

    lines = [
        "if command -v hab >/dev/null 2>&1",
        "then",
        '  echo "Habitat CLI already installed."',
        "else",
        f"  curl -o /tmp/install.sh '{INSTALL_SH_URL}'",
        f"  {install}",
        "fi",
    ]
    return "\n".join(lines) + "\n"


def windows_install_cmd(config: HabitatConfig) -> str:
    """PowerShell script that runs install.ps1 if ``hab`` is missing.

    The downloaded script takes channel and version positionally, so both are
    always passed. An unset value is substituted as an empty token.
    """
    channel = config.hab_channel or ""
    version = config.hab_version or ""
    lines = [
        "if ((Get-Command hab -ErrorAction Ignore).Path) {",
        '  Write-Output "Habitat CLI already installed."',
        "} else {",
        "  Set-ExecutionPolicy Bypass -Scope Process -Force",
        f"  $InstallScript = ((New-Object System.Net.WebClient).DownloadString('{INSTALL_PS1_URL}'))",
        "  Invoke-Command -ScriptBlock ([scriptblock]::Create($InstallScript)) "
        f"-ArgumentList {channel}, {version}",
        "}",
    ]
    return "\n".join(lines) + "\n"


def install_cmd(config: HabitatConfig) -> str:
    """Installer script for the configured OS family."""
    log.debug("Rendering install command", os_family=config.os_family.value)
    if config.os_family.is_windows:
        return windows_install_cmd(config)
    return linux_install_cmd(config)


# 🔼⚙️🔚
