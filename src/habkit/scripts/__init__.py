#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Script generators for installing Habitat and its supervisor service."""

from habkit.scripts.install import install_cmd, linux_install_cmd, windows_install_cmd
from habkit.scripts.service import install_service, linux_install_service, windows_install_service

__all__ = [
    "install_cmd",
    "install_service",
    "linux_install_cmd",
    "linux_install_service",
    "windows_install_cmd",
    "windows_install_service",
]

# 🔼⚙️🔚
