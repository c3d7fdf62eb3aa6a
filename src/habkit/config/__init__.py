#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration module for habkit.

Re-exports the configuration model and loading function."""

from __future__ import annotations

from habkit.config.models import (
    DEFAULT_USER_TOML_NAME,
    HabitatConfig,
    load_config,
)
from habkit.errors import ConfigurationError

__all__ = [
    "DEFAULT_USER_TOML_NAME",
    "ConfigurationError",
    "HabitatConfig",
    "load_config",
]

# 🔼⚙️🔚
