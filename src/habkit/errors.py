#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Exception hierarchy for habkit."""

from __future__ import annotations


class HabkitError(Exception):
    """Base exception for habkit errors."""


class ConfigurationError(HabkitError):
    """Raised when provisioner configuration is invalid or incomplete."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)


# 🔼⚙️🔚
