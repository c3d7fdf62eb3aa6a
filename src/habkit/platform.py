#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Operating system families the generated scripts target."""

from __future__ import annotations

from enum import Enum

from habkit.errors import ConfigurationError

# Remote locations the sandbox is transferred to
UNIX_ROOT_PATH = "/tmp/kitchen"
WINDOWS_ROOT_PATH = "$env:TEMP\\kitchen"


class OsFamily(Enum):
    """Target operating system family."""

    UNIX = "unix"
    WINDOWS = "windows"

    @classmethod
    def parse(cls, value: OsFamily | str | None) -> OsFamily:
        """Parse an os_type string as reported by a platform.

        Anything other than ``windows`` is treated as a Unix-like family, which
        matches how platforms report ``linux``, ``unix`` or ``darwin``.
        """
        if isinstance(value, OsFamily):
            return value
        if value is None:
            return cls.UNIX
        if not isinstance(value, str):
            raise ConfigurationError(f"Invalid os_family: {value!r}", key="os_family")
        normalized = value.strip().lower()
        if normalized == "windows":
            return cls.WINDOWS
        if normalized in ("", "unix", "linux", "darwin", "macos", "freebsd"):
            return cls.UNIX
        raise ConfigurationError(f"Unknown os_family '{value}'", key="os_family")

    @property
    def is_windows(self) -> bool:
        return self is OsFamily.WINDOWS

    @property
    def separator(self) -> str:
        """Path separator used when joining local paths for this family."""
        return "\\" if self.is_windows else "/"

    @property
    def root_path(self) -> str:
        """Remote directory the sandbox contents land in."""
        return WINDOWS_ROOT_PATH if self.is_windows else UNIX_ROOT_PATH

    def join(self, *parts: str) -> str:
        return self.separator.join(parts)


# 🔼⚙️🔚
