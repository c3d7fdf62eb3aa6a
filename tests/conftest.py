#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures for habkit tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from habkit.config import HabitatConfig
from habkit.platform import OsFamily


@pytest.fixture
def make_config() -> Callable[..., HabitatConfig]:
    """Factory building a HabitatConfig from keyword settings."""

    def _make(**settings: Any) -> HabitatConfig:
        return HabitatConfig.from_mapping(settings)

    return _make


@pytest.fixture
def linux_config() -> HabitatConfig:
    return HabitatConfig(os_family=OsFamily.UNIX, package_name="package")


@pytest.fixture
def windows_config() -> HabitatConfig:
    return HabitatConfig(os_family=OsFamily.WINDOWS, package_name="package")


@pytest.fixture
def kitchen_root(tmp_path: Path) -> Path:
    """An empty kitchen root directory."""
    root = tmp_path / "kroot"
    root.mkdir()
    return root


@pytest.fixture
def sandbox_dir(tmp_path: Path) -> Path:
    """A sandbox directory as created by the test framework."""
    sandbox = tmp_path / "sandbox"
    sandbox.mkdir()
    return sandbox


@pytest.fixture
def config_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write TOML content to a config file and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "habkit.toml"
        path.write_text(content)
        return path

    return _write


# 🔼⚙️🔚
