#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration model and loading for the Habitat provisioner.

A ``HabitatConfig`` is an immutable value. Every script generator receives it
explicitly, so no generator depends on shared mutable state or call order.

Usage:
    config = HabitatConfig.from_mapping(
        {"package_origin": "core", "package_name": "nginx", "channel": "stable"}
    )
    config = load_config(Path("habkit.toml"))
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from attrs import define, evolve, field, fields
from attrs.validators import instance_of, optional
from provide.foundation.logger import get_logger

from habkit.errors import ConfigurationError
from habkit.platform import OsFamily

log = get_logger(__name__)

DEFAULT_USER_TOML_NAME = "user.toml"
FALSEY_STRINGS = frozenset({"", "0", "false", "no", "off"})


def _to_bool(value: Any) -> bool:
    """Convert config input to a bool, treating common falsey strings as False."""
    if isinstance(value, str):
        return value.strip().lower() not in FALSEY_STRINGS
    return bool(value)


def _to_tuple(value: Any) -> tuple[str, ...]:
    """Normalize a string or sequence of strings to a tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        items = tuple(value)
        for item in items:
            if not isinstance(item, str):
                raise ConfigurationError(f"Expected a sequence of strings, got item {item!r}")
        return items
    raise ConfigurationError(f"Expected a string or a sequence of strings, got {value!r}")


_opt_str = optional(instance_of(str))


@define(frozen=True, kw_only=True)
class HabitatConfig:
    """Settings that drive script generation. Every key is optional."""

    # Habitat install
    hab_version: str | None = field(default=None, validator=_opt_str)
    hab_channel: str | None = field(default=None, validator=_opt_str)
    hab_license: str | None = field(default=None, validator=_opt_str)
    depot_url: str | None = field(default=None, validator=_opt_str)

    # Supervisor
    hab_sup_listen_ctl: str | None = field(default=None, validator=_opt_str)
    hab_sup_listen_gossip: str | None = field(default=None, validator=_opt_str)
    hab_sup_bind: tuple[str, ...] = field(factory=tuple, converter=_to_tuple)
    hab_sup_peer: tuple[str, ...] = field(factory=tuple, converter=_to_tuple)
    hab_sup_group: str | None = field(default=None, validator=_opt_str)
    hab_sup_ring: str | None = field(default=None, validator=_opt_str)

    # Service
    service_topology: str | None = field(default=None, validator=_opt_str)
    service_update_strategy: str | None = field(default=None, validator=_opt_str)
    channel: str | None = field(default=None, validator=_opt_str)

    # Event stream
    event_stream_application: str | None = field(default=None, validator=_opt_str)
    event_stream_environment: str | None = field(default=None, validator=_opt_str)
    event_stream_site: str | None = field(default=None, validator=_opt_str)
    event_stream_url: str | None = field(default=None, validator=_opt_str)
    event_stream_token: str | None = field(default=None, validator=_opt_str)

    # Package identity
    package_origin: str | None = field(default=None, validator=_opt_str)
    package_name: str | None = field(default=None, validator=_opt_str)
    package_version: str | None = field(default=None, validator=_opt_str)
    package_release: str | None = field(default=None, validator=_opt_str)
    artifact_name: str | None = field(default=None, validator=_opt_str)
    install_latest_artifact: bool = field(default=False, converter=_to_bool)

    # Local directories
    results_directory: str | None = field(default=None, validator=_opt_str)
    config_directory: str | None = field(default=None, validator=_opt_str)
    user_toml_name: str = field(default=DEFAULT_USER_TOML_NAME, validator=instance_of(str))
    override_package_config: bool = field(default=False, converter=_to_bool)
    kitchen_root: str = field(default=".", converter=str)

    os_family: OsFamily = field(default=OsFamily.UNIX, converter=OsFamily.parse)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(a.name for a in fields(cls))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> HabitatConfig:
        """Build a config from a plain mapping, rejecting unknown keys.

        A full package ident given as ``package_name`` (``origin/name/version/release``)
        is split into its component fields.
        """
        known = cls.field_names()
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}", key=unknown[0])

        values = {key: value for key, value in mapping.items() if value is not None}
        values.update(_split_ident(values.get("package_name")))

        try:
            config = cls(**values)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        log.debug(
            "Configuration built",
            keys=sorted(values),
            os_family=config.os_family.value,
        )
        return config

    def with_overrides(self, **changes: Any) -> HabitatConfig:
        """Return a copy with the given fields replaced."""
        return evolve(self, **changes)


def _split_ident(package_name: Any) -> dict[str, str]:
    if not isinstance(package_name, str) or "/" not in package_name:
        return {}
    parts = package_name.split("/")
    if len(parts) > 4 or not all(parts):
        raise ConfigurationError(f"Malformed package ident '{package_name}'", key="package_name")
    keys = ("package_origin", "package_name", "package_version", "package_release")
    return dict(zip(keys, parts, strict=False))


def load_config(config_path: Path) -> HabitatConfig:
    """Load a ``HabitatConfig`` from a TOML file.

    Keys may sit at the top level or inside a ``[provisioner]`` table.
    """
    log.debug("Loading configuration", path=str(config_path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    table = data.get("provisioner", data)
    if not isinstance(table, dict):
        raise ConfigurationError("[provisioner] must be a table", key="provisioner")

    config = HabitatConfig.from_mapping(table)
    log.debug("Configuration loaded", path=str(config_path), package_name=config.package_name)
    return config


# 🔼⚙️🔚
