#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Translation of provisioner settings into supervisor command-line flags.

Every flag is an independent entry in an ordered table. A set key contributes
a fragment that begins with a single space, an unset key contributes nothing.
Sequence keys produce one fragment per item joined with a space, so repeated
flags are separated by exactly two spaces (``--bind a  --bind b``). Consumers
depend on that spacing.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Flag, auto

from attrs import define
from provide.foundation.logger import get_logger

from habkit.config.models import HabitatConfig

log = get_logger(__name__)


class FlagContext(Flag):
    """Commands a flag applies to."""

    SUPERVISOR = auto()
    SERVICE = auto()
    BOTH = SUPERVISOR | SERVICE


@define(frozen=True)
class FlagSpec:
    """One row of the flag table."""

    key: str
    render: Callable[[HabitatConfig], str]
    contexts: FlagContext


def _single(key: str, flag: str) -> Callable[[HabitatConfig], str]:
    def render(config: HabitatConfig) -> str:
        value = getattr(config, key)
        return "" if value is None else f" --{flag} {value}"

    return render


def _repeated(key: str, flag: str) -> Callable[[HabitatConfig], str]:
    def render(config: HabitatConfig) -> str:
        return " ".join(f" --{flag} {item}" for item in getattr(config, key))

    return render


def config_from_directory(config: HabitatConfig) -> str:
    """Remote directory holding the package config override, with trailing slash."""
    return f"{config.os_family.root_path}/config/"


def _config_from(config: HabitatConfig) -> str:
    if not config.override_package_config:
        return ""
    return f" --config-from {config_from_directory(config)}"


FLAG_TABLE: tuple[FlagSpec, ...] = (
    FlagSpec("hab_sup_listen_ctl", _single("hab_sup_listen_ctl", "listen-ctl"), FlagContext.SUPERVISOR),
    FlagSpec("hab_sup_listen_gossip", _single("hab_sup_listen_gossip", "listen-gossip"), FlagContext.SUPERVISOR),
    FlagSpec("override_package_config", _config_from, FlagContext.SUPERVISOR),
    FlagSpec("hab_sup_bind", _repeated("hab_sup_bind", "bind"), FlagContext.BOTH),
    FlagSpec("hab_sup_peer", _repeated("hab_sup_peer", "peer"), FlagContext.SUPERVISOR),
    FlagSpec("hab_sup_group", _single("hab_sup_group", "group"), FlagContext.BOTH),
    FlagSpec("hab_sup_ring", _single("hab_sup_ring", "ring"), FlagContext.SUPERVISOR),
    FlagSpec("service_topology", _single("service_topology", "topology"), FlagContext.BOTH),
    FlagSpec("service_update_strategy", _single("service_update_strategy", "strategy"), FlagContext.BOTH),
    FlagSpec("channel", _single("channel", "channel"), FlagContext.BOTH),
    FlagSpec(
        "event_stream_application",
        _single("event_stream_application", "event-stream-application"),
        FlagContext.SUPERVISOR,
    ),
    FlagSpec(
        "event_stream_environment",
        _single("event_stream_environment", "event-stream-environment"),
        FlagContext.SUPERVISOR,
    ),
    FlagSpec("event_stream_site", _single("event_stream_site", "event-stream-site"), FlagContext.SUPERVISOR),
    FlagSpec("event_stream_url", _single("event_stream_url", "event-stream-url"), FlagContext.SUPERVISOR),
    FlagSpec("event_stream_token", _single("event_stream_token", "event-stream-token"), FlagContext.SUPERVISOR),
)


def render_options(config: HabitatConfig, context: FlagContext) -> str:
    """Concatenate the fragments of every flag that applies to ``context``."""
    fragments = [spec.render(config) for spec in FLAG_TABLE if context in spec.contexts]
    options = "".join(fragments)
    log.debug("Rendered options", context=context.name, options=options)
    return options


def supervisor_options(config: HabitatConfig) -> str:
    """Flags for ``hab sup run``."""
    return render_options(config, FlagContext.SUPERVISOR)


def service_options(config: HabitatConfig) -> str:
    """Flags for ``hab svc load``."""
    return render_options(config, FlagContext.SERVICE)


# 🔼⚙️🔚
