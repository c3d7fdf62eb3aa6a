#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Commands that render provisioning scripts and paths to stdout."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import click
from provide.foundation.cli.decorators import logging_options
from provide.foundation.logger import get_logger
from structlog.typing import FilteringBoundLogger as StructLogger

from habkit.config import HabitatConfig, load_config
from habkit.errors import HabkitError
from habkit.options import service_options, supervisor_options
from habkit.paths import (
    copy_user_toml_to_service_directory,
    full_user_toml_path,
    get_artifact_name,
    package_ident,
    remove_previous_user_toml,
    resolve_results_directory,
    sandbox_user_toml_path,
)
from habkit.platform import OsFamily
from habkit.provisioner import HabitatProvisioner
from habkit.scripts import install_cmd, install_service

log: StructLogger = get_logger(__name__)

SCRIPTS: dict[str, Callable[[HabitatProvisioner], str]] = {
    "install": lambda p: install_cmd(p.config),
    "install-service": lambda p: install_service(p.config),
    "init": lambda p: p.init_command(),
    "prepare": lambda p: p.prepare_command(),
    "run": lambda p: p.run_command(),
    "supervisor-options": lambda p: supervisor_options(p.config) + "\n",
    "service-options": lambda p: service_options(p.config) + "\n",
    "copy-user-toml": lambda p: copy_user_toml_to_service_directory(p.config),
    "remove-user-toml": lambda p: remove_previous_user_toml(p.config),
}

config_path_option = click.option(
    "-c",
    "--config-path",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    envvar="HABKIT_CONF",
    help="Path to the habkit TOML configuration file (env var HABKIT_CONF).",
    show_envvar=True,
)

os_family_option = click.option(
    "--os-family",
    type=click.Choice([family.value for family in OsFamily] + ["linux"], case_sensitive=False),
    default=None,
    help="Override the target OS family from the configuration.",
)


def _load(config_path: Path | None, os_family: str | None) -> HabitatConfig:
    config = load_config(config_path) if config_path is not None else HabitatConfig()
    if os_family is not None:
        config = config.with_overrides(os_family=OsFamily.parse(os_family))
    return config


def _fail(message: str) -> None:
    click.echo(f"❌ Error: {message}", err=True)
    sys.exit(1)


@click.command(name="render")
@click.argument("script", type=click.Choice(sorted(SCRIPTS)))
@config_path_option
@os_family_option
@click.option(
    "--sandbox",
    "sandbox_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Sandbox directory used to locate the latest artifact.",
)
@click.option("--wrap/--no-wrap", default=True, help="Wrap POSIX lifecycle commands in sh -c.")
@logging_options
@click.pass_context
def render(
    ctx: click.Context,
    script: str,
    config_path: Path | None,
    os_family: str | None,
    sandbox_path: Path | None,
    wrap: bool,
    **kwargs,
):
    """Render a provisioning script to stdout.

    SCRIPT: Which script to render

    Example:
        habkit render install --os-family windows
    """
    try:
        config = _load(config_path, os_family)
        provisioner = HabitatProvisioner(config, sandbox_path=sandbox_path, wrap=wrap)
        output = SCRIPTS[script](provisioner)
    except HabkitError as e:
        _fail(str(e))
        return
    except Exception as e:
        log.exception("Failed to render script", script=script)
        _fail(str(e))
        return

    log.debug("Rendered script", script=script, os_family=config.os_family.value)
    click.echo(output, nl=False)


@click.command(name="ident")
@config_path_option
@logging_options
@click.pass_context
def ident(ctx: click.Context, config_path: Path | None, **kwargs):
    """Print the package identity (origin/name/version/release)."""
    try:
        config = _load(config_path, None)
    except HabkitError as e:
        _fail(str(e))
        return
    click.echo(package_ident(config))


@click.command(name="paths")
@config_path_option
@os_family_option
@click.option(
    "--sandbox",
    "sandbox_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Sandbox directory to resolve the staged user.toml path against.",
)
@logging_options
@click.pass_context
def paths(
    ctx: click.Context,
    config_path: Path | None,
    os_family: str | None,
    sandbox_path: Path | None,
    **kwargs,
):
    """Show the resolved local and remote paths."""
    try:
        config = _load(config_path, os_family)
        click.echo(f"results_directory: {resolve_results_directory(config)}")
        if config.config_directory is not None:
            click.echo(f"user_toml: {full_user_toml_path(config)}")
        if sandbox_path is not None:
            click.echo(f"sandbox_user_toml: {sandbox_user_toml_path(config, str(sandbox_path))}")
        if config.artifact_name is not None:
            click.echo(f"artifact: {get_artifact_name(config)}")
    except HabkitError as e:
        _fail(str(e))


# 🔼⚙️🔚
