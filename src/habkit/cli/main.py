#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Main CLI entry point for habkit."""

from __future__ import annotations

import click

from habkit import __version__
from habkit.cli.render_cmds import ident, paths, render


@click.group(name="habkit")
@click.version_option(__version__, prog_name="habkit")
def cli():
    """Render Habitat provisioning scripts for test instances."""


cli.add_command(render)
cli.add_command(ident)
cli.add_command(paths)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

# 🔼⚙️🔚
