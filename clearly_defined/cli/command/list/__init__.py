# SPDX-FileCopyrightText: 2021 - 2022 Andre Lehmann <aisberg@posteo.de>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from clearly_defined.cli.command import ClearlyDefinedCommand
from clearly_defined.cli.command.list.providers import ListProvidersCommand
from clearly_defined.cli.command.list.shapes import ListShapesCommand


class ListCommand(ClearlyDefinedCommand):
    """List the known values of coordinate segments.

    list
    """

    commands = [
        ListShapesCommand(),
        ListProvidersCommand(),
    ]

    def handle(self):
        self.call("help", "list")
