# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from clearly_defined.cli.command import ClearlyDefinedCommand
from clearly_defined.cli.command.validate.config import ValidateConfigCommand


class ValidateCommand(ClearlyDefinedCommand):
    """Check input files without contacting the service.

    validate
    """

    commands = [ValidateConfigCommand()]

    def handle(self):
        self.call("help", "validate")
