# SPDX-FileCopyrightText: 2021 Andre Lehmann <aisberg@posteo.de>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from clearly_defined.cli.command import ClearlyDefinedCommand
from clearly_defined.model.shape import Provider


class ListProvidersCommand(ClearlyDefinedCommand):
    """List known providers.

    providers
    """

    def handle(self):
        for provider in Provider:
            self.line(str(provider))
