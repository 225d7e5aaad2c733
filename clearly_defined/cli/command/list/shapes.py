# SPDX-FileCopyrightText: 2021 Andre Lehmann <aisberg@posteo.de>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from clearly_defined.cli.command import ClearlyDefinedCommand
from clearly_defined.model.shape import Shape


class ListShapesCommand(ClearlyDefinedCommand):
    """List known shapes (the "type" segment of a coordinate).

    shapes
    """

    def handle(self):
        for shape in Shape:
            self.line(str(shape))
