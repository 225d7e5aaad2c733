# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from clearly_defined.cli.command import ClearlyDefinedCommand, parse_coordinate
from clearly_defined.errors import ParserError
from clearly_defined.model.coordinate import NO_NAMESPACE, Coordinate


def describe_coordinate(coordinate: Coordinate) -> list[str]:
    revision = coordinate.revision
    if revision is None:
        revision_desc = "<latest>"
    elif revision.is_semver():
        revision_desc = f"{revision} (semver)"
    else:
        revision_desc = str(revision)
    lines = [
        f"<info>{coordinate}</info>",
        f"    shape:     {coordinate.shape}",
        f"    provider:  {coordinate.provider}",
        f"    namespace: {coordinate.namespace or NO_NAMESPACE}",
        f"    name:      {coordinate.name}",
        f"    revision:  {revision_desc}",
    ]
    if coordinate.curation_pr is not None:
        lines.append(f"    curation PR: {coordinate.curation_pr}")
    return lines


class ParseCommand(ClearlyDefinedCommand):
    """Parses coordinates and prints their parts. Non-zero return codes indicate an error.

    parse
        {coordinate* : Coordinates (e.g. npm/npmjs/-/lodash/4.17.21) or ClearlyDefined URLs}
    """

    def handle(self):
        failures = 0
        for value in self.argument("coordinate"):
            try:
                coordinate = parse_coordinate(value)
            except ParserError as err:
                self.line_error(f"<error>{err}</error>")
                failures = failures + 1
                continue
            for line in describe_coordinate(coordinate):
                self.line(line)

        return 1 if failures > 0 else 0
