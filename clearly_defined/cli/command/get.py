# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from pathlib import Path

from clikit.api.args.format import Option

from clearly_defined.cli.command import ClearlyDefinedCommand, parse_coordinates
from clearly_defined.client import Client
from clearly_defined.config import effective_config_info
from clearly_defined.errors import ConfigError, DeserializerError, FetcherError, ParserError
from clearly_defined.log import get_child_logger
from clearly_defined.model.definition import Definition
from clearly_defined.reporter import Reporter, Status
from clearly_defined.reporter.dummy import DummyReporter
from clearly_defined.reporter.file import FileReporter

log = get_child_logger("get")

NO_ASSERTION = "NOASSERTION"


def describe_definition(definition: Definition) -> list[str]:
    """Renders the license information of a definition as console lines."""
    declared = definition.declared_license() or NO_ASSERTION
    if not definition.is_harvested():
        return [f"<comment>{definition.coordinates}</comment>: {declared} (not harvested)"]
    lines = [f"<info>{definition.coordinates}</info>: {declared}"]
    if definition.licensed is not None:
        expressions = definition.licensed.facets.core.discovered.expressions
        if expressions:
            lines.append(f"    discovered: {', '.join(expressions)}")
    return lines


class GetCommand(ClearlyDefinedCommand):
    """Fetches the definitions of components and prints their licenses.

    get
        {coordinate* : Coordinates (e.g. crate/cratesio/-/syn/1.0.14) or ClearlyDefined URLs}
    """

    def __init__(self):
        super().__init__()
        self._config.add_option(
            long_name="report",
            flags=Option.REQUIRED_VALUE,
            description="Path of reporting file",
        )
        # add options from config schema
        self._add_options_from_schema(schema=self._load_config_schema())

    def handle(self):
        report_path = Path(self.option("report")) if self.option("report") else None

        # parse all coordinates before sending anything
        try:
            coordinates = parse_coordinates(self.argument("coordinate"))
        except ParserError as err:
            self.line_error(f"<error>{err}</error>")
            return 1

        try:
            config = self._load_config()
        except ConfigError as err:
            for reason in err.reasons:
                self.line_error(f"<error>{reason}</error>")
            return 1
        for info in effective_config_info(config):
            log.debug("config: %s", info)

        # create a reporter
        reporter: Reporter
        if report_path:
            reporter = FileReporter(report_path)
        else:
            reporter = DummyReporter()

        with reporter, Client.from_config(config) as client:
            try:
                by_coordinate = client.get_definition_map(coordinates, chunk_size=config.api.chunk_size)
            except (FetcherError, DeserializerError) as err:
                for coordinate in coordinates:
                    reporter.add_failure(str(coordinate), err)
                self.line_error(f"<error>{err}</error>")
                return 1

            missing = 0
            for coordinate in coordinates:
                key = str(coordinate)
                definition = by_coordinate.get(key)
                if definition is None:
                    log.warning("no definition returned for '%s'", key)
                    reporter.add(key, Status.UNKNOWN, ["no definition returned"])
                    self.line(f"<error>{key}</error>: {Status.UNKNOWN.value} (no definition returned)")
                    missing = missing + 1
                    continue
                reporter.add_definition(key, definition)
                for line in describe_definition(definition):
                    self.line(line)

        return 1 if missing > 0 else 0
