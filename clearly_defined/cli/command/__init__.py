# SPDX-FileCopyrightText: 2021 - 2022 Andre Lehmann <aisberg@posteo.de>
# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from cleo import Command
from clikit.api.args.format import Option

from clearly_defined.config import (BASE_SCHEMA, ClearlyDefinedConfigLoader, CliConfigLoader, Config,
                                    YamlFileConfigLoader, iterate_schema)
from clearly_defined.model.coordinate import Coordinate


def parse_coordinate(value: str) -> Coordinate:
    """Parses a coordinate given on the command line,
    either in its canonical form or as a ClearlyDefined URL."""
    value = value.strip()
    if re.match(r"^https?://", value):
        return Coordinate.from_url(value)
    return Coordinate.from_str(value)


def parse_coordinates(values: Iterable[str]) -> list[Coordinate]:
    return [parse_coordinate(value) for value in values]


class ClearlyDefinedCommand(Command):

    def _load_config_schema(self) -> dict:
        return BASE_SCHEMA

    def _load_config(self) -> Config:
        config_schema = self._load_config_schema()
        cli_options = self._get_options_from_schema(config_schema)

        # normalize and validate config
        cli_config_loader = CliConfigLoader(config_schema, cli_options)
        yaml_config_loader = YamlFileConfigLoader(config_schema, self.option("config"))
        # the order specifies the priority of the options (CLI before file)
        config = ClearlyDefinedConfigLoader(config_schema, cli_config_loader, yaml_config_loader).load()

        return config

    @staticmethod
    def _option_name(rule: Mapping) -> str | None:
        long_name = rule.get("meta", {}).get("long_name")
        if not long_name:
            return None
        return re.sub(r"[^a-z0-9]", "-", long_name)

    def _add_options_from_schema(self, schema: Mapping) -> None:
        """Adds a `--<long-name>` option for every schema leaf that has a long name."""
        for _, rule in iterate_schema(schema):
            name = self._option_name(rule)
            if name is None:
                continue
            self._config.add_option(
                long_name=name,
                flags=Option.REQUIRED_VALUE,
                description=rule["meta"].get("description"),
            )

    def _get_options_from_schema(self, schema: Mapping) -> dict:
        config = Config()
        for key_path, rule in iterate_schema(schema):
            name = self._option_name(rule)
            if name is not None:
                config[key_path] = self.option(name)
        return config.to_dict()
