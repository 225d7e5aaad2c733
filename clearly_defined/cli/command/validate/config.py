# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from pathlib import Path

from clearly_defined.cli.command import ClearlyDefinedCommand
from clearly_defined.config import ClearlyDefinedConfigLoader, YamlFileConfigLoader, effective_config_info
from clearly_defined.errors import ConfigError


class ValidateConfigCommand(ClearlyDefinedCommand):
    """Checks a YAML configuration file against the configuration schema. Exits with 1 if it is invalid.

    config
        {file : Configuration file to check}
        {--q|quiet : Only set the exit code, print nothing}
    """

    def handle(self):
        path = Path(self.argument("file"))
        quiet = self.option("quiet")

        schema = self._load_config_schema()
        try:
            config = ClearlyDefinedConfigLoader(schema, YamlFileConfigLoader(schema, path)).load()
        except ConfigError as err:
            if not quiet:
                for reason in err.reasons:
                    self.line_error(f"<error>{reason}</error>")
            return 1

        if not quiet:
            self.line(f"<info>{path}</info> is valid, resulting in:")
            for info in effective_config_info(config, schema):
                self.line(f"    {info}")
        return 0
