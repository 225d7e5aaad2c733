# SPDX-FileCopyrightText: 2021 - 2022 Andre Lehmann <aisberg@posteo.de>
# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""The `clearly-defined` command line tool."""

from __future__ import annotations

from cleo import Application as BaseApplication
from clikit.api.args.format.argument import Argument
from clikit.api.args.format.option import Option
from clikit.api.args.raw_args import RawArgs
from clikit.api.event import PRE_HANDLE, PRE_RESOLVE
from clikit.api.formatter import Formatter
from clikit.api.io import Input, Output
from clikit.api.io.flags import DEBUG, VERBOSE, VERY_VERBOSE
from clikit.api.io.output_stream import OutputStream
from clikit.config import DefaultApplicationConfig
from clikit.formatter import AnsiFormatter, PlainFormatter
from clikit.handler.help import HelpTextHandler
from clikit.io.console_io import ConsoleIO
from clikit.io.input_stream import StandardInputStream
from clikit.io.output_stream import ErrorOutputStream, StandardOutputStream
from clikit.resolver.help_resolver import HelpResolver

from clearly_defined import __version__
from clearly_defined.cli.command.get import GetCommand
from clearly_defined.cli.command.list import ListCommand
from clearly_defined.cli.command.parse import ParseCommand
from clearly_defined.cli.command.validate import ValidateCommand
from clearly_defined.log import configure_logger, level_for_verbosity

LOG_FORMAT = "<info>%(asctime)s</info> | <c1>%(levelname)-7s</c1> | <c2>%(name)s</c2> | %(message)s"

# most verbose first, as "-vv" also contains "-v"
_VERBOSITY_TOKENS = [
    ("-vvv", DEBUG),
    ("-vv", VERY_VERBOSE),
    ("-v", VERBOSE),
]


def verbosity_from_args(args: RawArgs) -> tuple[int, int | None]:
    """Returns the number of `v`s given on the command line,
    together with the matching clikit IO verbosity (None for the default)."""
    for token, io_verbosity in _VERBOSITY_TOKENS:
        if args.has_option_token(token):
            return len(token) - 1, io_verbosity
    return 0, None


class Application(BaseApplication):

    command_classes = [GetCommand, ParseCommand, ListCommand, ValidateCommand]

    def __init__(self):
        super().__init__(config=ApplicationConfig())
        for command_class in self.command_classes:
            self.add(command_class())


class ApplicationConfig(DefaultApplicationConfig):

    def __init__(self):
        super().__init__(name="clearly-defined", version=__version__)

    def configure(self):
        self.set_io_factory(self.create_io)
        self.add_event_listener(PRE_RESOLVE, self.resolve_help_command)
        self.add_event_listener(PRE_HANDLE, self.print_version)

        self.add_option("help", "h", Option.NO_VALUE, "Display this help message")
        self.add_option(
            "verbose",
            "v",
            Option.NO_VALUE,
            "Log more: '-v' for warnings, '-vv' for info and '-vvv' for debug messages",
        )
        self.add_option("version", None, Option.NO_VALUE, "Display the version of clearly-defined")
        self.add_option("no-ansi", None, Option.NO_VALUE, "Disable ANSI output")
        self.add_option("config", "c", Option.REQUIRED_VALUE, "Path to a YAML configuration file")

        with self.command("help") as c:
            c.default()
            c.set_description("Display the manual of a command")
            c.add_argument("command", Argument.OPTIONAL | Argument.MULTI_VALUED, "The command name")
            c.set_handler(HelpTextHandler(HelpResolver()))

    def create_io(self,
                  application,
                  args: RawArgs,
                  input_stream=None,
                  output_stream: OutputStream | None = None,
                  error_stream: OutputStream | None = None) -> ConsoleIO:
        input_stream = input_stream or StandardInputStream()
        output_stream = output_stream or StandardOutputStream()
        error_stream = error_stream or ErrorOutputStream()
        plain = args.has_option_token("--no-ansi")

        def formatter(stream: OutputStream) -> Formatter:
            if plain or not stream.supports_ansi():
                return PlainFormatter(application.config.style_set)
            return AnsiFormatter(application.config.style_set)

        io = self.io_class(
            Input(input_stream),
            Output(output_stream, formatter(output_stream)),
            Output(error_stream, formatter(error_stream)),
        )

        verbosity, io_verbosity = verbosity_from_args(args)
        if io_verbosity is not None:
            io.set_verbosity(io_verbosity)
        configure_logger(level_for_verbosity(verbosity), LOG_FORMAT, io.error_output)

        return io


def main():
    return Application().run()
