from __future__ import annotations

import logging
import logging.config

app_logger = logging.getLogger("clearly_defined")

# -v, -vv and -vvv on the command line
VERBOSITY_LEVELS = ["error", "warning", "info", "debug"]


def level_for_verbosity(verbosity: int) -> str:
    verbosity = max(0, min(verbosity, len(VERBOSITY_LEVELS) - 1))
    return VERBOSITY_LEVELS[verbosity]


def configure_logger(level: str, format: str, error_stream) -> None:
    """Route all log records of the library to the given error stream.

    Only the CLI calls this; as a library, we leave logging setup
    to the application embedding us.
    """

    # NOTE According to <https://clig.dev/#the-basics>,
    #      all logging should go to stderr.
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "message_only": {
                "format": format
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "message_only",
                "stream": error_stream
            },
        },
        "loggers": {
            "clearly_defined": {
                "level": level.upper(),
                "propagate": True
            }
        },
        "root": {
            "handlers": ["stderr"],
            "level": "ERROR",
        },
    }
    logging.config.dictConfig(logging_config)


def get_child_logger(suffix: str) -> logging.Logger:
    return app_logger.getChild(suffix)
