# SPDX-FileCopyrightText: 2022 Andre Lehmann <aisberg@posteo.de>
# SPDX-FileCopyrightText: 2023 - 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations


class ClearlyDefinedError(Exception):
    pass


class ConfigError(ClearlyDefinedError):

    def __init__(self, msg: str, reasons: list[str]) -> None:
        super().__init__(msg)
        self.reasons = reasons


class ParserError(ClearlyDefinedError):
    pass


class FetcherError(ClearlyDefinedError):
    pass


class HttpStatusError(FetcherError):

    def __init__(self, status_code: int, url: str | None = None) -> None:
        msg = f"HTTP status {status_code}"
        if url:
            msg = f"{msg} from '{url}'"
        super().__init__(msg)
        self.status_code = status_code
        self.url = url


class DeserializerError(ClearlyDefinedError):
    pass


class NotOverriddenError(ClearlyDefinedError, NotImplementedError):
    pass
