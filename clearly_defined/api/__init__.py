# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Transport neutral requests and responses.

The request builders in this package only shape the HTTP requests,
and the response types only parse what comes back;
actually sending requests is left to :mod:`clearly_defined.client`,
or to whatever HTTP library the caller prefers.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from clearly_defined.errors import DeserializerError, HttpStatusError, NotOverriddenError

JSON_CONTENT_TYPE = "application/json"


@dataclass(slots=True, frozen=True)
class ApiRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(slots=True, frozen=True)
class ApiResponse:
    status_code: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    url: str | None = None

    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class ApiResult:
    """Interface for the parsed result of an API call."""

    @classmethod
    def from_response(cls, response: ApiResponse) -> ApiResult:
        """Parses a response, if it was successful.

        Raises:
            HttpStatusError: If the response status is not 2xx.
            DeserializerError: If the body does not fit the expected schema.
        """
        # ClearlyDefined doesn't seem to ever return structured errors,
        # so there is nothing more to extract from a failed response
        if not response.is_success():
            raise HttpStatusError(response.status_code, response.url)
        return cls.from_json(parse_json(response.body))

    @classmethod
    def from_json(cls, data: Any) -> ApiResult:
        raise NotOverriddenError()


def parse_json(body: bytes | str) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise DeserializerError(f"response is not valid JSON: {err}") from err
