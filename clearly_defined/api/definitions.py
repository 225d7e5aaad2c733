# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
from collections.abc import Generator, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from clearly_defined import ROOT_URI
from clearly_defined.api import JSON_CONTENT_TYPE, ApiRequest, ApiResult
from clearly_defined.errors import DeserializerError
from clearly_defined.log import get_child_logger
from clearly_defined.model.coordinate import Coordinate
from clearly_defined.model.definition import Definition

log = get_child_logger("definitions")

# https://api.clearlydefined.io/api-docs/#/definitions/post_definitions
MAX_CHUNK_SIZE = 1000
DEFAULT_CHUNK_SIZE = 100

_HEADERS = {
    "Content-Type": JSON_CONTENT_TYPE,
    "Accept": JSON_CONTENT_TYPE,
}


def chunked(coordinates: Iterable[Coordinate], chunk_size: int) -> Generator[list[Coordinate]]:
    """Splits the coordinates into lists of at most `chunk_size`,
    which itself is capped at what the service accepts per request."""
    if chunk_size < 1:
        raise ValueError(f"chunk size must be at least 1, got: {chunk_size}")
    chunk_size = min(chunk_size, MAX_CHUNK_SIZE)
    chunk: list[Coordinate] = []
    for coordinate in coordinates:
        chunk.append(coordinate)
        if len(chunk) == chunk_size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def get(coordinates: Iterable[Coordinate],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        root_uri: str = ROOT_URI) -> Generator[ApiRequest]:
    """Creates the requests to get the definitions for the supplied coordinates.

    Note that in addition to this API call being limited
    to a maximum of 1000 coordinates per request,
    the request time is _extremely_ slow and can timeout,
    so it is recommended you specify a reasonable chunk size
    and send multiple requests.

    Args:
        coordinates (Iterable[Coordinate]): The components to get the definitions for.
        chunk_size (int): Max coordinates per request, capped at 1000.
        root_uri (str): Root of the ClearlyDefined API.

    Yields:
        ApiRequest: One POST request per chunk.
    """
    url = f"{root_uri.rstrip('/')}/definitions"
    for chunk in chunked(coordinates, chunk_size):
        body = json.dumps([str(coordinate) for coordinate in chunk]).encode("utf-8")
        log.debug("created request for %d coordinates", len(chunk))
        yield ApiRequest(method="POST", url=url, headers=dict(_HEADERS), body=body)


def get_one(coordinate: Coordinate, root_uri: str = ROOT_URI) -> ApiRequest:
    """Creates the request to get the definition of a single coordinate."""
    return ApiRequest(
        method="GET",
        url=f"{root_uri.rstrip('/')}/definitions/{coordinate}",
        headers={"Accept": JSON_CONTENT_TYPE},
    )


@dataclass(slots=True, frozen=True)
class GetResponse(ApiResult):
    by_coordinate: dict[str, Definition] = field(default_factory=dict)
    """The component definitions, keyed by the coordinates as sent in the request"""

    @property
    def definitions(self) -> list[Definition]:
        """The component definitions, one for each coordinate passed to the get request"""
        return list(self.by_coordinate.values())

    @classmethod
    def from_json(cls, data: Any) -> GetResponse:
        if not isinstance(data, Mapping):
            raise DeserializerError(f"expected an object of definitions, got: {type(data).__name__}")
        by_coordinate = {}
        for key, raw_definition in data.items():
            try:
                by_coordinate[key] = Definition.from_dict(raw_definition)
            except DeserializerError as err:
                raise DeserializerError(f"invalid definition for '{key}': {err}") from err
        return cls(by_coordinate=by_coordinate)


@dataclass(slots=True, frozen=True)
class GetOneResponse(ApiResult):
    definition: Definition

    @classmethod
    def from_json(cls, data: Any) -> GetOneResponse:
        return cls(definition=Definition.from_dict(data))
