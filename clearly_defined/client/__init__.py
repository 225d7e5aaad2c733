# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from collections.abc import Iterable

import requests

from clearly_defined import ROOT_URI
from clearly_defined.api import ApiRequest, ApiResponse, definitions
from clearly_defined.api.definitions import DEFAULT_CHUNK_SIZE, GetOneResponse, GetResponse
from clearly_defined.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Config
from clearly_defined.errors import FetcherError
from clearly_defined.log import get_child_logger
from clearly_defined.model.coordinate import Coordinate
from clearly_defined.model.definition import Definition

log = get_child_logger("client")


class Client:
    """Blocking client for the ClearlyDefined API.

    There are no retries and no rate limiting;
    every error is passed on to the caller.

    Args:
        root_uri (str): Root of the ClearlyDefined API.
        timeout (int): Max seconds to wait for a not responding service.
        user_agent (str): Agent name used for requesting remote resources.
        session (requests.Session, optional): Session to use instead of a new one.
            It is neither modified nor closed by this client.
    """

    def __init__(self,
                 root_uri: str = ROOT_URI,
                 timeout: int = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT,
                 session: requests.Session | None = None) -> None:
        self._root_uri = root_uri
        self._timeout = timeout
        # sent with every request, so a session of the caller stays untouched
        self._headers = {
            "User-Agent": user_agent,
        }
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_config(cls, config: Config, session: requests.Session | None = None) -> Client:
        return cls(
            root_uri=config.api.url,
            timeout=config.api.timeout,
            user_agent=config.user_agent,
            session=session,
        )

    @property
    def root_uri(self) -> str:
        return self._root_uri

    def execute(self, request: ApiRequest) -> ApiResponse:
        """Sends a request as is, and returns the response whatever its status."""
        log.debug("%s %s", request.method, request.url)
        try:
            response = self._session.request(
                method=request.method,
                url=request.url,
                headers={**self._headers, **request.headers},
                data=request.body,
                timeout=self._timeout,
            )
        except requests.RequestException as err:
            raise FetcherError(f"failed to request '{request.url}': {err}") from err
        log.debug("got HTTP status %d from %s", response.status_code, request.url)
        return ApiResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
            url=request.url,
        )

    def get_definition_map(self,
                           coordinates: Iterable[Coordinate],
                           chunk_size: int = DEFAULT_CHUNK_SIZE) -> dict[str, Definition]:
        """Gets the definitions for the supplied coordinates,
        sending one request per chunk of them.

        Returns:
            dict[str, Definition]: The definitions keyed by the requested coordinate strings.
                Coordinates the service did not answer for are missing.
        """
        result: dict[str, Definition] = {}
        for request in definitions.get(coordinates, chunk_size=chunk_size, root_uri=self._root_uri):
            response = GetResponse.from_response(self.execute(request))
            result.update(response.by_coordinate)
        log.info("fetched %d definitions", len(result))
        return result

    def get_definitions(self,
                        coordinates: Iterable[Coordinate],
                        chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[Definition]:
        return list(self.get_definition_map(coordinates, chunk_size).values())

    def get_definition(self, coordinate: Coordinate) -> Definition:
        request = definitions.get_one(coordinate, root_uri=self._root_uri)
        return GetOneResponse.from_response(self.execute(request)).definition

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()
