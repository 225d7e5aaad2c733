# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Asynchronous counterpart of :class:`clearly_defined.client.Client`.

It runs on whatever event loop the caller uses;
chunks are requested one after the other,
so callers wanting parallel requests can split the coordinates themselves
and gather the coroutines.
"""

from __future__ import annotations

from collections.abc import Iterable

import httpx

from clearly_defined import ROOT_URI
from clearly_defined.api import ApiRequest, ApiResponse, definitions
from clearly_defined.api.definitions import DEFAULT_CHUNK_SIZE, GetOneResponse, GetResponse
from clearly_defined.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Config
from clearly_defined.errors import FetcherError
from clearly_defined.log import get_child_logger
from clearly_defined.model.coordinate import Coordinate
from clearly_defined.model.definition import Definition

log = get_child_logger("client.aio")


def build_async_client(timeout: float = DEFAULT_TIMEOUT,
                       user_agent: str = DEFAULT_USER_AGENT,
                       transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": user_agent},
        transport=transport,
    )


class AsyncClient:
    """Asynchronous client for the ClearlyDefined API.

    Args:
        root_uri (str): Root of the ClearlyDefined API.
        timeout (int): Max seconds to wait for a not responding service.
        user_agent (str): Agent name used for requesting remote resources.
        http_client (httpx.AsyncClient, optional): Client to use instead of a new one,
            which will then not be closed by this client.
    """

    def __init__(self,
                 root_uri: str = ROOT_URI,
                 timeout: int = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT,
                 http_client: httpx.AsyncClient | None = None) -> None:
        self._root_uri = root_uri
        self._owns_http_client = http_client is None
        self._http_client = http_client if http_client is not None else build_async_client(timeout, user_agent)

    @classmethod
    def from_config(cls, config: Config, http_client: httpx.AsyncClient | None = None) -> AsyncClient:
        return cls(
            root_uri=config.api.url,
            timeout=config.api.timeout,
            user_agent=config.user_agent,
            http_client=http_client,
        )

    @property
    def root_uri(self) -> str:
        return self._root_uri

    async def execute(self, request: ApiRequest) -> ApiResponse:
        log.debug("%s %s", request.method, request.url)
        try:
            response = await self._http_client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as err:
            raise FetcherError(f"failed to request '{request.url}': {err}") from err
        log.debug("got HTTP status %d from %s", response.status_code, request.url)
        return ApiResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
            url=request.url,
        )

    async def get_definition_map(self,
                                 coordinates: Iterable[Coordinate],
                                 chunk_size: int = DEFAULT_CHUNK_SIZE) -> dict[str, Definition]:
        result: dict[str, Definition] = {}
        for request in definitions.get(coordinates, chunk_size=chunk_size, root_uri=self._root_uri):
            response = GetResponse.from_response(await self.execute(request))
            result.update(response.by_coordinate)
        log.info("fetched %d definitions", len(result))
        return result

    async def get_definitions(self,
                              coordinates: Iterable[Coordinate],
                              chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[Definition]:
        return list((await self.get_definition_map(coordinates, chunk_size)).values())

    async def get_definition(self, coordinate: Coordinate) -> Definition:
        request = definitions.get_one(coordinate, root_uri=self._root_uri)
        return GetOneResponse.from_response(await self.execute(request)).definition

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, *_exc_info) -> None:
        await self.aclose()
