# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
import unittest
from pathlib import Path

import httpx

from clearly_defined.client.aio import AsyncClient, build_async_client
from clearly_defined.errors import FetcherError, HttpStatusError
from clearly_defined.model.coordinate import Coordinate

FIXTURE = Path(__file__).parent.parent / "fixtures" / "definitions.json"
COORDINATES = [
    Coordinate.from_str("crate/cratesio/-/syn/1.0.14"),
    Coordinate.from_str("npm/npmjs/-/not-harvested-yet/0.0.1"),
]


class TestAsyncClient(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.raw = json.loads(FIXTURE.read_text(encoding="utf-8"))
        self.requests: list[httpx.Request] = []

    def _client(self, handler) -> AsyncClient:

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        http_client = build_async_client(user_agent="tester/1.0", transport=httpx.MockTransport(recording_handler))
        return AsyncClient(root_uri="https://example.org", http_client=http_client)

    async def test_get_definitions(self):

        def handler(request: httpx.Request) -> httpx.Response:
            sent = json.loads(request.content)
            return httpx.Response(200, json={k: self.raw[k] for k in sent})

        async with self._client(handler) as client:
            definitions = await client.get_definitions(COORDINATES, chunk_size=1)

        self.assertEqual(len(self.requests), 2)
        self.assertEqual(self.requests[0].method, "POST")
        self.assertEqual(str(self.requests[0].url), "https://example.org/definitions")
        self.assertEqual(self.requests[0].headers["User-Agent"], "tester/1.0")
        self.assertEqual([str(d.coordinates) for d in definitions], [str(c) for c in COORDINATES])
        self.assertFalse(definitions[1].is_harvested())

    async def test_get_definition(self):

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=self.raw["crate/cratesio/-/syn/1.0.14"])

        async with self._client(handler) as client:
            definition = await client.get_definition(COORDINATES[0])

        self.assertEqual(self.requests[0].method, "GET")
        self.assertEqual(definition.declared_license(), "Apache-2.0 OR MIT")

    async def test_http_status_error(self):

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="not found")

        async with self._client(handler) as client:
            with self.assertRaises(HttpStatusError) as ctx:
                await client.get_definition(COORDINATES[0])
        self.assertEqual(ctx.exception.status_code, 404)

    async def test_transport_error(self):

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with self._client(handler) as client:
            with self.assertRaises(FetcherError) as ctx:
                await client.get_definitions(COORDINATES)
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)

    async def test_get_definition_map(self):

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"crate/cratesio/-/syn/1.0.14": self.raw["crate/cratesio/-/syn/1.0.14"]})

        async with self._client(handler) as client:
            by_coordinate = await client.get_definition_map(COORDINATES)

        self.assertEqual(list(by_coordinate.keys()), ["crate/cratesio/-/syn/1.0.14"])


if __name__ == '__main__':
    unittest.main()
