# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
import unittest
from pathlib import Path
from unittest import mock

import requests

from clearly_defined.client import Client
from clearly_defined.config import Config
from clearly_defined.errors import FetcherError, HttpStatusError
from clearly_defined.model.coordinate import Coordinate

FIXTURE = Path(__file__).parent.parent / "fixtures" / "definitions.json"
COORDINATES = [
    Coordinate.from_str("crate/cratesio/-/syn/1.0.14"),
    Coordinate.from_str("npm/npmjs/-/not-harvested-yet/0.0.1"),
]


def fake_response(status_code=200, content=b"{}"):
    response = mock.Mock()
    response.status_code = status_code
    response.content = content
    response.headers = {"Content-Type": "application/json"}
    return response


def fake_session(*responses):
    session = mock.Mock()
    session.headers = {}
    session.request.side_effect = list(responses)
    return session


class TestClient(unittest.TestCase):

    def test_get_definitions(self):
        session = fake_session(fake_response(content=FIXTURE.read_bytes()))
        client = Client(root_uri="https://example.org", user_agent="tester/1.0", session=session)
        definitions = client.get_definitions(COORDINATES)

        self.assertEqual([str(d.coordinates) for d in definitions], [str(c) for c in COORDINATES])
        kwargs = session.request.call_args.kwargs
        self.assertEqual(kwargs["method"], "POST")
        self.assertEqual(kwargs["url"], "https://example.org/definitions")
        self.assertEqual(json.loads(kwargs["data"]), [str(c) for c in COORDINATES])
        self.assertEqual(kwargs["headers"]["User-Agent"], "tester/1.0")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")
        self.assertEqual(session.headers, {})

    def test_get_definitions_chunked(self):
        raw = json.loads(FIXTURE.read_text(encoding="utf-8"))
        first, second = [json.dumps({k: v}).encode("utf-8") for k, v in raw.items()]
        session = fake_session(fake_response(content=first), fake_response(content=second))
        client = Client(session=session)
        definitions = client.get_definitions(COORDINATES, chunk_size=1)

        self.assertEqual(session.request.call_count, 2)
        self.assertEqual([str(d.coordinates) for d in definitions], [str(c) for c in COORDINATES])

    def test_get_definition(self):
        raw = json.loads(FIXTURE.read_text(encoding="utf-8"))["crate/cratesio/-/syn/1.0.14"]
        session = fake_session(fake_response(content=json.dumps(raw).encode("utf-8")))
        client = Client(root_uri="https://example.org", session=session)
        definition = client.get_definition(COORDINATES[0])

        self.assertEqual(definition.declared_license(), "Apache-2.0 OR MIT")
        kwargs = session.request.call_args.kwargs
        self.assertEqual(kwargs["method"], "GET")
        self.assertEqual(kwargs["url"], "https://example.org/definitions/crate/cratesio/-/syn/1.0.14")

    def test_http_status_error(self):
        session = fake_session(fake_response(status_code=503, content=b"unavailable"))
        client = Client(session=session)
        with self.assertRaises(HttpStatusError) as ctx:
            client.get_definitions(COORDINATES)
        self.assertEqual(ctx.exception.status_code, 503)

    def test_transport_error(self):
        session = fake_session(requests.ConnectionError("connection refused"))
        client = Client(session=session)
        with self.assertRaises(FetcherError) as ctx:
            client.get_definition(COORDINATES[0])
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_foreign_session_stays_open(self):
        session = fake_session()
        with Client(session=session):
            pass
        session.close.assert_not_called()

    def test_from_config(self):
        config = Config({"api": {"url": "https://example.org", "timeout": 5}, "user_agent": "tester/2.0"})
        raw = json.loads(FIXTURE.read_text(encoding="utf-8"))["crate/cratesio/-/syn/1.0.14"]
        session = fake_session(fake_response(content=json.dumps(raw).encode("utf-8")))
        client = Client.from_config(config, session=session)
        client.get_definition(COORDINATES[0])

        self.assertEqual(client.root_uri, "https://example.org")
        kwargs = session.request.call_args.kwargs
        self.assertEqual(kwargs["headers"]["User-Agent"], "tester/2.0")
        self.assertEqual(kwargs["timeout"], 5)

    def test_get_definition_map_keeps_requested_keys(self):
        raw = json.loads(FIXTURE.read_text(encoding="utf-8"))
        content = json.dumps({"crate/cratesio/-/syn/1.0.14": raw["crate/cratesio/-/syn/1.0.14"]}).encode("utf-8")
        session = fake_session(fake_response(content=content))
        client = Client(session=session)
        by_coordinate = client.get_definition_map(COORDINATES)

        self.assertEqual(list(by_coordinate.keys()), ["crate/cratesio/-/syn/1.0.14"])
        self.assertNotIn(str(COORDINATES[1]), by_coordinate)


if __name__ == '__main__':
    unittest.main()
