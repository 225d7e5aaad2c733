# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import unittest

from clearly_defined.errors import ParserError
from clearly_defined.model.coordinate import Coordinate
from clearly_defined.model.revision import Revision
from clearly_defined.model.shape import Provider, Shape

VALID_COORDINATES = [
    "npm/npmjs/-/lodash/4.17.21",
    "npm/npmjs/@types/node/20.1.0",
    "crate/cratesio/-/syn/1.0.14",
    "crate/cratesio/-/syn",
    "maven/mavencentral/org.apache.commons/commons-lang3/3.12.0",
    "git/github/microsoft/redie/194269b5b7010ad6f8dc4ef608c88128615031ca",
    "pypi/pypi/-/requests/2.31.0",
    "crate/cratesio/-/syn/1.0.14/pr/1234",
    "go/golang/github.com%2fgorilla/mux/v1.8.0",
]


class TestCoordinate(unittest.TestCase):

    def test_round_trip(self):
        for value in VALID_COORDINATES:
            with self.subTest(value=value):
                self.assertEqual(str(Coordinate.from_str(value)), value)

    def test_parse_parts(self):
        coordinate = Coordinate.from_str("npm/npmjs/-/lodash/4.17.21")
        self.assertEqual(coordinate.shape, Shape.NPM)
        self.assertEqual(coordinate.provider, Provider.NPMJS)
        self.assertIsNone(coordinate.namespace)
        self.assertEqual(coordinate.name, "lodash")
        self.assertEqual(coordinate.revision, Revision("4.17.21"))
        self.assertIsNone(coordinate.curation_pr)

    def test_parse_namespace(self):
        coordinate = Coordinate.from_str("maven/mavencentral/org.apache.commons/commons-lang3/3.12.0")
        self.assertEqual(coordinate.namespace, "org.apache.commons")

    def test_parse_curation_pr(self):
        coordinate = Coordinate.from_str("crate/cratesio/-/syn/1.0.14/pr/1234")
        self.assertEqual(coordinate.curation_pr, 1234)
        self.assertEqual(str(coordinate.revision), "1.0.14")

    def test_no_revision(self):
        coordinate = Coordinate.from_str("crate/cratesio/-/syn")
        self.assertIsNone(coordinate.revision)

    def test_dash_namespace_is_none(self):
        coordinate = Coordinate(shape=Shape.CRATE, provider=Provider.CRATES_IO, namespace="-", name="syn")
        self.assertIsNone(coordinate.namespace)
        self.assertEqual(str(coordinate), "crate/cratesio/-/syn")

    def test_invalid(self):
        invalid = [
            "",
            "npm/npmjs/-",
            "npm/npmjs/-/",
            "npm/npmjs//lodash/4.17.21",
            "npm/npmjs/-/lodash/4.17.21/",
            "npm/npmjs/-/lodash/4.17.21/pr",
            "npm/npmjs/-/lodash/4.17.21/xx/12",
            "npm/npmjs/-/lodash/4.17.21/pr/abc",
            "npm/npmjs/-/lodash/4.17.21/pr/0",
            "npm/npmjs/-/lodash/4.17.21/pr/012",
            "npm/npmjs/-/lodash/4.17.21/pr/12/extra",
            "unknown/npmjs/-/lodash/4.17.21",
            "npm/unknown/-/lodash/4.17.21",
        ]
        for value in invalid:
            with self.subTest(value=value):
                with self.assertRaises(ParserError):
                    Coordinate.from_str(value)

    def test_invalid_construction(self):
        with self.assertRaises(ParserError):
            Coordinate(shape=Shape.NPM, provider=Provider.NPMJS, name="")
        with self.assertRaises(ParserError):
            Coordinate(shape=Shape.NPM, provider=Provider.NPMJS, name="a/b")
        with self.assertRaises(ParserError):
            Coordinate(shape=Shape.NPM, provider=Provider.NPMJS, name="lodash", curation_pr=12)
        with self.assertRaises(ParserError):
            Coordinate(shape=Shape.NPM,
                       provider=Provider.NPMJS,
                       name="lodash",
                       revision=Revision("1.0.0"),
                       curation_pr=0)

    def test_revision_is_single_segment(self):
        with self.assertRaises(ParserError):
            Coordinate(shape=Shape.NPM, provider=Provider.NPMJS, name="x", revision=Revision("1/2"))

    def test_plain_string_shape_and_provider(self):
        coordinate = Coordinate(shape="crate", provider="cratesio", name="syn")
        self.assertIs(coordinate.shape, Shape.CRATE)
        self.assertIs(coordinate.provider, Provider.CRATES_IO)
        self.assertEqual(coordinate, Coordinate.from_str("crate/cratesio/-/syn"))

    def test_unknown_shape_and_provider(self):
        with self.assertRaises(ParserError):
            Coordinate(shape="bogus", provider=Provider.NPMJS, name="x")
        with self.assertRaises(ParserError):
            Coordinate(shape=Shape.NPM, provider="nowhere", name="x")

    def test_from_url(self):
        expected = Coordinate.from_str("crate/cratesio/-/syn/1.0.14")
        for url in [
                "https://clearlydefined.io/definitions/crate/cratesio/-/syn/1.0.14",
                "https://api.clearlydefined.io/definitions/crate/cratesio/-/syn/1.0.14",
        ]:
            with self.subTest(url=url):
                self.assertEqual(Coordinate.from_url(url), expected)

    def test_from_url_invalid(self):
        for url in [
                "not a url",
                "https://clearlydefined.io/crate/cratesio/-/syn/1.0.14",
                "https://clearlydefined.io/api/definitions/crate/cratesio/-/syn/1.0.14",
                "https://clearlydefined.io/definitions/crate/cratesio",
        ]:
            with self.subTest(url=url):
                with self.assertRaises(ParserError):
                    Coordinate.from_url(url)


class TestShape(unittest.TestCase):

    def test_from_str(self):
        self.assertEqual(Shape.from_str("sourcearchive"), Shape.SOURCE_ARCHIVE)
        self.assertEqual(Provider.from_str("anaconda-main"), Provider.ANACONDA_MAIN)

    def test_from_str_unknown(self):
        with self.assertRaises(ParserError):
            Shape.from_str("rpm")
        with self.assertRaises(ParserError):
            Provider.from_str("")


if __name__ == '__main__':
    unittest.main()
