# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import unittest

import semver

from clearly_defined.errors import ParserError
from clearly_defined.model.revision import Revision


class TestRevision(unittest.TestCase):

    def test_semver(self):
        revision = Revision.from_str("1.0.14")
        self.assertTrue(revision.is_semver())
        self.assertEqual(revision.version, semver.Version(1, 0, 14))

    def test_semver_pre_release(self):
        revision = Revision.from_str("2.0.0-rc.1+build.5")
        self.assertEqual(revision.version.prerelease, "rc.1")
        self.assertEqual(str(revision), "2.0.0-rc.1+build.5")

    def test_not_semver(self):
        for raw in ["1.0", "v1.8.0", "194269b5b7010ad6f8dc4ef608c88128615031ca"]:
            with self.subTest(raw=raw):
                revision = Revision.from_str(raw)
                self.assertFalse(revision.is_semver())
                self.assertIsNone(revision.version)
                self.assertEqual(str(revision), raw)

    def test_empty(self):
        with self.assertRaises(ParserError):
            Revision.from_str("")

    def test_slash(self):
        with self.assertRaises(ParserError):
            Revision.from_str("1/2")

    def test_not_a_string(self):
        with self.assertRaises(ParserError):
            Revision(None)


if __name__ == '__main__':
    unittest.main()
