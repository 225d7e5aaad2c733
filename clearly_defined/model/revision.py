# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass

import semver

from clearly_defined.errors import ParserError


@dataclass(slots=True, frozen=True)
class Revision:
    """The differentiator of a component,
    typically a version or a commit ID.

    The raw string is kept as is,
    so e.g. `1.0` or a git SHA survive being written out again;
    :attr:`version` is only set if it also happens to be a semantic version,
    which it will be most of the time, at least for crates and npm packages."""
    raw: str

    def __post_init__(self) -> None:
        if not isinstance(self.raw, str):
            raise ParserError(f"revision must be a string, got: {type(self.raw).__name__}")
        if not self.raw:
            raise ParserError("revision must not be empty")
        # it is a single segment of a coordinate
        if "/" in self.raw:
            raise ParserError(f"revision must not contain '/': '{self.raw}'")

    @property
    def version(self) -> semver.Version | None:
        if not semver.Version.is_valid(self.raw):
            return None
        return semver.Version.parse(self.raw)

    def is_semver(self) -> bool:
        return self.version is not None

    def __str__(self) -> str:
        return self.raw

    @classmethod
    def from_str(cls, value: str) -> Revision:
        return cls(raw=value)
