# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

import validators

from clearly_defined.errors import ParserError
from clearly_defined.model.revision import Revision
from clearly_defined.model.shape import Provider, Shape

NO_NAMESPACE = "-"
CURATION_PR_MARKER = "pr"
SEPARATOR = "/"


@dataclass(slots=True, frozen=True)
class Coordinate:
    """Defines the coordinates of a specific component.

    For example, `crate/cratesio/-/syn/1.0.14`
    (as in <https://clearlydefined.io/definitions/crate/cratesio/-/syn/1.0.14>):

    shape `crate` - the shape of the component you are looking for.
        For example, npm, git, nuget, maven, crate...
    provider `cratesio` - where the component can be found.
        Examples include npmjs, mavencentral, github, nuget, cratesio...
    namespace `-` - many component systems have namespaces:
        GitHub orgs, NPM namespace, Maven group id, ...
        This segment must be supplied.
        If your component does not have a namespace, use '-' (ASCII hyphen).
    name `syn` - the name of the component you want.
        Given the namespace segment mentioned above,
        this is just the simple name.
    revision `1.0.14` - components typically have some differentiator
        like a version or commit id. Use that here.
        If this segment is omitted, the latest revision is used
        (if that makes sense for the provider).
    pr - literally the string pr. This is a marker segment and must be included
        if you are looking for the results of applying a particular curation PR
        to the harvested and curated data for a component.
    number - the GitHub PR number to apply
        to the existing harvested and curated data.
    """
    shape: Shape
    provider: Provider
    name: str
    namespace: str | None = None
    revision: Revision | None = None
    curation_pr: int | None = None

    def __post_init__(self) -> None:
        # plain wire values are accepted as well as the enum members
        object.__setattr__(self, "shape", Shape.from_str(self.shape))
        object.__setattr__(self, "provider", Provider.from_str(self.provider))
        if self.namespace == NO_NAMESPACE:
            object.__setattr__(self, "namespace", None)
        if not isinstance(self.name, str) or not self.name:
            raise ParserError("name must be a non-empty string")
        for part in [self.name, self.namespace]:
            if part is not None and (part == "" or SEPARATOR in part):
                raise ParserError(f"invalid coordinate segment '{part}'")
        if self.curation_pr is not None:
            if self.revision is None:
                raise ParserError("a curation PR requires a revision")
            if self.curation_pr < 1:
                raise ParserError(f"invalid curation PR number: {self.curation_pr}")

    def __str__(self) -> str:
        parts = [
            str(self.shape),
            str(self.provider),
            self.namespace or NO_NAMESPACE,
            self.name,
        ]
        if self.revision is not None:
            parts.append(str(self.revision))
            if self.curation_pr is not None:
                parts.extend([CURATION_PR_MARKER, str(self.curation_pr)])
        return SEPARATOR.join(parts)

    @classmethod
    def from_str(cls, value: str) -> Coordinate:
        """Parses a coordinate in the canonical
        `type/provider/namespace/name[/revision[/pr/number]]` form.

        Raises:
            ParserError: If the string is not a valid coordinate.
        """
        if not isinstance(value, str):
            raise ParserError(f"coordinate must be a string, got: {type(value).__name__}")
        segments = value.split(SEPARATOR)
        if len(segments) not in (4, 5, 7):
            raise ParserError(f"expected 4, 5 or 7 '/' separated segments, got {len(segments)}: '{value}'")
        if any(segment == "" for segment in segments):
            raise ParserError(f"empty segment in coordinate '{value}'")

        shape = Shape.from_str(segments[0])
        provider = Provider.from_str(segments[1])
        namespace = segments[2]
        name = segments[3]
        revision = Revision.from_str(segments[4]) if len(segments) > 4 else None
        curation_pr = None
        if len(segments) == 7:
            if segments[5] != CURATION_PR_MARKER:
                raise ParserError(f"expected '{CURATION_PR_MARKER}' marker segment, got '{segments[5]}': '{value}'")
            # no leading zeros either, those would not survive formatting
            if not (segments[6].isascii() and segments[6].isdigit()) or segments[6].startswith("0"):
                raise ParserError(f"curation PR must be a positive number, got '{segments[6]}': '{value}'")
            curation_pr = int(segments[6])

        return cls(
            shape=shape,
            provider=provider,
            namespace=namespace,
            name=name,
            revision=revision,
            curation_pr=curation_pr,
        )

    @classmethod
    def from_url(cls, url: str) -> Coordinate:
        """Extracts the coordinate from a ClearlyDefined definition URL,
        e.g. `https://clearlydefined.io/definitions/crate/cratesio/-/syn/1.0.14`
        or the equivalent `https://api.clearlydefined.io/...` one."""
        if not (isinstance(url, str) and validators.url(url)):
            raise ParserError(f"invalid URL '{url}'")
        path = urlparse(url).path.strip(SEPARATOR)
        prefix, sep, coordinate = path.partition("definitions" + SEPARATOR)
        if not sep or prefix:
            raise ParserError(f"not a definition URL: '{url}'")
        return cls.from_str(coordinate)
