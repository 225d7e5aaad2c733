# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Data model of the component definitions returned by ClearlyDefined.

The structure mirrors the JSON schema of the service
(see <https://api.clearlydefined.io/schemas/definition-1.0.json>),
converting its camelCase keys to snake_case attributes.
Each class comes with a `from_dict` constructor
that takes the already JSON-decoded data.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any

from clearly_defined.errors import DeserializerError, ParserError
from clearly_defined.log import get_child_logger
from clearly_defined.model.coordinate import Coordinate
from clearly_defined.model.revision import Revision
from clearly_defined.model.shape import Provider, Shape
from clearly_defined.model.util import as_int, as_mapping, as_str, as_str_list, parse_date

log = get_child_logger("definition")

# errors we expect from feeding data of the wrong shape into the `from_dict` constructors
_DATA_ERRORS = (KeyError, TypeError, ValueError, ParserError, DeserializerError)


@dataclass(slots=True, frozen=True)
class DefCoords:
    """The coordinates as reported back in a definition.
    Unlike a requested :class:`Coordinate`,
    these always carry a revision."""
    shape: Shape
    provider: Provider
    name: str
    revision: Revision
    namespace: str | None = None

    def __post_init__(self) -> None:
        # same segment rules as for requested coordinates
        self.to_coordinate()

    def __str__(self) -> str:
        return str(self.to_coordinate())

    def to_coordinate(self) -> Coordinate:
        return Coordinate(
            shape=self.shape,
            provider=self.provider,
            namespace=self.namespace,
            name=self.name,
            revision=self.revision,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DefCoords:
        data = as_mapping(data, "coordinates")
        return cls(
            shape=Shape.from_str(as_str(data["type"])),
            provider=Provider.from_str(as_str(data["provider"])),
            namespace=as_str(data.get("namespace"), optional=True),
            name=as_str(data["name"]),
            revision=Revision.from_str(as_str(data["revision"])),
        )


@dataclass(slots=True, frozen=True)
class Hashes:
    sha1: str
    sha256: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Hashes:
        data = as_mapping(data, "hashes")
        return cls(sha1=data["sha1"], sha256=data.get("sha256"))


@dataclass(slots=True, frozen=True)
class Scores:
    total: int
    date: int
    source: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Scores:
        data = as_mapping(data, "scores")
        return cls(
            total=as_int(data["total"]),
            date=as_int(data["date"]),
            source=as_int(data["source"]),
        )


@dataclass(slots=True, frozen=True)
class SourceLocation:  # pylint: disable=too-many-instance-attributes
    type: str
    provider: str
    namespace: str
    name: str
    revision: str
    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SourceLocation:
        data = as_mapping(data, "sourceLocation")
        return cls(
            type=data["type"],
            provider=data["provider"],
            namespace=data["namespace"],
            name=data["name"],
            revision=data["revision"],
            url=data["url"],
        )


@dataclass(slots=True, frozen=True)
class Description:  # pylint: disable=too-many-instance-attributes
    """What is known about the component itself,
    as opposed to its licensing."""
    release_date: date
    urls: dict[str, str]
    hashes: Hashes
    files: int
    tools: list[str]
    tool_score: Scores
    score: Scores
    source_location: SourceLocation | None = None
    project_website: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Description:
        data = as_mapping(data, "described")
        source_location = data.get("sourceLocation")
        release_date = parse_date(data["releaseDate"])
        if release_date is None:
            raise ValueError("missing release date")
        return cls(
            release_date=release_date,
            source_location=SourceLocation.from_dict(source_location) if source_location is not None else None,
            project_website=data.get("projectWebsite"),
            urls=dict(as_mapping(data["urls"], "urls")),
            hashes=Hashes.from_dict(data["hashes"]),
            files=as_int(data["files"]),
            tools=as_str_list(data["tools"]),
            tool_score=Scores.from_dict(data["toolScore"]),
            score=Scores.from_dict(data["score"]),
        )


@dataclass(slots=True, frozen=True)
class LicenseScore:  # pylint: disable=too-many-instance-attributes
    total: int
    declared: int
    discovered: int
    consistency: int
    spdx: int
    texts: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LicenseScore:
        data = as_mapping(data, "license score")
        return cls(**{f.name: as_int(data[f.name]) for f in fields(cls)})


@dataclass(slots=True, frozen=True)
class Attribution:
    unknown: int
    parties: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Attribution:
        data = as_mapping(data, "attribution")
        return cls(unknown=as_int(data["unknown"]), parties=as_str_list(data.get("parties")))


@dataclass(slots=True, frozen=True)
class Discovered:
    unknown: int
    expressions: list[str]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Discovered:
        data = as_mapping(data, "discovered")
        return cls(unknown=as_int(data["unknown"]), expressions=as_str_list(data["expressions"]))


@dataclass(slots=True, frozen=True)
class Facet:
    attribution: Attribution
    discovered: Discovered
    files: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Facet:
        data = as_mapping(data, "facet")
        return cls(
            attribution=Attribution.from_dict(data["attribution"]),
            discovered=Discovered.from_dict(data["discovered"]),
            files=as_int(data["files"]),
        )


@dataclass(slots=True, frozen=True)
class Facets:
    core: Facet

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Facets:
        data = as_mapping(data, "facets")
        return cls(core=Facet.from_dict(data["core"]))


@dataclass(slots=True, frozen=True)
class Licensed:
    """The licensing of a component."""
    declared: str
    "SPDX license expression"
    facets: Facets
    tool_score: LicenseScore
    score: LicenseScore

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Licensed:
        data = as_mapping(data, "licensed")
        declared = data["declared"]
        if not isinstance(declared, str):
            raise ValueError(f"declared license must be a string, got: {declared!r}")
        return cls(
            declared=declared,
            facets=Facets.from_dict(data["facets"]),
            tool_score=LicenseScore.from_dict(data["toolScore"]),
            score=LicenseScore.from_dict(data["score"]),
        )


@dataclass(slots=True, frozen=True)
class File:
    path: str
    hashes: Hashes | None = None
    license: str | None = None
    attributions: list[str] = field(default_factory=list)
    natures: list[str] = field(default_factory=list)
    token: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> File:
        data = as_mapping(data, "file")
        hashes = data.get("hashes")
        return cls(
            path=data["path"],
            hashes=Hashes.from_dict(hashes) if hashes is not None else None,
            license=data.get("license"),
            attributions=as_str_list(data.get("attributions")),
            natures=as_str_list(data.get("natures")),
            token=data.get("token"),
        )


@dataclass(slots=True, frozen=True)
class TopLevelScore:
    effective: int = 0
    tool: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TopLevelScore:
        data = as_mapping(data, "scores")
        return cls(effective=as_int(data["effective"]), tool=as_int(data["tool"]))


def _lenient(constructor, data: Any, what: str, coordinates: DefCoords):
    if data is None:
        return None
    try:
        return constructor(data)
    except _DATA_ERRORS as err:
        log.debug("treating '%s' of '%s' as missing: %s", what, coordinates, err)
        return None


@dataclass(slots=True, frozen=True)
class Definition:
    """The definition of a single component."""
    coordinates: DefCoords
    described: Description | None
    """The description of the component,
    won't be present if the coordinate has not been harvested"""
    licensed: Licensed | None
    files: list[File] = field(default_factory=list)
    scores: TopLevelScore = field(default_factory=TopLevelScore)

    def declared_license(self) -> str | None:
        return self.licensed.declared if self.licensed else None

    def is_harvested(self) -> bool:
        return self.described is not None

    @classmethod
    def from_dict(cls, data: Any) -> Definition:
        """Somewhat annoyingly, instead of returning null or some kind of error
        if a coordinate is not in the database,
        the service just returns a definition that is only partially filled out.
        So `described` and `licensed` are set to None
        if they do not fit the schema, even if they contain default data.

        Raises:
            DeserializerError: If required parts are missing or malformed.
        """
        data = as_mapping(data, "definition")
        for key in ["coordinates", "described", "licensed"]:
            if key not in data:
                raise DeserializerError(f"missing field '{key}' in definition")

        try:
            coordinates = DefCoords.from_dict(data["coordinates"])
        except _DATA_ERRORS as err:
            raise DeserializerError(f"invalid definition coordinates: {err}") from err

        try:
            files = [File.from_dict(raw_file) for raw_file in data.get("files") or []]
            scores = TopLevelScore.from_dict(data["scores"]) if data.get("scores") is not None else TopLevelScore()
        except _DATA_ERRORS as err:
            raise DeserializerError(f"invalid definition of '{coordinates}': {err}") from err

        return cls(
            coordinates=coordinates,
            described=_lenient(Description.from_dict, data["described"], "described", coordinates),
            licensed=_lenient(Licensed.from_dict, data["licensed"], "licensed", coordinates),
            files=files,
            scores=scores,
        )
