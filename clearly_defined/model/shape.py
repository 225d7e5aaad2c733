# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from enum import StrEnum

from clearly_defined.errors import ParserError


class Shape(StrEnum):
    """The type of a component, which mostly means its packaging format.
    ClearlyDefined calls this the "type" segment of a coordinate;
    we don't, so we do not shadow the builtin.

    See <https://docs.clearlydefined.io/docs/resources/glossary#type>."""
    COMPOSER = "composer"
    CONDA = "conda"
    CONDA_SRC = "condasrc"
    CRATE = "crate"
    """A Rust crate"""
    DEB = "deb"
    DEBIAN_SOURCES = "debsrc"
    GEM = "gem"
    GIT = "git"
    GO = "go"
    MAVEN = "maven"
    NPM = "npm"
    NUGET = "nuget"
    POD = "pod"
    PYPI = "pypi"
    SOURCE_ARCHIVE = "sourcearchive"

    @classmethod
    def from_str(cls, value: str) -> Shape:
        try:
            return cls(value)
        except ValueError as err:
            raise ParserError(f"unknown shape '{value}'") from err


class Provider(StrEnum):
    """Where a component can be found, usually a package registry.

    See <https://docs.clearlydefined.io/docs/resources/glossary#provider>."""
    ANACONDA_MAIN = "anaconda-main"
    ANACONDA_R = "anaconda-r"
    COCOAPODS = "cocoapods"
    CONDA_FORGE = "conda-forge"
    CRATES_IO = "cratesio"
    """The canonical crates.io registry for Rust crates"""
    DEBIAN = "debian"
    GITHUB = "github"
    GITLAB = "gitlab"
    GOLANG = "golang"
    GRADLE_PLUGIN = "gradleplugin"
    MAVEN_CENTRAL = "mavencentral"
    MAVEN_GOOGLE = "mavengoogle"
    NPMJS = "npmjs"
    NUGET = "nuget"
    PACKAGIST = "packagist"
    PYPI = "pypi"
    RUBYGEMS = "rubygems"

    @classmethod
    def from_str(cls, value: str) -> Provider:
        try:
            return cls(value)
        except ValueError as err:
            raise ParserError(f"unknown provider '{value}'") from err
