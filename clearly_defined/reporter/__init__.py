# SPDX-FileCopyrightText: 2022 Andre Lehmann <aisberg@posteo.de>
# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from enum import StrEnum

from clearly_defined.model.definition import Definition


class Status(StrEnum):
    UNKNOWN = "unknown"
    OK = "ok"
    NOT_HARVESTED = "not-harvested"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.name


class Reporter:
    """Interface for creating a report about looked up coordinates."""

    def add(self, coordinate: str, status: Status, reasons: list[str] | None = None) -> None:
        """Add an entry to the report."""
        raise NotImplementedError()

    def close(self) -> None:
        """Closes the underlying resources."""
        raise NotImplementedError()

    def add_definition(self, coordinate: str, definition: Definition) -> None:
        if definition.is_harvested():
            self.add(coordinate, Status.OK)
        else:
            self.add(coordinate, Status.NOT_HARVESTED)

    def add_failure(self, coordinate: str, error: Exception) -> None:
        self.add(coordinate, Status.FAILED, [str(error)])

    def __enter__(self) -> Reporter:
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()
