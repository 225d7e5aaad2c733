# SPDX-FileCopyrightText: 2022 Andre Lehmann <aisberg@posteo.de>
# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from clearly_defined.reporter import Reporter, Status


class DummyReporter(Reporter):
    """Reporter that does nothing"""

    def add(self, coordinate: str, status: Status, reasons: list[str] | None = None) -> None:
        pass

    def close(self) -> None:
        pass
