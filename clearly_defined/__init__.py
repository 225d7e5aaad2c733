# SPDX-FileCopyrightText: 2024 Robin Vobruba <hoijui.quaero@gmail.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

__version__ = "0.3.1"

# https://api.clearlydefined.io/api-docs/
ROOT_URI = "https://api.clearlydefined.io"
