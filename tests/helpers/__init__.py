#
# SPDX-FileCopyrightText: Copyright (c) provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test helper modules for habkit testing.

This package contains utilities for building fake kitchen roots, artifacts
and sandbox layouts."""

from __future__ import annotations

# 🔼⚙️🔚
