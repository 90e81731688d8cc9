# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Marketplace backend: catalog browsing and session-based accounts."""

__version__ = "0.1.0"
