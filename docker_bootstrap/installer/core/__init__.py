#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Core components for the Docker bootstrap installer."""

from .install_context import InstallContext

__all__ = [
    "InstallContext",
]
