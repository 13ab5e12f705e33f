#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Logging and error types shared across the installer."""

from .logger_utils import InstallerLogger, SkipReasons

from .exceptions import (
    BootstrapError,
    CommandFailedError,
    DownloadError,
    OsReleaseError,
    PrivilegeError,
    UnsupportedArchitectureError,
    UnknownUserError,
    UnsupportedDistributionError,
)

__all__ = [
    "InstallerLogger",
    "SkipReasons",
    "BootstrapError",
    "CommandFailedError",
    "DownloadError",
    "OsReleaseError",
    "PrivilegeError",
    "UnsupportedArchitectureError",
    "UnsupportedDistributionError",
    "UnknownUserError",
]
