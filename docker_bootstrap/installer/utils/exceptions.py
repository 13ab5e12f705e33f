#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Custom exceptions for the Docker bootstrap installer."""

from typing import List, Optional


class BootstrapError(Exception):
    """Base class for installer errors that should end the run."""

    pass


class OsReleaseError(BootstrapError):
    """Raised when the os-release file can't be read."""

    def __init__(self, path: str):
        super().__init__(f"Cannot read {path}")
        self.path = path


class UnsupportedDistributionError(BootstrapError):
    """Raised when neither ID nor ID_LIKE maps to a known distribution family."""

    def __init__(self, distro_id: str, id_like: str = ""):
        super().__init__(f"Unsupported distribution: {distro_id}")
        self.distro_id = distro_id
        self.id_like = id_like


class UnsupportedArchitectureError(BootstrapError):
    """Raised when no docker compose release exists for the machine architecture."""

    def __init__(self, machine: str):
        super().__init__(f"Unsupported arch for manual compose plugin: {machine}")
        self.machine = machine


class CommandFailedError(BootstrapError):
    """Raised when a mandatory external command exits non-zero."""

    def __init__(self, command: List[str], returncode: int, output: Optional[List[str]] = None):
        self.command = command
        self.returncode = returncode
        self.output = output or []
        detail = f": {self.output[-1]}" if self.output else ""
        super().__init__(f"Command {' '.join(command)} returned {returncode}{detail}")


class PrivilegeError(BootstrapError):
    """Raised when root privileges are required but can't be obtained."""

    pass


class DownloadError(BootstrapError):
    """Raised when a file required by the install can't be fetched."""

    def __init__(self, url: str, reason: object):
        super().__init__(f"Download of {url} failed: {reason}")
        self.url = url
        self.reason = reason


class UnknownUserError(BootstrapError):
    """Raised when the user to add to the docker group can't be determined."""

    pass
