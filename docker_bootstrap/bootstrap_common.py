#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import getpass
import os
import platform
import re
import sys

from dataclasses import dataclass
from typing import Mapping, Optional

import distro
import requests

from docker_bootstrap.bootstrap_constants import (
    COMPOSE_ARCHITECTURES,
    OS_RELEASE_FILE,
    PROC_VERSION_FILE,
    WSL_CONF_FILE,
)
from docker_bootstrap.bootstrap_utils import eprint, file_contents
from docker_bootstrap.installer.utils.exceptions import (
    OsReleaseError,
    UnknownUserError,
    UnsupportedArchitectureError,
)


###################################################################################################
@dataclass(frozen=True)
class OsRelease:
    """The handful of /etc/os-release fields the installer dispatches on."""

    id: str
    id_like: str = ""
    version_id: str = ""
    version_codename: str = ""
    ubuntu_codename: str = ""
    name: str = ""

    @property
    def id_like_list(self):
        return self.id_like.lower().split()


def get_os_release(path: str = OS_RELEASE_FILE) -> OsRelease:
    """Parse an os-release file into an OsRelease.

    Raises OsReleaseError if the file is missing or defines no ID.
    """
    if not os.path.isfile(path):
        raise OsReleaseError(path)

    try:
        info = distro.LinuxDistribution(
            include_lsb=False,
            include_uname=False,
            os_release_file=path,
        ).os_release_info()
    except OSError as e:
        raise OsReleaseError(path) from e

    distro_id = (info.get('id') or '').strip().lower()
    if not distro_id:
        raise OsReleaseError(path)

    return OsRelease(
        id=distro_id,
        id_like=(info.get('id_like') or '').strip().lower(),
        version_id=(info.get('version_id') or '').strip(),
        version_codename=(info.get('version_codename') or '').strip().lower(),
        ubuntu_codename=(info.get('ubuntu_codename') or '').strip().lower(),
        name=(info.get('name') or '').strip(),
    )


###################################################################################################
_WSL_REGEX = re.compile(r'microsoft|wsl', re.IGNORECASE)


def detect_wsl(proc_version_path: str = PROC_VERSION_FILE) -> bool:
    """Return True only when the kernel version string carries a Microsoft/WSL marker."""
    contents = file_contents(proc_version_path)
    return bool(contents and _WSL_REGEX.search(contents))


def wsl_systemd_enabled(wsl_conf_path: str = WSL_CONF_FILE) -> bool:
    contents = file_contents(wsl_conf_path)
    return bool(contents and ('systemd=true' in contents))


###################################################################################################
def get_platform_name() -> str:
    """Determine the current host platform name.

    Returns:
        Platform name string: 'linux', 'macos', 'windows', or 'unknown'
    """
    plat = sys.platform
    if plat.startswith("linux"):
        return "linux"
    elif plat == "darwin":
        return "macos"
    elif plat.startswith("win"):
        return "windows"
    else:
        return "unknown"


def get_compose_architecture(machine: Optional[str] = None) -> str:
    """Map a `uname -m` value to the docker compose release asset suffix."""
    raw_machine = machine if machine is not None else platform.machine()
    try:
        return COMPOSE_ARCHITECTURES[raw_machine.lower()]
    except KeyError:
        raise UnsupportedArchitectureError(raw_machine) from None


def get_invoking_user(environ: Optional[Mapping[str, str]] = None) -> str:
    """The user who ran the installer, looking through sudo when it was used.

    Raises UnknownUserError when neither the environment nor the password
    database names one.
    """
    env = os.environ if environ is None else environ
    if user := (env.get('SUDO_USER') or env.get('USER')):
        return user
    try:
        return getpass.getuser()
    except (OSError, KeyError) as e:
        raise UnknownUserError("Cannot determine the invoking user; use --docker-user") from e


###################################################################################################
# download to file
def DownloadToFile(url, local_filename, debug=False):
    r = requests.get(url, stream=True, allow_redirects=True, timeout=60)
    r.raise_for_status()
    with open(local_filename, 'wb') as f:
        for chunk in r.iter_content(chunk_size=1024):
            if chunk:
                f.write(chunk)
    fExists = os.path.isfile(local_filename)
    fSize = os.path.getsize(local_filename) if fExists else 0
    if debug:
        eprint(f"Download of {url} to {local_filename} {'succeeded' if fExists else 'failed'} ({fSize} bytes)")
    return fExists and (fSize > 0)


###################################################################################################
# Snapshot of system facts at import-time so they're reusable anywhere.
SYSTEM_INFO: dict[str, object] = {
    "platform": platform.system(),
    "platform_name": get_platform_name(),
    "machine": platform.machine(),
    "uid": os.getuid() if hasattr(os, "getuid") else -1,
    "wsl": detect_wsl(),
}

__all__ = [
    "OsRelease",
    "get_os_release",
    "detect_wsl",
    "wsl_systemd_enabled",
    "get_platform_name",
    "get_compose_architecture",
    "get_invoking_user",
    "DownloadToFile",
    "SYSTEM_INFO",
]
