#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Distribution-family installer implementations and dispatch."""

from typing import Dict, Type

from docker_bootstrap.bootstrap_common import OsRelease
from docker_bootstrap.bootstrap_constants import (
    DISTRO_FAMILY_ID_LIKE_MARKERS,
    DISTRO_FAMILY_ID_PREFIXES,
    DISTRO_FAMILY_IDS,
    DistroFamily,
)
from docker_bootstrap.installer.utils.exceptions import UnsupportedDistributionError
from docker_bootstrap.installer.utils.logger_utils import InstallerLogger

from .base import BaseInstaller
from .linux import LinuxInstaller
from .alpine import AlpineInstaller
from .arch import ArchInstaller
from .debian import DebianInstaller
from .rhel import AmazonLinuxInstaller, FedoraInstaller, RhelInstaller
from .suse import SuseInstaller

FAMILY_INSTALLERS: Dict[DistroFamily, Type[LinuxInstaller]] = {
    DistroFamily.DEBIAN: DebianInstaller,
    DistroFamily.FEDORA: FedoraInstaller,
    DistroFamily.RHEL: RhelInstaller,
    DistroFamily.AMAZON: AmazonLinuxInstaller,
    DistroFamily.SUSE: SuseInstaller,
    DistroFamily.ALPINE: AlpineInstaller,
    DistroFamily.ARCH: ArchInstaller,
}


def select_distro_family(os_release: OsRelease) -> DistroFamily:
    """Pick exactly one distribution family from ID, falling back on ID_LIKE.

    Raises UnsupportedDistributionError when neither matches.
    """
    distro_id = os_release.id.lower()

    for family, ids in DISTRO_FAMILY_IDS.items():
        if distro_id in ids:
            return family

    for family, prefixes in DISTRO_FAMILY_ID_PREFIXES.items():
        if distro_id.startswith(prefixes):
            return family

    id_like = os_release.id_like.lower()
    for family, markers in DISTRO_FAMILY_ID_LIKE_MARKERS:
        if any(marker in id_like for marker in markers):
            InstallerLogger.debug(f"{distro_id} matched {family.value} family via ID_LIKE={id_like}")
            return family

    raise UnsupportedDistributionError(os_release.id, os_release.id_like)


def get_platform_installer(
    os_release: OsRelease,
    debug: bool = False,
    control_flow=None,
) -> LinuxInstaller:
    """Return the installer for the host's distribution family."""
    family = select_distro_family(os_release)
    return FAMILY_INSTALLERS[family](os_release, debug, control_flow=control_flow)


__all__ = [
    "BaseInstaller",
    "LinuxInstaller",
    "AlpineInstaller",
    "AmazonLinuxInstaller",
    "ArchInstaller",
    "DebianInstaller",
    "FedoraInstaller",
    "RhelInstaller",
    "SuseInstaller",
    "FAMILY_INSTALLERS",
    "select_distro_family",
    "get_platform_installer",
]
