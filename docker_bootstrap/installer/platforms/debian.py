#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Debian-family installer (Ubuntu, Debian, Raspbian, Kali, Linux Mint and ID_LIKE=debian)."""

import os

import requests

from docker_bootstrap.bootstrap_common import DownloadToFile
from docker_bootstrap.bootstrap_constants import (
    APT_DOCKER_KEYRING,
    APT_DOCKER_SOURCES_LIST,
    APT_KEYRINGS_DIR,
    DOCKER_DOWNLOAD_URL,
    DOCKER_APT_REPO_DISTROS,
    DOCKER_PACKAGES,
    DistroFamily,
    PLATFORM_LINUX_DEBIAN,
    PLATFORM_LINUX_UBUNTU,
)
from docker_bootstrap.bootstrap_utils import temporary_filename, which

from docker_bootstrap.installer.core.install_context import InstallContext
from docker_bootstrap.installer.utils.exceptions import DownloadError
from docker_bootstrap.installer.utils.logger_utils import InstallerLogger

from .linux import LinuxInstaller


class DebianInstaller(LinuxInstaller):
    """Install Docker from download.docker.com's APT repository."""

    family = DistroFamily.DEBIAN

    prerequisite_packages = ['ca-certificates', 'curl', 'gnupg', 'lsb-release']

    @property
    def repo_distro(self) -> str:
        """Map the distribution to a repository download.docker.com actually publishes."""
        if self.distro in DOCKER_APT_REPO_DISTROS:
            return self.distro
        if (PLATFORM_LINUX_UBUNTU in self.os_release.id_like_list) or self.os_release.ubuntu_codename:
            return PLATFORM_LINUX_UBUNTU
        return PLATFORM_LINUX_DEBIAN

    @property
    def repo_url(self) -> str:
        return f"{DOCKER_DOWNLOAD_URL}/{self.repo_distro}"

    def _get_codename(self) -> str:
        """VERSION_CODENAME, else lsb_release -cs, else "stable".

        Ubuntu derivatives use the Ubuntu release they are built on.
        """
        if (self.distro != PLATFORM_LINUX_UBUNTU) and self.os_release.ubuntu_codename:
            return self.os_release.ubuntu_codename
        if self.codename:
            return self.codename
        if which('lsb_release'):
            err, out = self.run_process(['lsb_release', '-cs'], stderr=False)
            if (err == 0) and out and out[0].strip():
                return out[0].strip().lower()
        return "stable"

    def _get_dpkg_architecture(self) -> str:
        err, out = self.run_process(['dpkg', '--print-architecture'], stderr=False)
        if (err == 0) and out:
            return out[0].strip()
        return "amd64"

    def _install_keyring(self):
        """Fetch and dearmor Docker's signing key unless it is already in place."""
        if self.is_dry_run():
            InstallerLogger.info(self.control_flow.would(f"create {APT_KEYRINGS_DIR}"))
        else:
            os.makedirs(APT_KEYRINGS_DIR, mode=0o755, exist_ok=True)
            os.chmod(APT_KEYRINGS_DIR, 0o755)

        if os.path.isfile(APT_DOCKER_KEYRING):
            InstallerLogger.debug(f"{APT_DOCKER_KEYRING} already present")
            return

        key_url = f"{self.repo_url}/gpg"
        if self.is_dry_run():
            InstallerLogger.info(self.control_flow.would(f"download {key_url} to {APT_DOCKER_KEYRING}"))
            return

        InstallerLogger.info(f"Requesting Docker GPG key from {key_url}")
        with temporary_filename('.gpg') as armored_gpg_filename:
            try:
                downloaded = DownloadToFile(key_url, armored_gpg_filename, debug=self.debug)
            except requests.RequestException as e:
                raise DownloadError(key_url, e) from e
            if not downloaded:
                raise DownloadError(key_url, "empty response")
            self.run_checked(
                ['gpg', '--batch', '--yes', '--dearmor', '--output', APT_DOCKER_KEYRING, armored_gpg_filename]
            )
        os.chmod(APT_DOCKER_KEYRING, 0o644)

    def sources_list_entry(self) -> str:
        return (
            f"deb [arch={self._get_dpkg_architecture()} signed-by={APT_DOCKER_KEYRING}] "
            f"{self.repo_url} {self._get_codename()} stable\n"
        )

    def install_docker(self, install_context: InstallContext) -> bool:
        self.ensure_packages(self.prerequisite_packages)
        self._install_keyring()
        self.write_file(APT_DOCKER_SOURCES_LIST, self.sources_list_entry())
        self.run_checked(['apt-get', 'update', '-y'])
        self.run_checked(
            ['apt-get', 'install', '-y'] + DOCKER_PACKAGES,
            env={"DEBIAN_FRONTEND": "noninteractive"},
        )
        return True
