#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""RPM-based installers: RHEL clones, Fedora and Amazon Linux."""

from docker_bootstrap.bootstrap_constants import (
    DOCKER_CENTOS_REPO_URL,
    DOCKER_FEDORA_REPO_URL,
    DOCKER_PACKAGES,
    DistroFamily,
)
from docker_bootstrap.bootstrap_utils import which

from docker_bootstrap.installer.core.install_context import InstallContext
from docker_bootstrap.installer.utils.logger_utils import InstallerLogger

from .linux import LinuxInstaller


class RhelInstaller(LinuxInstaller):
    """CentOS, RHEL, Rocky, AlmaLinux, Oracle Linux (and ID_LIKE rhel/fedora/centos)."""

    family = DistroFamily.RHEL

    prerequisite_packages = ['curl', 'ca-certificates', 'gnupg']

    def install_docker(self, install_context: InstallContext) -> bool:
        self.ensure_packages(self.prerequisite_packages)
        if which('dnf'):
            self.run_allow_failure(['dnf', 'config-manager', '--add-repo', DOCKER_CENTOS_REPO_URL])
            self.run_checked(['dnf', 'install', '-y'] + DOCKER_PACKAGES)
        else:
            self.run_allow_failure(['yum-config-manager', '--add-repo', DOCKER_CENTOS_REPO_URL])
            self.run_checked(['yum', 'install', '-y'] + DOCKER_PACKAGES)
        self.enable_docker_service()
        return True


class FedoraInstaller(LinuxInstaller):
    family = DistroFamily.FEDORA

    def install_docker(self, install_context: InstallContext) -> bool:
        self.run_checked(['dnf', '-y', 'install', 'dnf-plugins-core'])
        self.run_allow_failure(['dnf', 'config-manager', '--add-repo', DOCKER_FEDORA_REPO_URL])
        self.run_checked(['dnf', 'install', '-y'] + DOCKER_PACKAGES)
        self.enable_docker_service()
        return True


class AmazonLinuxInstaller(LinuxInstaller):
    """Amazon Linux ships its own docker package; compose comes from the GitHub fallback."""

    family = DistroFamily.AMAZON

    prerequisite_packages = ['curl', 'ca-certificates']

    def install_docker(self, install_context: InstallContext) -> bool:
        self.ensure_packages(self.prerequisite_packages)
        if not self.run_allow_failure(['amazon-linux-extras', 'install', 'docker', '-y']):
            InstallerLogger.info("amazon-linux-extras unavailable, installing docker with yum")
            self.run_checked(['yum', 'install', '-y', 'docker'])
        return True
