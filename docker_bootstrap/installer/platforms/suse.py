#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""openSUSE (Leap/Tumbleweed) and SLES installer."""

from docker_bootstrap.bootstrap_constants import (
    DOCKER_DOWNLOAD_URL,
    DOCKER_SLES_GPG_URL,
    DistroFamily,
    ZYPP_DOCKER_REPO_FILE,
)

from docker_bootstrap.installer.core.install_context import InstallContext

from .linux import LinuxInstaller

ZYPPER = ['zypper', '--non-interactive']


class SuseInstaller(LinuxInstaller):
    family = DistroFamily.SUSE

    prerequisite_packages = ['curl', 'ca-certificates', 'gpg2']
    docker_packages = ['docker-ce', 'docker-ce-cli', 'containerd.io', 'docker-compose-plugin']

    def repo_definition(self) -> str:
        # $basearch is expanded by zypper, not by us
        return (
            "[docker-ce-stable]\n"
            "name=Docker CE Stable - x86_64\n"
            f"baseurl={DOCKER_DOWNLOAD_URL}/sles/{self.release}/$basearch/stable\n"
            "enabled=1\n"
            "gpgcheck=1\n"
            f"gpgkey={DOCKER_SLES_GPG_URL}\n"
        )

    def install_docker(self, install_context: InstallContext) -> bool:
        self.run_checked(ZYPPER + ['install'] + self.prerequisite_packages)
        self.run_allow_failure(['rpm', '--import', DOCKER_SLES_GPG_URL])
        self.write_file(ZYPP_DOCKER_REPO_FILE, self.repo_definition())
        self.run_checked(ZYPPER + ['refresh'])
        self.run_checked(ZYPPER + ['install'] + self.docker_packages)
        self.enable_docker_service()
        return True
