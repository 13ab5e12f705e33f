#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Alpine Linux installer (apk + OpenRC)."""

from docker_bootstrap.bootstrap_constants import DOCKER_SERVICE, DistroFamily

from docker_bootstrap.installer.core.install_context import InstallContext

from .linux import LinuxInstaller


class AlpineInstaller(LinuxInstaller):
    family = DistroFamily.ALPINE

    def install_docker(self, install_context: InstallContext) -> bool:
        self.run_checked(['apk', 'update'])
        self.run_checked(['apk', 'add', '--no-cache', 'docker', 'docker-cli-compose'])
        self.enable_docker_service()
        return True

    def enable_docker_service(self) -> bool:
        """OpenRC rather than systemd."""
        return self.run_allow_failure(['rc-update', 'add', DOCKER_SERVICE, 'default'])
