#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Arch Linux and Manjaro installer."""

from docker_bootstrap.bootstrap_constants import DistroFamily

from docker_bootstrap.installer.core.install_context import InstallContext

from .linux import LinuxInstaller


class ArchInstaller(LinuxInstaller):
    family = DistroFamily.ARCH

    def install_docker(self, install_context: InstallContext) -> bool:
        self.run_checked(['pacman', '-Sy', '--noconfirm', '--needed', 'docker', 'docker-compose'])
        self.enable_docker_service()
        return True
