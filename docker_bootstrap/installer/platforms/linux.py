#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Linux installer implementation shared by every distribution family."""

from typing import List, Optional

from docker_bootstrap.bootstrap_common import OsRelease
from docker_bootstrap.bootstrap_constants import DOCKER_SERVICE, PLATFORM_LINUX
from docker_bootstrap.bootstrap_utils import which

from docker_bootstrap.installer.actions import shared as shared_actions
from docker_bootstrap.installer.configs.constants.enums import InstallerResult
from docker_bootstrap.installer.core.install_context import InstallContext
from docker_bootstrap.installer.utils.logger_utils import InstallerLogger, SkipReasons

from .base import BaseInstaller


class LinuxInstaller(BaseInstaller):
    """Linux installer: package-manager plumbing plus the ordered install flow.

    Distribution families subclass this and implement install_docker().
    """

    def __init__(
        self,
        os_release: OsRelease,
        debug: bool = False,
        control_flow=None,
    ):
        """Initialize the Linux installer."""
        super().__init__(os_release, debug, control_flow)

        self.codename = os_release.version_codename
        self.release = os_release.version_id
        self.check_package_cmd = self._get_check_package_command()
        self.install_package_cmd = self._get_install_package_command()
        self.update_repo_cmd = self._get_update_repo_command()

        if self.debug:
            InstallerLogger.debug(
                f"{PLATFORM_LINUX} installer ({self.family.value if self.family else 'generic'}) initialized for {self.distro} {self.codename} {self.release}"
            )

    def _get_check_package_command(self) -> Optional[List[str]]:
        """Determine command to use to query if a package is installed."""
        if which('dpkg'):
            return ['dpkg', '-s']
        elif which('rpm'):
            return ['rpm', '-q']
        else:
            return None

    def _get_install_package_command(self) -> Optional[List[str]]:
        """Determine command to use to install packages."""
        if which('apt-get'):
            return ['apt-get', 'install', '-y']
        elif which('dnf'):
            return ['dnf', 'install', '-y']
        elif which('yum'):
            return ['yum', 'install', '-y']
        else:
            return None

    def _get_update_repo_command(self) -> Optional[List[str]]:
        """Determine command to use to refresh package lists."""
        if which('apt-get'):
            return ['apt-get', 'update', '-y']
        else:
            return None

    def package_is_installed(self, package_name: str) -> bool:
        """Check if a package is installed."""
        if self.check_package_cmd:
            err, _ = self.run_process(self.check_package_cmd + [package_name], stderr=False)
            return err == 0
        else:
            return False

    def ensure_packages(self, packages: List[str]) -> bool:
        """Install whichever of packages are missing using apt-get, dnf or yum.

        Hosts with none of those package managers are left alone.
        """
        if not self.install_package_cmd:
            InstallerLogger.debug(f"No apt-get/dnf/yum available; not installing {packages}")
            return True

        packages_to_install = [p for p in packages if not self.package_is_installed(p)]
        if not packages_to_install:
            InstallerLogger.debug(f"All packages already installed: {packages}")
            return True

        if self.update_repo_cmd:
            self.run_checked(self.update_repo_cmd)
        self.run_checked(
            self.install_package_cmd + packages_to_install,
            env={"DEBIAN_FRONTEND": "noninteractive"},
        )
        return True

    def enable_docker_service(self) -> bool:
        """Enable the docker unit at boot; failure is not fatal."""
        return self.run_allow_failure(["systemctl", "enable", DOCKER_SERVICE])

    def _run_step(self, label: str, action, *args):
        InstallerLogger.start(label)
        status, message = action(*args)
        InstallerLogger.end(label, status, message)
        return status

    def install(self, install_context: InstallContext) -> bool:
        """Execute the full installation flow.

        Order:
          1) Docker Engine + Compose (family-specific) unless already satisfied
          2) Start the docker service
          3) docker group membership for the invoking user
          4) Compose plugin fallback from GitHub
          5) WSL guidance
          6) Final status
        """
        ctx = install_context

        # 1) Docker + Compose
        label = f"Docker Engine ({self.distro})"
        InstallerLogger.start(label)
        if shared_actions.docker_ok(self, ctx.min_docker_version) and shared_actions.have_compose(self):
            ctx.already_satisfied = True
            InstallerLogger.info(f"Docker (>= {ctx.min_docker_version}) and Compose already installed.")
            InstallerLogger.end(label, InstallerResult.SKIPPED, SkipReasons.ALREADY_SATISFIED)
        else:
            self.install_docker(ctx)
            if self.is_dry_run():
                InstallerLogger.end(label, InstallerResult.SKIPPED, SkipReasons.DRY_RUN)
            else:
                InstallerLogger.end(label, InstallerResult.SUCCESS)

        # 2) Service
        self._run_step("Docker Service", shared_actions.start_docker_service, self)

        # 3) Group membership
        self._run_step("Docker Group", shared_actions.ensure_docker_group, self, ctx.docker_user)

        # 4) Compose fallback (non-fatal)
        if ctx.install_compose_fallback:
            self._run_step(
                "Compose Plugin",
                shared_actions.install_compose_plugin_manually,
                self,
                None,
                ctx.compose_plugin_path,
            )
        else:
            InstallerLogger.debug("Compose plugin fallback disabled")

        # 5) WSL
        self._run_step("WSL", shared_actions.print_wsl_note, ctx.proc_version_file, ctx.wsl_conf_file)

        # 6) Status
        shared_actions.report_status(self)

        return True
