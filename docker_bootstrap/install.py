#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Idempotent Docker Engine + Docker Compose (plugin) installer for common Linux distros & WSL.

Supports: Ubuntu/Debian, Raspbian, Kali, Linux Mint, Fedora, CentOS/RHEL 8+, Rocky/Alma,
Oracle Linux, Amazon Linux 2, openSUSE (Leap/Tumbleweed)/SLES, Alpine, Arch/Manjaro,
and WSL (Debian/Ubuntu based).

After install: log out/in (or `newgrp docker`) to apply docker group membership.
"""

import argparse
import os
import sys
import traceback
from typing import List, Optional

from docker_bootstrap.bootstrap_common import SYSTEM_INFO, get_os_release
from docker_bootstrap.bootstrap_utils import which

from docker_bootstrap.installer.args.basic_args import add_basic_args
from docker_bootstrap.installer.args.docker_args import add_docker_args
from docker_bootstrap.installer.configs.constants.enums import ControlFlow, InstallerResult
from docker_bootstrap.installer.core.install_context import InstallContext
from docker_bootstrap.installer.platforms import get_platform_installer
from docker_bootstrap.installer.utils.exceptions import BootstrapError, PrivilegeError
from docker_bootstrap.installer.utils.logger_utils import InstallerLogger


###################################################################################################
def build_arg_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments specific to the installer itself"""
    add_basic_args(parser)
    add_docker_args(parser)


def ensure_root(argv: List[str], allow_sudo: bool = True) -> None:
    """Re-execute this installer through `sudo -E` when not already root.

    Does not return when re-executing. Raises PrivilegeError when root
    is required but sudo isn't an option.
    """
    if os.geteuid() == 0:
        return

    if allow_sudo and which("sudo"):
        InstallerLogger.info("Root privileges required, re-running with sudo")
        sudo_command = ["sudo", "-E", sys.executable, "-m", "docker_bootstrap"] + list(argv)
        os.execvp("sudo", sudo_command)

    raise PrivilegeError("Please run as root (no sudo available).")


def configure_logging(parsed_args: argparse.Namespace) -> None:
    if parsed_args.quiet:
        InstallerLogger.set_console_output(False)

    if parsed_args.debug:
        InstallerLogger.set_debug_enabled(True)

    # handle log file setup if --log-to-file was specified
    if parsed_args.logToFile is not None:
        if parsed_args.logToFile == "":
            log_filename = InstallerLogger.generate_timestamped_filename()
            InstallerLogger.info(f"No log filename specified, using: {log_filename}")
        else:
            log_filename = parsed_args.logToFile

        InstallerLogger.set_log_file(log_filename)
        InstallerLogger.info(f"Logging to file: {log_filename}")


def run_installation(install_context: InstallContext, control_flow: ControlFlow, debug: bool = False) -> bool:
    """Identify the distribution and run its installer's full flow."""
    InstallerLogger.start("Detecting Distribution")
    os_release = get_os_release(install_context.os_release_file)
    installer = get_platform_installer(os_release, debug, control_flow=control_flow)
    InstallerLogger.end(
        "Detecting Distribution",
        InstallerResult.SUCCESS,
        f"{os_release.name or os_release.id} ({installer.family.value} family)",
    )
    return installer.install(install_context)


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)

    parser = argparse.ArgumentParser(description="Docker Engine + Compose Installer", conflict_handler="resolve")
    build_arg_parser(parser)
    parsed_args = parser.parse_args(argv)

    configure_logging(parsed_args)
    InstallerLogger.debug(f"Arguments: {parsed_args}")

    control_flow = ControlFlow.DRYRUN if parsed_args.dryRun else ControlFlow.INSTALL

    try:
        install_context = InstallContext.from_args(parsed_args)

        if SYSTEM_INFO.get("platform_name") != "linux":
            raise BootstrapError(f"Unsupported platform: {SYSTEM_INFO.get('platform')}")

        if control_flow.should_run_install_steps():
            ensure_root(argv, allow_sudo=install_context.allow_sudo)

        install_ok = run_installation(install_context, control_flow, debug=parsed_args.debug)

    except BootstrapError as e:
        InstallerLogger.error(str(e))
        InstallerLogger.end("INSTALLER", InstallerResult.FAILURE, "Installation failed")
        return 1

    if control_flow.is_dry_run():
        InstallerLogger.end("INSTALLER", InstallerResult.SKIPPED, "Dry run: no changes made")
    elif install_ok:
        InstallerLogger.end("INSTALLER", InstallerResult.SUCCESS, "Installation completed successfully")
    else:
        InstallerLogger.end("INSTALLER", InstallerResult.FAILURE, "Installation failed")

    return 0 if install_ok else 1


def run():
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        InstallerLogger.error("Installation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        tb = traceback.format_exc()
        # Include traceback in error log so failures are actionable without --debug
        InstallerLogger.error(f"Error executing main(): {e}\n{tb}")
        sys.exit(1)


if __name__ == "__main__":
    run()
