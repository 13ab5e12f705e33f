#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Base installer class for the distribution-specific Docker installers."""

import abc
import os
import subprocess
import time
from typing import Dict, List, Optional, Tuple

from docker_bootstrap.bootstrap_common import OsRelease
from docker_bootstrap.bootstrap_constants import DistroFamily
from docker_bootstrap.bootstrap_utils import flatten, get_iterable

from docker_bootstrap.installer.configs.constants.enums import ControlFlow
from docker_bootstrap.installer.core.install_context import InstallContext
from docker_bootstrap.installer.utils.exceptions import CommandFailedError
from docker_bootstrap.installer.utils.logger_utils import InstallerLogger


class BaseInstaller(abc.ABC):
    """Abstract base class for distribution-family Docker installers."""

    # the family this installer handles, set by subclasses
    family: Optional[DistroFamily] = None

    def __init__(
        self,
        os_release: OsRelease,
        debug: bool = False,
        control_flow: ControlFlow | None = None,
    ):
        """Initialize the base installer.

        Args:
            os_release: Parsed /etc/os-release of the host
            debug: Enable debug output
            control_flow: DRYRUN logs intended actions only; INSTALL (default) makes changes
        """
        self.os_release = os_release
        self.distro = os_release.id
        self.debug = debug
        self.control_flow: ControlFlow = control_flow or ControlFlow.INSTALL

    def is_dry_run(self) -> bool:
        return self.control_flow.is_dry_run()

    @abc.abstractmethod
    def install_docker(self, install_context: InstallContext) -> bool:
        """Install Docker Engine and the compose plugin from this family's repositories.

        Returns:
            True if successful; mandatory step failures raise CommandFailedError
        """
        raise NotImplementedError

    @abc.abstractmethod
    def install(self, install_context: InstallContext) -> bool:
        """Execute the full ordered installation flow for this host."""
        raise NotImplementedError

    def run_process(
        self,
        command: List[str],
        stdin: str = None,
        retry: int = 0,
        retry_sleep_sec: int = 5,
        stderr: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> Tuple[int, List[str]]:
        """Run a system process and return its exit code and output lines."""
        retcode = -1
        output = []
        flat_command = list(flatten(get_iterable(command)))
        process_env = {**os.environ, **env} if env else None

        for i in range(retry + 1):
            output = []
            try:
                process = subprocess.run(
                    flat_command,
                    input=stdin if stdin else None,
                    capture_output=True,
                    check=False,
                    text=True,
                    errors="ignore",
                    env=process_env,
                )
                retcode = process.returncode
                if process.stdout:
                    output.extend(process.stdout.splitlines())
                if stderr and process.stderr:
                    output.extend(process.stderr.splitlines())
            except FileNotFoundError:
                output = [f"Command {' '.join(flat_command)} not found or unable to execute"]
                retcode = 127
                break
            except OSError as e:
                output = [f"Error executing command {' '.join(flat_command)}: {e}"]
                retcode = 1

            if retcode == 0:
                break

            if i < retry:
                InstallerLogger.warning(
                    f"Command failed (attempt {i+1}/{retry+1}). Retrying in {retry_sleep_sec} seconds..."
                )
                time.sleep(retry_sleep_sec)

        if self.debug:
            InstallerLogger.debug(f"Command {' '.join(flat_command)} returned {retcode}: {output}")

        return retcode, output

    def run_checked(
        self,
        command: List[str],
        stdin: str = None,
        env: Optional[Dict[str, str]] = None,
    ) -> List[str]:
        """Run a system-changing command that must succeed.

        In dry-run mode the command is only logged. Raises CommandFailedError on a non-zero exit.
        """
        flat_command = list(flatten(get_iterable(command)))
        if self.is_dry_run():
            InstallerLogger.info(self.control_flow.would(f"run: {' '.join(flat_command)}"))
            return []
        InstallerLogger.info(f"Running: {' '.join(flat_command)}")
        err, out = self.run_process(flat_command, stdin=stdin, env=env)
        if err != 0:
            raise CommandFailedError(flat_command, err, out)
        return out

    def run_allow_failure(
        self,
        command: List[str],
        env: Optional[Dict[str, str]] = None,
    ) -> bool:
        """Run a system-changing command whose failure is logged and otherwise ignored."""
        flat_command = list(flatten(get_iterable(command)))
        if self.is_dry_run():
            InstallerLogger.info(self.control_flow.would(f"run: {' '.join(flat_command)}"))
            return True
        err, out = self.run_process(flat_command, env=env)
        if err != 0:
            InstallerLogger.warning(f"{' '.join(flat_command)} failed (ignored): {out[-1] if out else err}")
        return err == 0

    def write_file(self, path: str, contents: str, mode: Optional[int] = None) -> bool:
        """Write a configuration file, honoring dry-run."""
        if self.is_dry_run():
            InstallerLogger.info(self.control_flow.would(f"write {path}"))
            return True
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(contents)
        if mode is not None:
            os.chmod(path, mode)
        InstallerLogger.debug(f"Wrote {path}")
        return True
