#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Shared installer actions used by every distribution family.

Each action takes the platform installer (for run_process and dry-run
awareness) and returns an (InstallerResult, message) tuple.
"""

import os
from typing import List, Optional, Tuple

import requests

from docker_bootstrap.bootstrap_common import (
    DownloadToFile,
    detect_wsl,
    get_compose_architecture,
    wsl_systemd_enabled,
)
from docker_bootstrap.bootstrap_constants import (
    COMPOSE_PLUGIN_PATH,
    COMPOSE_RELEASE_URL,
    DOCKER_GROUP,
    DOCKER_SERVICE,
)
from docker_bootstrap.bootstrap_utils import version_ge, which

from docker_bootstrap.installer.configs.constants.enums import ComposeFlavor, InstallerResult
from docker_bootstrap.installer.utils.exceptions import UnsupportedArchitectureError
from docker_bootstrap.installer.utils.logger_utils import InstallerLogger

WSL_SYSTEMD_NOTE = """NOTE: If Docker daemon does not auto-start under WSL, either:
  - Enable systemd (WSL2 only). Add to /etc/wsl.conf:
      [boot]
      systemd=true
    Then run: wsl --shutdown (from Windows) and reopen.
  - Or start manually each session: sudo service docker start"""


###################################################################################################
# docker / compose discovery


def docker_server_version(platform) -> str:
    """Return the running daemon's version, or an empty string when it can't be queried."""
    if not which("docker"):
        return ""
    err, out = platform.run_process(["docker", "version", "--format", "{{.Server.Version}}"], stderr=False)
    if err != 0 or not out:
        return ""
    return out[0].strip()


def docker_ok(platform, min_version: str) -> bool:
    """True when docker is installed, its daemon answers, and it is at least min_version."""
    version = docker_server_version(platform)
    if not version:
        return False
    return version_ge(version, min_version, debug=platform.debug)


def discover_compose_command(runtime_bin: str, platform) -> Optional[List]:
    """
    Return a working compose invocation list for the given runtime.
    """
    candidates = [[runtime_bin, "compose"]]
    if runtime_bin in {"docker", "podman"}:
        candidates.append([f"{runtime_bin}-compose"])
    for cmd in candidates:
        rc, _ = platform.run_process(cmd + ["version"], stderr=False)
        if rc == 0:
            return cmd
    return None


def compose_flavor(platform) -> ComposeFlavor:
    cmd = discover_compose_command("docker", platform)
    if cmd == ["docker", "compose"]:
        return ComposeFlavor.PLUGIN
    elif cmd:
        return ComposeFlavor.STANDALONE
    return ComposeFlavor.MISSING


def have_compose(platform) -> bool:
    return compose_flavor(platform) != ComposeFlavor.MISSING


###################################################################################################
# post-install actions


def start_docker_service(platform) -> Tuple[InstallerResult, str]:
    """Start the docker daemon via systemd when it knows the unit, otherwise via service(8)."""
    if which("systemctl"):
        err, out = platform.run_process(["systemctl", "list-unit-files"], stderr=False)
        if err == 0 and any(f"{DOCKER_SERVICE}.service" in line for line in out):
            if platform.run_allow_failure(["systemctl", "start", DOCKER_SERVICE]):
                return InstallerResult.SUCCESS, "Started docker via systemctl"
            return InstallerResult.FAILURE, "systemctl start docker failed"

    if which("service"):
        if platform.run_allow_failure(["service", DOCKER_SERVICE, "start"]):
            return InstallerResult.SUCCESS, "Started docker via service"
        return InstallerResult.FAILURE, "service docker start failed"

    return InstallerResult.SKIPPED, "No service manager found to start docker"


def ensure_docker_group(platform, user: str) -> Tuple[InstallerResult, str]:
    """Create the docker group if needed and make sure user belongs to it."""
    err, _ = platform.run_process(["getent", "group", DOCKER_GROUP], stderr=False)
    if err != 0:
        platform.run_checked(["groupadd", DOCKER_GROUP])

    err, out = platform.run_process(["id", "-nG", user], stderr=False)
    if err == 0 and out and (DOCKER_GROUP in out[0].split()):
        message = f"User '{user}' already in {DOCKER_GROUP} group."
        InstallerLogger.info(message)
        return InstallerResult.SKIPPED, message

    platform.run_checked(["usermod", "-aG", DOCKER_GROUP, user])
    if platform.is_dry_run():
        message = platform.control_flow.would(f"add user '{user}' to {DOCKER_GROUP} group")
    else:
        message = f"Added user '{user}' to {DOCKER_GROUP} group."
    InstallerLogger.info(message)
    return InstallerResult.SUCCESS, message


def install_compose_plugin_manually(
    platform,
    machine: Optional[str] = None,
    target: str = COMPOSE_PLUGIN_PATH,
) -> Tuple[InstallerResult, str]:
    """Fetch the compose plugin binary from GitHub for distros that don't package it."""
    rc, _ = platform.run_process(["docker", "compose", "version"], stderr=False)
    if rc == 0:
        return InstallerResult.SKIPPED, "docker compose plugin already available"

    try:
        arch = get_compose_architecture(machine)
    except UnsupportedArchitectureError as e:
        InstallerLogger.error(str(e))
        return InstallerResult.FAILURE, str(e)

    url = COMPOSE_RELEASE_URL.format(arch=arch)
    if platform.is_dry_run():
        message = platform.control_flow.would(f"install docker compose plugin from {url}")
        InstallerLogger.info(message)
        return InstallerResult.SKIPPED, message

    InstallerLogger.info(f"Installing docker compose plugin from {url}")
    failure = None
    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        if DownloadToFile(url, target, debug=platform.debug):
            os.chmod(target, 0o755)
        else:
            failure = f"Download of {url} failed"
    except (requests.RequestException, OSError) as e:
        failure = f"Download of {url} failed: {e}"

    if failure:
        # never leave a partial plugin binary behind
        if os.path.isfile(target):
            os.unlink(target)
        InstallerLogger.error(failure)
        return InstallerResult.FAILURE, failure

    return InstallerResult.SUCCESS, f"Installed docker compose plugin to {target}"


def print_wsl_note(proc_version_file: str, wsl_conf_file: str) -> Tuple[InstallerResult, str]:
    """Explain how to get the daemon running under WSL when systemd isn't enabled."""
    if not detect_wsl(proc_version_file):
        return InstallerResult.SKIPPED, "Not running under WSL"

    InstallerLogger.info("Detected WSL environment.")
    if wsl_systemd_enabled(wsl_conf_file):
        return InstallerResult.SUCCESS, "WSL with systemd enabled"

    InstallerLogger.block(WSL_SYSTEMD_NOTE)
    return InstallerResult.SUCCESS, "WSL without systemd; printed startup guidance"


def report_status(platform) -> List[str]:
    """Log (and return) the final docker and compose version summary."""
    lines = [f"Docker version: {docker_server_version(platform) or 'UNKNOWN'}"]

    flavor = compose_flavor(platform)
    if flavor == ComposeFlavor.PLUGIN:
        _, out = platform.run_process(["docker", "compose", "version"], stderr=False)
        lines.append(f"Docker Compose (plugin): {out[0] if out else ''}")
    elif flavor == ComposeFlavor.STANDALONE:
        _, out = platform.run_process(["docker-compose", "version"], stderr=False)
        lines.append(f"Docker Compose (standalone): {out[0] if out else ''}")
    else:
        lines.append("Docker Compose not found (unexpected).")

    lines.append("Idempotent install complete.")
    lines.append(
        f"If this is your first install, open a new shell (or run: newgrp {DOCKER_GROUP}) to use docker without sudo."
    )
    for line in lines:
        InstallerLogger.info(line)
    return lines
