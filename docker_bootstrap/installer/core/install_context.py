#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import argparse

from dataclasses import dataclass, field
from typing import Optional

from docker_bootstrap.bootstrap_constants import (
    COMPOSE_PLUGIN_PATH,
    MIN_DOCKER_VERSION,
    OS_RELEASE_FILE,
    PROC_VERSION_FILE,
    WSL_CONF_FILE,
)
from docker_bootstrap.bootstrap_common import get_invoking_user


@dataclass
class InstallContext:
    """Installation choices for a single run, resolved from arguments and environment."""

    min_docker_version: str = MIN_DOCKER_VERSION
    docker_user: str = field(default_factory=get_invoking_user)

    # fetch the compose plugin from GitHub when no package provided it
    install_compose_fallback: bool = True

    # re-execute through sudo when not already root
    allow_sudo: bool = True

    os_release_file: str = OS_RELEASE_FILE
    proc_version_file: str = PROC_VERSION_FILE
    wsl_conf_file: str = WSL_CONF_FILE
    compose_plugin_path: str = COMPOSE_PLUGIN_PATH

    # set once the host is found already provisioned
    already_satisfied: bool = field(default=False, init=False)

    @classmethod
    def from_args(cls, parsed_args: argparse.Namespace) -> "InstallContext":
        docker_user: Optional[str] = getattr(parsed_args, "dockerUser", None)
        return cls(
            min_docker_version=getattr(parsed_args, "minDockerVersion", None) or MIN_DOCKER_VERSION,
            docker_user=docker_user or get_invoking_user(),
            install_compose_fallback=not getattr(parsed_args, "skipComposeFallback", False),
            allow_sudo=not getattr(parsed_args, "noSudo", False),
            os_release_file=getattr(parsed_args, "osReleaseFile", None) or OS_RELEASE_FILE,
        )
