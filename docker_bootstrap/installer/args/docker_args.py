#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Docker installation arguments for the Docker bootstrap installer
"""

import os

from docker_bootstrap.bootstrap_constants import (
    MIN_DOCKER_VERSION,
    MIN_DOCKER_VERSION_ENV,
    OS_RELEASE_FILE,
)


def add_docker_args(parser):
    """
    Add Docker installation arguments to the parser

    Args:
        parser: ArgumentParser to add arguments to
    """
    dockerArgGroup = parser.add_argument_group("Docker Installation Options")

    dockerArgGroup.add_argument(
        "--min-docker-version",
        dest="minDockerVersion",
        metavar="<version>",
        type=str,
        default=os.getenv(MIN_DOCKER_VERSION_ENV, MIN_DOCKER_VERSION),
        help=f"Minimum Docker Engine version treated as already installed (default {MIN_DOCKER_VERSION})",
    )
    dockerArgGroup.add_argument(
        "--docker-user",
        dest="dockerUser",
        metavar="<username>",
        type=str,
        default=None,
        help="User to add to the docker group (default: the invoking user)",
    )
    dockerArgGroup.add_argument(
        "--skip-compose-fallback",
        dest="skipComposeFallback",
        action="store_true",
        default=False,
        help="Don't download the compose plugin from GitHub when no package provided it",
    )
    dockerArgGroup.add_argument(
        "--os-release-file",
        dest="osReleaseFile",
        metavar="<path>",
        type=str,
        default=OS_RELEASE_FILE,
        help="os-release file used to identify the distribution",
    )
    dockerArgGroup.add_argument(
        "--no-sudo",
        dest="noSudo",
        action="store_true",
        default=False,
        help="Fail instead of re-running through sudo when not root",
    )
