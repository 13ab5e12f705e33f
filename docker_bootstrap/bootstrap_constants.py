#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

from enum import Enum


###################################################################################################
PLATFORM_LINUX = "Linux"
PLATFORM_LINUX_ALMA = "almalinux"
PLATFORM_LINUX_ALPINE = "alpine"
PLATFORM_LINUX_AMAZON = "amzn"
PLATFORM_LINUX_ARCH = "arch"
PLATFORM_LINUX_CENTOS = "centos"
PLATFORM_LINUX_DEBIAN = "debian"
PLATFORM_LINUX_FEDORA = "fedora"
PLATFORM_LINUX_KALI = "kali"
PLATFORM_LINUX_MANJARO = "manjaro"
PLATFORM_LINUX_MINT = "linuxmint"
PLATFORM_LINUX_OPENSUSE = "opensuse"
PLATFORM_LINUX_ORACLE = "ol"
PLATFORM_LINUX_RASPBIAN = "raspbian"
PLATFORM_LINUX_RHEL = "rhel"
PLATFORM_LINUX_ROCKY = "rocky"
PLATFORM_LINUX_SLES = "sles"
PLATFORM_LINUX_UBUNTU = "ubuntu"


###################################################################################################
# Distribution families sharing a package manager and repository format
class DistroFamily(Enum):
    DEBIAN = "debian"
    FEDORA = "fedora"
    RHEL = "rhel"
    AMAZON = "amazon"
    SUSE = "suse"
    ALPINE = "alpine"
    ARCH = "arch"


DISTRO_FAMILY_IDS = {
    DistroFamily.DEBIAN: (
        PLATFORM_LINUX_UBUNTU,
        PLATFORM_LINUX_DEBIAN,
        PLATFORM_LINUX_RASPBIAN,
        PLATFORM_LINUX_KALI,
        PLATFORM_LINUX_MINT,
    ),
    DistroFamily.FEDORA: (PLATFORM_LINUX_FEDORA,),
    DistroFamily.RHEL: (
        PLATFORM_LINUX_CENTOS,
        PLATFORM_LINUX_RHEL,
        PLATFORM_LINUX_ROCKY,
        PLATFORM_LINUX_ALMA,
        PLATFORM_LINUX_ORACLE,
    ),
    DistroFamily.AMAZON: (PLATFORM_LINUX_AMAZON,),
    DistroFamily.SUSE: (PLATFORM_LINUX_SLES,),
    DistroFamily.ALPINE: (PLATFORM_LINUX_ALPINE,),
    DistroFamily.ARCH: (PLATFORM_LINUX_ARCH, PLATFORM_LINUX_MANJARO),
}

# any ID starting with one of these prefixes belongs to the family
DISTRO_FAMILY_ID_PREFIXES = {
    DistroFamily.SUSE: (PLATFORM_LINUX_OPENSUSE,),
}

# ID_LIKE substrings consulted (in order) when ID itself is not recognized
DISTRO_FAMILY_ID_LIKE_MARKERS = (
    (DistroFamily.DEBIAN, ("debian",)),
    (DistroFamily.RHEL, ("rhel", "fedora", "centos")),
    (DistroFamily.SUSE, ("suse",)),
)


###################################################################################################
MIN_DOCKER_VERSION = "24.0.0"
MIN_DOCKER_VERSION_ENV = "MIN_DOCKER_VERSION"

DOCKER_GROUP = "docker"
DOCKER_SERVICE = "docker"

DOCKER_PACKAGES = [
    "docker-ce",
    "docker-ce-cli",
    "containerd.io",
    "docker-buildx-plugin",
    "docker-compose-plugin",
]

DOCKER_DOWNLOAD_URL = "https://download.docker.com/linux"
DOCKER_APT_REPO_DISTROS = (PLATFORM_LINUX_UBUNTU, PLATFORM_LINUX_DEBIAN, PLATFORM_LINUX_RASPBIAN)
DOCKER_CENTOS_REPO_URL = f"{DOCKER_DOWNLOAD_URL}/centos/docker-ce.repo"
DOCKER_FEDORA_REPO_URL = f"{DOCKER_DOWNLOAD_URL}/fedora/docker-ce.repo"
DOCKER_SLES_GPG_URL = f"{DOCKER_DOWNLOAD_URL}/sles/gpg"

COMPOSE_RELEASE_URL = "https://github.com/docker/compose/releases/latest/download/docker-compose-linux-{arch}"

###################################################################################################
# Host filesystem paths
OS_RELEASE_FILE = "/etc/os-release"
PROC_VERSION_FILE = "/proc/version"
WSL_CONF_FILE = "/etc/wsl.conf"
APT_KEYRINGS_DIR = "/etc/apt/keyrings"
APT_DOCKER_KEYRING = f"{APT_KEYRINGS_DIR}/docker.gpg"
APT_DOCKER_SOURCES_LIST = "/etc/apt/sources.list.d/docker.list"
ZYPP_DOCKER_REPO_FILE = "/etc/zypp/repos.d/docker.repo"
COMPOSE_PLUGIN_PATH = "/usr/lib/docker/cli-plugins/docker-compose"

###################################################################################################
# Map of `uname -m` values to docker compose release asset suffixes
COMPOSE_ARCHITECTURES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "armv7l": "armv7",
}
