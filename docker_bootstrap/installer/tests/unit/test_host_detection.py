#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""unit tests for os-release parsing, WSL detection and other host facts."""

import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from docker_bootstrap.bootstrap_common import (
    detect_wsl,
    get_compose_architecture,
    get_invoking_user,
    get_os_release,
    wsl_systemd_enabled,
)
from docker_bootstrap.installer.utils.exceptions import (
    OsReleaseError,
    UnknownUserError,
    UnsupportedArchitectureError,
)

UBUNTU_OS_RELEASE = """PRETTY_NAME="Ubuntu 24.04.1 LTS"
NAME="Ubuntu"
VERSION_ID="24.04"
VERSION="24.04.1 LTS (Noble Numbat)"
VERSION_CODENAME=noble
ID=ubuntu
ID_LIKE=debian
HOME_URL="https://www.ubuntu.com/"
UBUNTU_CODENAME=noble
"""

MINT_OS_RELEASE = """NAME="Linux Mint"
VERSION="22 (Wilma)"
ID=linuxmint
ID_LIKE="ubuntu debian"
VERSION_ID="22"
VERSION_CODENAME=wilma
UBUNTU_CODENAME=noble
"""

ROCKY_OS_RELEASE = """NAME="Rocky Linux"
VERSION="9.4 (Blue Onyx)"
ID="rocky"
ID_LIKE="rhel centos fedora"
VERSION_ID="9.4"
"""


class HostFileTest(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write(self, name, contents):
        path = os.path.join(self.temp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(contents)
        return path


class TestGetOsRelease(HostFileTest):
    def test_ubuntu(self):
        info = get_os_release(self.write("os-release", UBUNTU_OS_RELEASE))
        self.assertEqual(info.id, "ubuntu")
        self.assertEqual(info.id_like, "debian")
        self.assertEqual(info.version_id, "24.04")
        self.assertEqual(info.version_codename, "noble")
        self.assertEqual(info.ubuntu_codename, "noble")
        self.assertEqual(info.name, "Ubuntu")

    def test_quoted_id_like(self):
        info = get_os_release(self.write("os-release", MINT_OS_RELEASE))
        self.assertEqual(info.id, "linuxmint")
        self.assertEqual(info.id_like_list, ["ubuntu", "debian"])
        self.assertEqual(info.ubuntu_codename, "noble")

    def test_missing_optional_fields(self):
        info = get_os_release(self.write("os-release", ROCKY_OS_RELEASE))
        self.assertEqual(info.id, "rocky")
        self.assertEqual(info.version_codename, "")

    def test_missing_file(self):
        path = os.path.join(self.temp_dir, "does-not-exist")
        with self.assertRaises(OsReleaseError) as cm:
            get_os_release(path)
        self.assertEqual(str(cm.exception), f"Cannot read {path}")

    def test_file_without_id(self):
        with self.assertRaises(OsReleaseError):
            get_os_release(self.write("os-release", 'NAME="Mystery"\nVERSION_ID="1"\n'))


class TestWslDetection(HostFileTest):
    def test_wsl2_kernel(self):
        path = self.write(
            "version",
            "Linux version 5.15.153.1-microsoft-standard-WSL2 (root@941d701f84f1) (gcc (GCC) 11.2.0) #1 SMP\n",
        )
        self.assertTrue(detect_wsl(path))

    def test_wsl1_kernel(self):
        path = self.write("version", "Linux version 4.4.0-19041-Microsoft (Microsoft@Microsoft.com) (gcc version 5.4.0)\n")
        self.assertTrue(detect_wsl(path))

    def test_marker_case_insensitive(self):
        self.assertTrue(detect_wsl(self.write("version", "Linux version 6.6.36.3-wsl-custom\n")))

    def test_regular_kernel(self):
        path = self.write("version", "Linux version 6.8.0-45-generic (buildd@lcy02-amd64-075) #45-Ubuntu SMP\n")
        self.assertFalse(detect_wsl(path))

    def test_unreadable(self):
        self.assertFalse(detect_wsl(os.path.join(self.temp_dir, "missing")))

    def test_systemd_enabled(self):
        self.assertTrue(wsl_systemd_enabled(self.write("wsl.conf", "[boot]\nsystemd=true\n")))

    def test_systemd_not_enabled(self):
        self.assertFalse(wsl_systemd_enabled(self.write("wsl.conf", "[automount]\nenabled=true\n")))
        self.assertFalse(wsl_systemd_enabled(os.path.join(self.temp_dir, "missing")))


class TestComposeArchitecture(unittest.TestCase):
    def test_known_machines(self):
        self.assertEqual(get_compose_architecture("x86_64"), "x86_64")
        self.assertEqual(get_compose_architecture("amd64"), "x86_64")
        self.assertEqual(get_compose_architecture("aarch64"), "aarch64")
        self.assertEqual(get_compose_architecture("arm64"), "aarch64")
        self.assertEqual(get_compose_architecture("armv7l"), "armv7")

    def test_unsupported_machine(self):
        with self.assertRaises(UnsupportedArchitectureError) as cm:
            get_compose_architecture("riscv64")
        self.assertIn("riscv64", str(cm.exception))


class TestInvokingUser(unittest.TestCase):
    def test_sudo_user_preferred(self):
        self.assertEqual(get_invoking_user({"SUDO_USER": "alice", "USER": "root"}), "alice")

    def test_user_fallback(self):
        self.assertEqual(get_invoking_user({"USER": "bob"}), "bob")

    def test_empty_sudo_user_ignored(self):
        self.assertEqual(get_invoking_user({"SUDO_USER": "", "USER": "carol"}), "carol")

    def test_no_user_anywhere(self):
        with patch("docker_bootstrap.bootstrap_common.getpass.getuser", side_effect=OSError("No username set")):
            with self.assertRaises(UnknownUserError) as cm:
                get_invoking_user({})
        self.assertIn("--docker-user", str(cm.exception))

    def test_password_database_fallback(self):
        with patch("docker_bootstrap.bootstrap_common.getpass.getuser", return_value="dave"):
            self.assertEqual(get_invoking_user({}), "dave")


if __name__ == "__main__":
    unittest.main()
