#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Tests for the post-install actions shared by every distribution family."""

import os
import sys
import unittest
from unittest.mock import MagicMock, patch

import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..", "..")))

from docker_bootstrap.installer.actions import shared as shared_actions
from docker_bootstrap.installer.configs.constants.enums import ControlFlow, InstallerResult
from docker_bootstrap.installer.platforms import DebianInstaller
from docker_bootstrap.installer.tests.mock.test_framework import (
    BaseInstallerTest,
    available_commands,
    make_os_release,
)

UBUNTU = make_os_release("ubuntu", id_like="debian", version_codename="noble")


class SharedActionTest(BaseInstallerTest):
    commands = ("apt-get", "docker", "systemctl", "service")

    def setUp(self):
        super().setUp()
        self.installer = self.create_installer(DebianInstaller, UBUNTU, self.commands)

    def run_action(self, action, *args, **kwargs):
        with available_commands(self.commands):
            return action(self.installer, *args, **kwargs)


class TestDockerVersionCheck(SharedActionTest):
    def test_recent_docker_is_ok(self):
        self.recorder.results["docker version"] = (0, ["27.3.1"])
        self.assertTrue(self.run_action(shared_actions.docker_ok, "24.0.0"))

    def test_packaged_version_suffix(self):
        self.recorder.results["docker version"] = (0, ["26.1.3+dfsg1"])
        self.assertTrue(self.run_action(shared_actions.docker_ok, "24.0.0"))

    def test_old_docker_is_not_ok(self):
        self.recorder.results["docker version"] = (0, ["20.10.24"])
        self.assertFalse(self.run_action(shared_actions.docker_ok, "24.0.0"))

    def test_daemon_not_running(self):
        self.recorder.results["docker version"] = (1, ["Cannot connect to the Docker daemon"])
        self.assertFalse(self.run_action(shared_actions.docker_ok, "24.0.0"))

    def test_docker_missing(self):
        self.commands = ("apt-get",)
        self.assertFalse(self.run_action(shared_actions.docker_ok, "24.0.0"))
        self.assertFalse(self.recorder.ran("docker"))


class TestStartDockerService(SharedActionTest):
    def test_systemd_unit_present(self):
        self.recorder.results["systemctl list-unit-files"] = (0, ["docker.service   enabled   enabled"])
        status, _ = self.run_action(shared_actions.start_docker_service)
        self.assertEqual(status, InstallerResult.SUCCESS)
        self.assertTrue(self.recorder.ran("systemctl start docker"))
        self.assertFalse(self.recorder.ran("service"))

    def test_no_systemd_unit_falls_back_to_service(self):
        self.recorder.results["systemctl list-unit-files"] = (0, ["ssh.service   enabled   enabled"])
        status, _ = self.run_action(shared_actions.start_docker_service)
        self.assertEqual(status, InstallerResult.SUCCESS)
        self.assertTrue(self.recorder.ran("service docker start"))
        self.assertFalse(self.recorder.ran("systemctl start docker"))

    def test_service_start_failure(self):
        self.commands = ("service",)
        self.recorder.results["service docker start"] = (1, ["docker: unrecognized service"])
        status, _ = self.run_action(shared_actions.start_docker_service)
        self.assertEqual(status, InstallerResult.FAILURE)

    def test_no_service_manager(self):
        self.commands = ()
        status, message = self.run_action(shared_actions.start_docker_service)
        self.assertEqual(status, InstallerResult.SKIPPED)
        self.assertEqual(self.recorder.commands, [])


class TestEnsureDockerGroup(SharedActionTest):
    def test_group_created_and_user_added(self):
        self.recorder.results["getent group docker"] = (2, [])
        self.recorder.results["id -nG alice"] = (0, ["alice adm sudo"])
        status, message = self.run_action(shared_actions.ensure_docker_group, "alice")
        self.assertEqual(status, InstallerResult.SUCCESS)
        self.assertEqual(message, "Added user 'alice' to docker group.")
        self.assertEqual(
            self.recorder.command_strings,
            ["getent group docker", "groupadd docker", "id -nG alice", "usermod -aG docker alice"],
        )

    def test_existing_group_not_recreated(self):
        self.recorder.results["getent group docker"] = (0, ["docker:x:998:"])
        self.recorder.results["id -nG bob"] = (0, ["bob"])
        self.run_action(shared_actions.ensure_docker_group, "bob")
        self.assertFalse(self.recorder.ran("groupadd"))
        self.assertTrue(self.recorder.ran("usermod -aG docker bob"))

    def test_user_already_member(self):
        self.recorder.results["id -nG alice"] = (0, ["alice sudo docker"])
        status, message = self.run_action(shared_actions.ensure_docker_group, "alice")
        self.assertEqual(status, InstallerResult.SKIPPED)
        self.assertEqual(message, "User 'alice' already in docker group.")
        self.assertFalse(self.recorder.ran("usermod"))

    def test_similar_group_name_is_not_membership(self):
        self.recorder.results["id -nG alice"] = (0, ["alice docker-users"])
        status, _ = self.run_action(shared_actions.ensure_docker_group, "alice")
        self.assertEqual(status, InstallerResult.SUCCESS)
        self.assertTrue(self.recorder.ran("usermod -aG docker alice"))

    def test_dry_run(self):
        self.installer = self.create_installer(DebianInstaller, UBUNTU, self.commands, ControlFlow.DRYRUN)
        self.recorder.results["getent group docker"] = (2, [])
        self.recorder.results["id -nG alice"] = (0, ["alice"])
        status, message = self.run_action(shared_actions.ensure_docker_group, "alice")
        self.assertEqual(status, InstallerResult.SUCCESS)
        self.assertTrue(message.startswith("Dry run: would "))
        self.assertEqual(self.recorder.command_strings, ["getent group docker", "id -nG alice"])


class TestComposePluginFallback(SharedActionTest):
    def setUp(self):
        super().setUp()
        self.target = os.path.join(self.temp_dir, "cli-plugins", "docker-compose")
        self.download = patch.object(shared_actions, "DownloadToFile", side_effect=self._fake_download).start()
        self.addCleanup(patch.stopall)

    def _fake_download(self, url, local_filename, debug=False):
        with open(local_filename, "wb") as f:
            f.write(b"\x7fELF")
        return True

    def test_plugin_already_available(self):
        self.recorder.results["docker compose version"] = (0, ["Docker Compose version v2.29.7"])
        status, _ = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)
        self.assertEqual(status, InstallerResult.SKIPPED)
        self.download.assert_not_called()

    def test_download_for_x86_64(self):
        self.recorder.results["docker compose version"] = (1, [])
        status, message = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)
        self.assertEqual(status, InstallerResult.SUCCESS)
        self.download.assert_called_once()
        self.assertEqual(
            self.download.call_args[0][0],
            "https://github.com/docker/compose/releases/latest/download/docker-compose-linux-x86_64",
        )
        self.assertEqual(os.stat(self.target).st_mode & 0o777, 0o755)
        self.assertIn(self.target, message)

    def test_download_for_arm64(self):
        self.recorder.results["docker compose version"] = (1, [])
        self.run_action(shared_actions.install_compose_plugin_manually, "arm64", self.target)
        self.assertTrue(self.download.call_args[0][0].endswith("docker-compose-linux-aarch64"))

    def test_unsupported_architecture(self):
        self.recorder.results["docker compose version"] = (1, [])
        status, message = self.run_action(shared_actions.install_compose_plugin_manually, "s390x", self.target)
        self.assertEqual(status, InstallerResult.FAILURE)
        self.assertEqual(message, "Unsupported arch for manual compose plugin: s390x")
        self.download.assert_not_called()

    def test_download_failure(self):
        self.recorder.results["docker compose version"] = (1, [])
        self.download.side_effect = None
        self.download.return_value = False
        status, _ = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)
        self.assertEqual(status, InstallerResult.FAILURE)

    def test_dry_run(self):
        self.installer = self.create_installer(DebianInstaller, UBUNTU, self.commands, ControlFlow.DRYRUN)
        self.recorder.results["docker compose version"] = (1, [])
        status, _ = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)
        self.assertEqual(status, InstallerResult.SKIPPED)
        self.download.assert_not_called()
        self.assertFalse(os.path.exists(os.path.dirname(self.target)))


class TestComposePluginDownload(SharedActionTest):
    """The compose fallback going through the real DownloadToFile with requests.get mocked."""

    url = "https://github.com/docker/compose/releases/latest/download/docker-compose-linux-x86_64"

    def setUp(self):
        super().setUp()
        self.target = os.path.join(self.temp_dir, "cli-plugins", "docker-compose")
        self.recorder.results["docker compose version"] = (1, [])
        self.get = patch("docker_bootstrap.bootstrap_common.requests.get").start()
        self.addCleanup(patch.stopall)

    def _response(self, chunks=(), status_error=None):
        response = MagicMock()
        if status_error:
            response.raise_for_status.side_effect = status_error
        response.iter_content.return_value = chunks
        return response

    def test_streams_chunks_to_target(self):
        self.get.return_value = self._response([b"\x7fELF", b"", b"\x02\x01\x01"])
        status, _ = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)

        self.assertEqual(status, InstallerResult.SUCCESS)
        self.get.assert_called_once_with(self.url, stream=True, allow_redirects=True, timeout=60)
        with open(self.target, "rb") as f:
            self.assertEqual(f.read(), b"\x7fELF\x02\x01\x01")
        self.assertEqual(os.stat(self.target).st_mode & 0o777, 0o755)

    def test_http_error(self):
        self.get.return_value = self._response(status_error=requests.HTTPError("404 Client Error: Not Found"))
        status, message = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)

        self.assertEqual(status, InstallerResult.FAILURE)
        self.assertIn("404 Client Error", message)
        self.assertFalse(os.path.exists(self.target))

    def test_connection_error(self):
        self.get.side_effect = requests.ConnectionError("Failed to establish a new connection")
        status, message = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)

        self.assertEqual(status, InstallerResult.FAILURE)
        self.assertIn("Failed to establish a new connection", message)
        self.assertFalse(os.path.exists(self.target))

    def test_interrupted_stream_leaves_no_partial_binary(self):
        def chunks():
            yield b"\x7fELF"
            raise requests.ConnectionError("Connection broken: IncompleteRead")

        self.get.return_value = self._response(chunks())
        status, _ = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)

        self.assertEqual(status, InstallerResult.FAILURE)
        self.assertFalse(os.path.exists(self.target))

    def test_empty_response(self):
        self.get.return_value = self._response([])
        status, _ = self.run_action(shared_actions.install_compose_plugin_manually, "x86_64", self.target)

        self.assertEqual(status, InstallerResult.FAILURE)
        self.assertFalse(os.path.exists(self.target))


class TestWslNote(BaseInstallerTest):
    def test_not_wsl(self):
        status, _ = shared_actions.print_wsl_note(self.proc_version_file, self.wsl_conf_file)
        self.assertEqual(status, InstallerResult.SKIPPED)

    def test_wsl_without_systemd(self):
        proc_version = self.write_temp_file("wsl_version", "Linux version 5.15.153.1-microsoft-standard-WSL2\n")
        with patch.object(shared_actions.InstallerLogger, "block") as block:
            status, _ = shared_actions.print_wsl_note(proc_version, self.wsl_conf_file)
        self.assertEqual(status, InstallerResult.SUCCESS)
        block.assert_called_once_with(shared_actions.WSL_SYSTEMD_NOTE)
        self.assertIn("systemd=true", shared_actions.WSL_SYSTEMD_NOTE)
        self.assertIn("sudo service docker start", shared_actions.WSL_SYSTEMD_NOTE)

    def test_wsl_with_systemd(self):
        proc_version = self.write_temp_file("wsl_version", "Linux version 5.15.153.1-microsoft-standard-WSL2\n")
        wsl_conf = self.write_temp_file("wsl.conf", "[boot]\nsystemd=true\n")
        with patch.object(shared_actions.InstallerLogger, "block") as block:
            status, message = shared_actions.print_wsl_note(proc_version, wsl_conf)
        self.assertEqual(status, InstallerResult.SUCCESS)
        self.assertEqual(message, "WSL with systemd enabled")
        block.assert_not_called()


class TestReportStatus(SharedActionTest):
    def test_plugin(self):
        self.recorder.results["docker version"] = (0, ["27.3.1"])
        self.recorder.results["docker compose version"] = (0, ["Docker Compose version v2.29.7"])
        lines = self.run_action(shared_actions.report_status)
        self.assertEqual(lines[0], "Docker version: 27.3.1")
        self.assertEqual(lines[1], "Docker Compose (plugin): Docker Compose version v2.29.7")
        self.assertEqual(lines[2], "Idempotent install complete.")
        self.assertIn("newgrp docker", lines[3])

    def test_standalone(self):
        self.recorder.results["docker version"] = (0, ["24.0.7"])
        self.recorder.results["docker compose version"] = (1, [])
        self.recorder.results["docker-compose version"] = (0, ["docker-compose version 1.29.2, build 5becea4c"])
        lines = self.run_action(shared_actions.report_status)
        self.assertEqual(lines[1], "Docker Compose (standalone): docker-compose version 1.29.2, build 5becea4c")

    def test_nothing_found(self):
        self.commands = ()
        self.recorder.results["docker compose version"] = (127, [])
        self.recorder.results["docker-compose version"] = (127, [])
        lines = self.run_action(shared_actions.report_status)
        self.assertEqual(lines[0], "Docker version: UNKNOWN")
        self.assertEqual(lines[1], "Docker Compose not found (unexpected).")


if __name__ == "__main__":
    unittest.main()
