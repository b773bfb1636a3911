"""Tests for root detection and sudo handling."""

import io
import os
import sys

import pytest

from linux_context import privilege


class TtyInput(io.StringIO):
    """A stdin that claims to be a terminal."""

    def isatty(self):
        return True


class ExecCalled(Exception):
    pass


@pytest.fixture
def capture_exec(monkeypatch):
    calls = []

    def fake_execvp(file, args):
        calls.append((file, args))
        raise ExecCalled()

    monkeypatch.setattr(os, "execvp", fake_execvp)
    return calls


class TestElevatedCommand:

    def test_root(self, as_root, no_commands):
        assert privilege.elevated_command(["dmesg"]) == ["dmesg"]

    def test_user_with_sudo(self, as_user, fake_commands):
        fake_commands.add("sudo")

        assert privilege.elevated_command(["dmesg"]) == ["sudo", "-n", "dmesg"]

    def test_user_without_sudo(self, as_user, no_commands):
        assert privilege.elevated_command(["dmesg"]) is None


class TestOfferElevation:

    def test_already_root(self, as_root, capture_exec):
        assert privilege.offer_elevation(["-a"], stdin=TtyInput("y\n"), stderr=io.StringIO()) is True
        assert capture_exec == []

    def test_not_a_terminal(self, as_user, fake_commands, capture_exec):
        fake_commands.add("sudo")
        stderr = io.StringIO()

        assert privilege.offer_elevation(["-a"], stdin=io.StringIO("y\n"), stderr=stderr) is False
        assert capture_exec == []
        assert stderr.getvalue() == ""

    def test_no_sudo(self, as_user, no_commands, capture_exec):
        assert privilege.offer_elevation(["-a"], stdin=TtyInput("y\n"), stderr=io.StringIO()) is False
        assert capture_exec == []

    def test_declined(self, as_user, fake_commands, capture_exec):
        fake_commands.add("sudo")
        stderr = io.StringIO()

        assert privilege.offer_elevation(["-a"], stdin=TtyInput("n\n"), stderr=stderr) is False
        assert capture_exec == []
        assert privilege.ELEVATION_PROMPT in stderr.getvalue()

    def test_end_of_input_declines(self, as_user, fake_commands, capture_exec):
        fake_commands.add("sudo")

        assert privilege.offer_elevation(["-a"], stdin=TtyInput(""), stderr=io.StringIO()) is False
        assert capture_exec == []

    def test_accepted_replaces_process(self, as_user, fake_commands, capture_exec):
        fake_commands.add("sudo")

        with pytest.raises(ExecCalled):
            privilege.offer_elevation(["-uE"], stdin=TtyInput("yes\n"), stderr=io.StringIO())

        assert capture_exec == [("sudo", privilege.reexec_command(["-uE"]))]


class TestReexecCommand:

    def test_forwards_package_location(self):
        package_root = os.path.dirname(os.path.dirname(os.path.abspath(privilege.__file__)))

        assert privilege.reexec_command(["-a"]) == [
            "sudo", "env", f"PYTHONPATH={package_root}", sys.executable, "-m", "linux_context", "-a",
        ]

    def test_package_root_holds_package(self):
        pythonpath = privilege.reexec_command([])[2]
        package_root = pythonpath.split("=", 1)[1]

        assert os.path.isfile(os.path.join(package_root, "linux_context", "__init__.py"))
