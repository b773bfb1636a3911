"""Pytest configuration and shared fixtures for linux_context tests."""

import os
import shutil
import subprocess

import pytest


class FakeCommands:
    """
    Stand-in for the host's tools.

    Commands registered with :meth:`add` resolve on PATH and return the
    given output; everything else is missing. Every invocation is recorded
    in ``calls``.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []

    def add(self, command, stdout="", returncode=0, stderr=""):
        """Register a response for a command name or a full argv tuple."""
        key = command if isinstance(command, str) else tuple(command)
        self.responses[key] = (returncode, stdout, stderr)
        return self

    def which(self, name, *args, **kwargs):
        known = {key if isinstance(key, str) else key[0] for key in self.responses}
        return f"/usr/bin/{name}" if name in known else None

    def run(self, command, *args, **kwargs):
        self.calls.append(list(command))
        returncode, stdout, stderr = self.responses.get(
            tuple(command), self.responses.get(command[0], (0, "", ""))
        )
        if kwargs.get("stderr") == subprocess.STDOUT:
            stdout, stderr = stdout + stderr, None
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)


@pytest.fixture
def fake_commands(monkeypatch):
    """Replace PATH lookups and subprocess.run with a FakeCommands instance."""
    fake = FakeCommands()
    monkeypatch.setattr(shutil, "which", fake.which)
    monkeypatch.setattr(subprocess, "run", fake.run)
    return fake


@pytest.fixture
def no_commands(fake_commands):
    """A host where no external command is installed."""
    return fake_commands


@pytest.fixture
def as_user(monkeypatch):
    """Pretend to run as an unprivileged user."""
    monkeypatch.setattr(os, "geteuid", lambda: 1000)


@pytest.fixture
def as_root(monkeypatch):
    """Pretend to run as root."""
    monkeypatch.setattr(os, "geteuid", lambda: 0)
