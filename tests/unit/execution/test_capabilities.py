"""
Unit tests for the container runtime check
"""

import subprocess

import pytest

from hyperion.core.exceptions.custom_exceptions import CapabilityError
from hyperion.execution import capabilities


@pytest.fixture(autouse=True)
def fresh_check():
    capabilities.reset_capabilities()
    yield
    capabilities.reset_capabilities()


def test_missing_executable(monkeypatch):
    monkeypatch.setattr(capabilities.shutil, "which", lambda name: None)
    assert capabilities.has_container_runtime() is False
    with pytest.raises(CapabilityError) as exc_info:
        capabilities.require_container_runtime()
    assert "Docker seems to be missing" in exc_info.value.message


@pytest.mark.parametrize("returncode, expected", [(0, True), (1, False)])
def test_check_result(monkeypatch, returncode, expected):
    calls = []

    def fake_run(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(command, returncode)

    monkeypatch.setattr(capabilities.shutil, "which", lambda name: "/usr/bin/docker")
    monkeypatch.setattr(capabilities.subprocess, "run", fake_run)

    assert capabilities.has_container_runtime() is expected
    assert capabilities.has_container_runtime() is expected
    assert calls == [["/usr/bin/docker", "info"]]


def test_check_timeout(monkeypatch):
    def fake_run(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr(capabilities.shutil, "which", lambda name: "/usr/bin/docker")
    monkeypatch.setattr(capabilities.subprocess, "run", fake_run)

    assert capabilities.has_container_runtime() is False
