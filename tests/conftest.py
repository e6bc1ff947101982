"""
Pytest configuration and shared fixtures for ContainerGuard tests.
"""

import json
from types import SimpleNamespace
from typing import Dict, Tuple
from unittest.mock import MagicMock

import pytest

from containerguard.config import Config, set_config
from containerguard.containers.executor import OS_RELEASE_COMMAND
from containerguard.containers.packages import package_command
from containerguard.core.models import OSFamily
from containerguard.vulners.client import VulnersClient


UBUNTU_OS_RELEASE = (
    'NAME="Ubuntu"\r\n'
    'VERSION="20.04.6 LTS (Focal Fossa)"\r\n'
    'ID=ubuntu\r\n'
    'ID_LIKE=debian\r\n'
    'PRETTY_NAME="Ubuntu 20.04.6 LTS"\r\n'
    'VERSION_ID="20.04"\r\n'
)

CENTOS_OS_RELEASE = (
    'NAME="CentOS Linux"\r\n'
    'VERSION="7 (Core)"\r\n'
    'ID="centos"\r\n'
    'ID_LIKE="rhel fedora"\r\n'
    'VERSION_ID="7"\r\n'
)

ALPINE_OS_RELEASE = (
    'NAME="Alpine Linux"\r\n'
    'ID=alpine\r\n'
    'VERSION_ID=3.18.4\r\n'
    'PRETTY_NAME="Alpine Linux v3.18"\r\n'
)

ARCH_OS_RELEASE = (
    'NAME="Arch Linux"\r\n'
    'ID=arch\r\n'
    'BUILD_ID=rolling\r\n'
)

DPKG_OUTPUT = "adduser 3.118ubuntu2 all\r\ncurl 7.68.0-1ubuntu2.20 amd64\r\n"

APK_OUTPUT = (
    "WARNING: Ignoring https://dl-cdn.alpinelinux.org/alpine/v3.18/main: No such file or directory\r\n"
    "musl-1.2.4-r2\r\n"
    "busybox-1.36.1-r5\r\n"
)


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Isolate tests from the global config and ambient settings."""
    for key in ("VULNERS_URL", "VULNERS_TIMEOUT", "VULNERS_API_KEY",
                "CONTINUE_ON_ERROR", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    set_config(None)
    yield
    set_config(None)


def make_docker_client(outputs: Dict[Tuple[str, ...], str]) -> MagicMock:
    """
    Build a mock Docker client whose exec sessions answer from ``outputs``.

    Keys are argument vectors, values are the combined command output.
    """
    client = MagicMock()
    sessions = {}

    def exec_create(container_id, cmd, **kwargs):
        exec_id = f"exec-{len(sessions) + 1}"
        sessions[exec_id] = tuple(cmd)
        return {"Id": exec_id}

    def exec_start(exec_id, **kwargs):
        return outputs[sessions[exec_id]].encode("utf-8")

    client.api.exec_create.side_effect = exec_create
    client.api.exec_start.side_effect = exec_start
    return client


def make_container(container_id: str = "a1b2c3d4e5f6a7b8c9d0", name: str = "web",
                   image: str = "ubuntu:20.04"):
    """Stand-in for docker.models.containers.Container."""
    return SimpleNamespace(
        id=container_id,
        short_id=container_id[:12],
        name=name,
        attrs={"Config": {"Image": image}},
    )


def make_session(body, status_code: int = 200) -> MagicMock:
    """Mock requests.Session answering every POST with ``body``."""
    response = MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.status_code = status_code
    response.content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")

    session = MagicMock()
    session.post.return_value = response
    return session


def ok_response(cvelist=None, reasons=None):
    return {
        "result": "OK",
        "data": {
            "vulnerabilities": [],
            "reasons": reasons or [],
            "cvss": {"score": 0.0, "vector": "NONE"},
            "cvelist": cvelist or [],
            "id": "AUDIT-1",
        },
    }


@pytest.fixture
def config():
    """Configuration without environment influence."""
    return Config()


@pytest.fixture
def ubuntu_docker_client():
    """Docker client serving an Ubuntu container."""
    return make_docker_client({
        tuple(OS_RELEASE_COMMAND): UBUNTU_OS_RELEASE,
        tuple(package_command(OSFamily.DEBIAN)): DPKG_OUTPUT,
    })


@pytest.fixture
def clean_vulners_client():
    """Vulners client that always reports a clean audit."""
    return VulnersClient(session=make_session(ok_response()))
