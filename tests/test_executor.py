"""
Tests for command execution inside containers.
"""

from unittest.mock import MagicMock

import pytest
import requests
from docker.errors import APIError, NotFound

from containerguard.containers.executor import ContainerExecutor, OS_RELEASE_COMMAND
from containerguard.exceptions import CommandExecutionError


@pytest.fixture
def client():
    client = MagicMock()
    client.api.exec_create.return_value = {"Id": "exec-1"}
    client.api.exec_start.return_value = b"ID=alpine\r\n"
    return client


class TestContainerExecutor:
    """Test exec session handling."""

    def test_execute_returns_decoded_output(self, client):
        output = ContainerExecutor(client).execute("abc123", OS_RELEASE_COMMAND)
        assert output == "ID=alpine\r\n"

    def test_exec_session_uses_tty_and_both_streams(self, client):
        ContainerExecutor(client).execute("abc123", ["rpm", "-qa"])

        client.api.exec_create.assert_called_once_with(
            "abc123", ["rpm", "-qa"], stdout=True, stderr=True, tty=True
        )
        client.api.exec_start.assert_called_once_with("exec-1", tty=True)

    def test_new_session_per_call(self, client):
        executor = ContainerExecutor(client)
        executor.execute("abc123", ["rpm", "-qa"])
        executor.execute("abc123", ["rpm", "-qa"])
        assert client.api.exec_create.call_count == 2

    def test_invalid_utf8_is_replaced(self, client):
        client.api.exec_start.return_value = b"pkg \xff 1.0\r\n"
        output = ContainerExecutor(client).execute("abc123", ["apk", "-v", "info"])
        assert output == "pkg � 1.0\r\n"

    def test_create_failure_raises(self, client):
        client.api.exec_create.side_effect = NotFound("No such container: abc123")

        with pytest.raises(CommandExecutionError) as exc_info:
            ContainerExecutor(client).execute("abc123", OS_RELEASE_COMMAND)

        assert exc_info.value.container_id == "abc123"
        assert "cat /etc/os-release" in str(exc_info.value)

    def test_start_failure_raises(self, client):
        client.api.exec_start.side_effect = APIError("container is not running")

        with pytest.raises(CommandExecutionError):
            ContainerExecutor(client).execute("abc123", OS_RELEASE_COMMAND)

    def test_transport_failure_raises(self, client):
        client.api.exec_create.side_effect = requests.exceptions.ConnectionError("socket closed")

        with pytest.raises(CommandExecutionError) as exc_info:
            ContainerExecutor(client).execute("abc123", OS_RELEASE_COMMAND)

        assert exc_info.value.container_id == "abc123"
        assert "socket closed" in str(exc_info.value)
