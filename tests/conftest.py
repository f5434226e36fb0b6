"""Shared fixtures for ssh-probe tests."""

import asyncio
import os
import socket
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio

from ssh_probe.config import Config, HostKeyVerifier, Settings
from ssh_probe.services import reset_state


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Isolate tests from the environment and from each other's globals."""
    for key in list(os.environ):
        if key.startswith("SSH_PROBE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("SSH_PROBE_KNOWN_HOSTS", str(tmp_path / "known_hosts"))

    reset_state()
    yield
    reset_state()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config with default settings and a temporary known_hosts file."""
    known_hosts = tmp_path / "known_hosts"
    known_hosts.touch()
    return Config(
        settings=Settings(),
        host_keys=HostKeyVerifier(known_hosts_path=str(known_hosts)),
    )


@pytest_asyncio.fixture
async def listening_port() -> AsyncIterator[int]:
    """Port of a loopback TCP listener that accepts and drops connections."""

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port
    finally:
        server.close()
        await server.wait_closed()


@pytest.fixture
def closed_port() -> int:
    """Loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
