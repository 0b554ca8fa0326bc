"""Pytest configuration and shared fixtures for FTP session manager tests."""

import pytest
from dataclasses import dataclass
from pathlib import Path
from unittest.mock import MagicMock

from ftp_session.ftp.session import Session
from ftp_session.ftp.transport import FtplibTransport


# Test constants
TEST_FTP_HOST = "ftp.example.com"
TEST_FTP_USER = "testuser"
TEST_FTP_PASS = "testpass"


@dataclass
class MockFTPConfig:
    """Credentials used by session tests."""
    host: str = TEST_FTP_HOST
    username: str = TEST_FTP_USER
    password: str = TEST_FTP_PASS


@pytest.fixture
def ftp_config() -> MockFTPConfig:
    """Provide test FTP credentials."""
    return MockFTPConfig()


@pytest.fixture
def handle() -> MagicMock:
    """Opaque transport handle returned by a successful dial."""
    return MagicMock(name="ftp_handle")


@pytest.fixture
def transport(handle) -> MagicMock:
    """Transport double where dial, login and every command succeed."""
    transport = MagicMock(spec=FtplibTransport)
    transport.dial.return_value = handle
    transport.authenticate.return_value = True
    transport.set_transfer_mode.return_value = True
    for command in ("put", "get", "delete", "change_dir", "make_dir"):
        getattr(transport, command).return_value = True
    return transport


@pytest.fixture
def session(ftp_config, transport) -> Session:
    """Fresh session wired to the transport double."""
    return Session(
        ftp_config.host,
        ftp_config.username,
        ftp_config.password,
        transport=transport,
    )


@pytest.fixture
def local_file(tmp_path: Path) -> Path:
    """Create a small local file to upload."""
    path = tmp_path / "report.txt"
    path.write_text("line one\nline two\n")
    return path
