"""FTP session manager.

A client-side session against a single FTP server that connects and
logs in on demand and closes the connection after each command unless
auto-disconnect is turned off.
"""

from ftp_session.ftp.exceptions import (
    FTPAuthenticationError,
    FTPConnectionError,
    FTPError,
    FTPNotConnectedError,
)
from ftp_session.ftp.session import ConnectionState, Session
from ftp_session.ftp.transport import FtplibTransport, TransferMode

__all__ = [
    "ConnectionState",
    "FTPAuthenticationError",
    "FTPConnectionError",
    "FTPError",
    "FTPNotConnectedError",
    "FtplibTransport",
    "Session",
    "TransferMode",
]
