"""FTP session management for the FTP session manager.

Provides the ConnectionState enum and the Session class, which connects
and logs in lazily before every remote command and, unless told
otherwise, disconnects again once the command has run.
"""

from enum import Enum
from typing import Any, Callable, Optional

from ftp_session.ftp.exceptions import (
    FTPAuthenticationError,
    FTPConnectionError,
    FTPNotConnectedError,
)
from ftp_session.ftp.messages import DEFAULT_LANGUAGE, ErrorKind, MessageCatalog
from ftp_session.ftp.transport import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    FtplibTransport,
    TransferMode,
    Transport,
)
from ftp_session.utils.logging import get_logger


logger = get_logger(__name__)


class ConnectionState(Enum):
    """Session connection state."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    AUTHENTICATED = "authenticated"


class Session:
    """
    One logical client session against one FTP server.

    Server, credentials and language are fixed for the life of the
    session. Commands connect and log in on demand; with auto-disconnect
    enabled (the default) the connection is closed after every command.

    Usage:
        with Session("ftp.example.com", "user", "secret") as session:
            session.mode("bin")
            session.upload("build.zip", "/releases/build.zip")
    """

    def __init__(
        self,
        server: str,
        user: str,
        password: str,
        language: str = DEFAULT_LANGUAGE,
        transport: Optional[Transport] = None,
        messages: Optional[MessageCatalog] = None,
        port: int = DEFAULT_PORT,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the session without touching the network.

        Args:
            server: Host name or IP address of the server
            user: User name to log in with
            password: Password of the user
            language: Language tag for error messages
            transport: Transport to use, defaults to an FtplibTransport
            messages: Error message catalog, defaults to the built-in one
            port: Port for the default transport
            timeout: Socket deadline in seconds for the default transport
        """
        self._server = server
        self._username = user
        self._password = password
        self._language = language
        self._transport = transport or FtplibTransport(port=port, timeout=timeout)
        self._messages = messages or MessageCatalog()
        self._handle: Optional[Any] = None
        self._state = ConnectionState.DISCONNECTED
        self._transfer_mode = TransferMode.ASCII
        self._passive_mode = True
        self._auto_disconnect = True

    def __repr__(self) -> str:
        return f"<Session {self._username}@{self._server} {self._state.value}>"

    @property
    def server(self) -> str:
        return self._server

    @property
    def username(self) -> str:
        return self._username

    @property
    def language(self) -> str:
        return self._language

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """True if a connection is open (logged in or not)."""
        return self._state != ConnectionState.DISCONNECTED

    @property
    def is_authenticated(self) -> bool:
        return self._state == ConnectionState.AUTHENTICATED

    @property
    def handle(self) -> Optional[Any]:
        """Underlying transport handle, None while disconnected."""
        return self._handle

    @property
    def transfer_mode(self) -> TransferMode:
        return self._transfer_mode

    @property
    def passive_mode(self) -> bool:
        return self._passive_mode

    @property
    def auto_disconnect_enabled(self) -> bool:
        return self._auto_disconnect

    def connect(self) -> bool:
        """
        Open a connection to the server.

        Does nothing if a connection is already open. A failed attempt
        leaves the session disconnected and is not raised.

        Returns:
            True if the session is connected
        """
        if self._state != ConnectionState.DISCONNECTED:
            return True

        logger.info(f"Connecting to {self._server}")
        handle = self._transport.dial(self._server)
        if handle is None:
            logger.error(f"Connection to {self._server} failed")
            return False

        self._handle = handle
        self._state = ConnectionState.CONNECTED
        self._transport.set_passive(handle, self._passive_mode)
        logger.info(f"Connected to {self._server}")
        return True

    def login(self) -> bool:
        """
        Log in on the open connection.

        A rejected login leaves the session connected.

        Returns:
            True if the session is authenticated

        Raises:
            FTPNotConnectedError: If no connection is open
        """
        if self._state == ConnectionState.DISCONNECTED:
            raise FTPNotConnectedError("Login")
        if self._state == ConnectionState.AUTHENTICATED:
            return True

        if not self._transport.authenticate(self._handle, self._username, self._password):
            logger.error(f"Login failed for user '{self._username}' on {self._server}")
            return False

        self._state = ConnectionState.AUTHENTICATED
        logger.info(f"Logged in as '{self._username}' on {self._server}")
        return True

    def disconnect(self) -> None:
        """Close the connection. Safe to call at any time; never raises."""
        handle = self._handle
        self._handle = None
        self._state = ConnectionState.DISCONNECTED

        if handle is None:
            return
        try:
            self._transport.close(handle)
        except Exception as e:
            # Best effort close
            logger.debug(f"Error while closing connection to {self._server}: {e}")
        logger.info(f"Disconnected from {self._server}")

    close = disconnect

    def passive(self, enabled: bool = True) -> None:
        """
        Set passive mode.

        Applied immediately on an open connection and on every later connect.
        """
        self._passive_mode = enabled
        if self._handle is not None:
            self._transport.set_passive(self._handle, enabled)

    def auto_disconnect(self, enabled: bool) -> None:
        """Set whether the connection is closed after every command."""
        self._auto_disconnect = enabled

    def mode(self, name: str) -> None:
        """
        Set the transfer mode by name.

        Args:
            name: "ascii" or "bin"; any other value is ignored
        """
        mode = TransferMode.from_name(name)
        if mode is None:
            logger.debug(f"Ignoring unknown transfer mode '{name}'")
            return

        self._transfer_mode = mode
        if self._state == ConnectionState.AUTHENTICATED:
            self._transport.set_transfer_mode(self._handle, mode)

    def upload(self, local_path: str, remote_path: str) -> bool:
        """
        Put (upload) a file on the server.

        Args:
            local_path: Local path of the file to upload
            remote_path: Destination path on the server

        Returns:
            True if the server accepted the file

        Raises:
            FTPConnectionError: If the server cannot be reached
            FTPAuthenticationError: If the login is rejected
        """
        return self._run(
            "upload", self._transport.put, remote_path, local_path, self._transfer_mode
        )

    def download(self, remote_path: str, local_path: str) -> bool:
        """
        Get (download) a file from the server.

        Args:
            remote_path: Path of the file on the server
            local_path: Where to store the downloaded file

        Returns:
            True if the file was downloaded

        Raises:
            FTPConnectionError: If the server cannot be reached
            FTPAuthenticationError: If the login is rejected
        """
        return self._run(
            "download", self._transport.get, local_path, remote_path, self._transfer_mode
        )

    def delete(self, remote_path: str) -> bool:
        """Delete a file on the server."""
        return self._run("delete", self._transport.delete, remote_path)

    def change_dir(self, path: str) -> bool:
        """Change the working directory on the server."""
        return self._run("change_dir", self._transport.change_dir, path)

    def make_dir(self, path: str) -> bool:
        """Create a directory on the server."""
        return self._run("make_dir", self._transport.make_dir, path)

    def _ensure_ready(self) -> None:
        """
        Connect and log in if needed, at most one attempt each.

        Raises:
            FTPConnectionError: If connecting fails
            FTPAuthenticationError: If logging in fails
        """
        if self._state == ConnectionState.DISCONNECTED and not self.connect():
            raise FTPConnectionError(
                self._server,
                self._messages.format(self._language, ErrorKind.CONNECTION, self._server)
            )
        if self._state != ConnectionState.AUTHENTICATED and not self.login():
            raise FTPAuthenticationError(
                self._username,
                self._messages.format(self._language, ErrorKind.LOGIN, self._username)
            )

    def _run(self, operation: str, primitive: Callable[..., bool], *args) -> bool:
        """Run a transport command on a ready session, then apply auto-disconnect."""
        self._ensure_ready()
        try:
            result = primitive(self._handle, *args)
            logger.debug(f"{operation}{args!r} -> {result}")
        finally:
            if self._auto_disconnect:
                self.disconnect()
        return bool(result)

    def __enter__(self) -> "Session":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()

    def __del__(self) -> None:
        # Last resort for sessions not used as a context manager
        if getattr(self, "_handle", None) is not None:
            self.disconnect()
