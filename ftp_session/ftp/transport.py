"""FTP transport for the FTP session manager.

Provides the TransferMode enum, the Transport protocol a Session talks
to, and FtplibTransport, the ftplib-backed implementation.
"""

from enum import Enum
from ftplib import FTP, all_errors
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from ftp_session.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_PORT = 21
DEFAULT_TIMEOUT = 90


class TransferMode(Enum):
    """Data representation used for uploads and downloads."""
    ASCII = "ascii"
    BINARY = "bin"

    @classmethod
    def from_name(cls, name: str) -> Optional["TransferMode"]:
        """
        Map a mode name to a TransferMode.

        Args:
            name: "ascii" or "bin"

        Returns:
            Matching TransferMode, or None for any other name
        """
        for mode in cls:
            if mode.value == name:
                return mode
        return None


class Transport(Protocol):
    """Remote file-transfer capability used by a Session."""

    def dial(self, server: str) -> Optional[Any]: ...

    def close(self, handle: Any) -> None: ...

    def authenticate(self, handle: Any, username: str, password: str) -> bool: ...

    def set_transfer_mode(self, handle: Any, mode: TransferMode) -> bool: ...

    def set_passive(self, handle: Any, enabled: bool) -> None: ...

    def put(self, handle: Any, remote_path: str, local_path: str, mode: TransferMode) -> bool: ...

    def get(self, handle: Any, local_path: str, remote_path: str, mode: TransferMode) -> bool: ...

    def delete(self, handle: Any, remote_path: str) -> bool: ...

    def change_dir(self, handle: Any, path: str) -> bool: ...

    def make_dir(self, handle: Any, path: str) -> bool: ...


class FtplibTransport:
    """Transport implementation over ftplib.FTP."""

    # Block size for binary transfers (8KB)
    BLOCK_SIZE = 8192

    def __init__(self, port: int = DEFAULT_PORT, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize the transport.

        Args:
            port: Control connection port
            timeout: Deadline in seconds for every blocking socket operation
        """
        self.port = port
        self.timeout = timeout

    def dial(self, server: str) -> Optional[FTP]:
        """
        Open a control connection to the server.

        Args:
            server: Host name or IP address

        Returns:
            Connected FTP object, or None if the connection failed
        """
        ftp = FTP()
        ftp.set_debuglevel(0)
        try:
            ftp.connect(host=server, port=self.port, timeout=self.timeout)
        except all_errors as e:
            logger.warning(f"Could not connect to {server}:{self.port}: {e}")
            ftp.close()
            return None

        logger.debug(f"Connected to {server}:{self.port}: {ftp.getwelcome()}")
        return ftp

    def close(self, handle: FTP) -> None:
        """Close the connection, quietly if the server is already gone."""
        try:
            handle.quit()
        except Exception as e:
            logger.debug(f"QUIT failed, closing socket: {e}")
            try:
                handle.close()
            except Exception:
                pass

    def authenticate(self, handle: FTP, username: str, password: str) -> bool:
        try:
            handle.login(user=username, passwd=password)
        except all_errors as e:
            logger.warning(f"Login rejected for user '{username}': {e}")
            return False
        return True

    def set_transfer_mode(self, handle: FTP, mode: TransferMode) -> bool:
        type_code = "A" if mode is TransferMode.ASCII else "I"
        return self._command("TYPE", handle.voidcmd, f"TYPE {type_code}")

    def set_passive(self, handle: FTP, enabled: bool) -> None:
        handle.set_pasv(enabled)

    def put(self, handle: FTP, remote_path: str, local_path: str, mode: TransferMode) -> bool:
        """
        Upload a local file.

        Args:
            handle: Connected FTP object
            remote_path: Destination path on the server
            local_path: Source file
            mode: ASCII sends line by line, BINARY sends raw blocks

        Returns:
            True if the server accepted the file
        """
        try:
            source = open(local_path, "rb")
        except OSError as e:
            logger.warning(f"Cannot read '{local_path}': {e}")
            return False

        with source:
            if mode is TransferMode.ASCII:
                return self._command("STOR", handle.storlines, f"STOR {remote_path}", source)
            return self._command(
                "STOR", handle.storbinary, f"STOR {remote_path}", source, blocksize=self.BLOCK_SIZE
            )

    def get(self, handle: FTP, local_path: str, remote_path: str, mode: TransferMode) -> bool:
        """
        Download a remote file.

        A partially written local file is removed when the transfer fails.

        Args:
            handle: Connected FTP object
            local_path: Destination file
            remote_path: Source path on the server
            mode: ASCII receives lines, BINARY receives raw blocks

        Returns:
            True if the file was received completely
        """
        try:
            if mode is TransferMode.ASCII:
                target = open(local_path, "w", encoding=handle.encoding)
            else:
                target = open(local_path, "wb")
        except OSError as e:
            logger.warning(f"Cannot write '{local_path}': {e}")
            return False

        result = False
        try:
            with target:
                if mode is TransferMode.ASCII:
                    result = self._retrieve_text(handle, remote_path, target)
                else:
                    result = self._command(
                        "RETR", handle.retrbinary, f"RETR {remote_path}",
                        target.write, blocksize=self.BLOCK_SIZE
                    )
        finally:
            if not result:
                try:
                    Path(local_path).unlink(missing_ok=True)
                except OSError as e:
                    logger.debug(f"Could not remove partial download '{local_path}': {e}")
        return result

    def _retrieve_text(self, handle: FTP, remote_path: str, target) -> bool:
        """Receive a file line by line, failing on text that does not decode."""
        try:
            handle.retrlines(f"RETR {remote_path}", lambda line: target.write(line + "\n"))
        except UnicodeError as e:
            logger.warning(f"RETR {remote_path} is not valid {handle.encoding} text: {e}")
            # The data connection was dropped mid-transfer; read the pending reply
            try:
                handle.voidresp()
            except all_errors as reply_error:
                logger.debug(f"Transfer reply after aborted RETR: {reply_error}")
            return False
        except all_errors as e:
            logger.warning(f"RETR failed: {e}")
            return False
        return True

    def delete(self, handle: FTP, remote_path: str) -> bool:
        return self._command("DELE", handle.delete, remote_path)

    def change_dir(self, handle: FTP, path: str) -> bool:
        return self._command("CWD", handle.cwd, path)

    def make_dir(self, handle: FTP, path: str) -> bool:
        return self._command("MKD", handle.mkd, path)

    def _command(self, name: str, func: Callable[..., Any], *args, **kwargs) -> bool:
        """Run an ftplib call, turning protocol and socket errors into False."""
        try:
            func(*args, **kwargs)
        except all_errors as e:
            logger.warning(f"{name} failed: {e}")
            return False
        return True
