"""FTP-specific exceptions for the FTP session manager.

Only connection and login failures are exceptional; a remote command
that the server rejects is reported as a plain ``False`` result.
"""


class FTPError(Exception):
    """Base exception for all FTP-related errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class FTPConnectionError(FTPError):
    """Failed to establish a connection to the server."""

    def __init__(self, server: str, message: str = None, original_error: Exception = None):
        self.server = server
        if message is None:
            message = f'Connection error: "{server}"'
        super().__init__(message, original_error)


class FTPAuthenticationError(FTPError):
    """The server rejected the session credentials."""

    def __init__(self, username: str, message: str = None, original_error: Exception = None):
        self.username = username
        if message is None:
            message = f'Login error: "{username}"'
        super().__init__(message, original_error)


class FTPNotConnectedError(FTPError):
    """Operation attempted without an open connection."""

    def __init__(self, operation: str = "Operation"):
        self.operation = operation
        message = f"{operation} requires an open FTP connection"
        super().__init__(message)
