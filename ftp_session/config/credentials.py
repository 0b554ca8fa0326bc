"""Secure credential storage for the FTP session manager.

Uses the system keyring (Windows Credential Manager, macOS Keychain,
Linux Secret Service) so passwords never land in the settings file.
"""

from typing import Optional

import keyring
from keyring.errors import KeyringError

from ftp_session.utils.logging import get_logger


logger = get_logger(__name__)


class CredentialManager:
    """Password storage keyed by server and user name."""

    SERVICE_NAME = "ftp-session"

    def _make_key(self, host: str, username: str) -> str:
        return f"{host}:{username}"

    def save_password(self, host: str, username: str, password: str) -> bool:
        """
        Save a password.

        Args:
            host: FTP server
            username: FTP user name
            password: Password to save

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            keyring.set_password(self.SERVICE_NAME, self._make_key(host, username), password)
            return True
        except KeyringError as e:
            logger.warning(f"Could not save password for {username}@{host}: {e}")
            return False

    def get_password(self, host: str, username: str) -> Optional[str]:
        """
        Retrieve a saved password.

        Returns:
            Password string or None if not found or the keyring is unavailable
        """
        try:
            return keyring.get_password(self.SERVICE_NAME, self._make_key(host, username))
        except KeyringError as e:
            logger.warning(f"Could not read password for {username}@{host}: {e}")
            return None
