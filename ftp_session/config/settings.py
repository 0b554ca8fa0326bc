"""Session settings management for the FTP session manager.

Provides the SessionSettings dataclass, SettingsManager for JSON
persistence, and create_session to build a Session from settings.
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from ftp_session.config.paths import get_settings_path
from ftp_session.ftp.messages import DEFAULT_LANGUAGE
from ftp_session.ftp.session import Session
from ftp_session.ftp.transport import DEFAULT_PORT, DEFAULT_TIMEOUT
from ftp_session.utils.logging import get_logger
from ftp_session.utils.validators import (
    validate_port,
    validate_timeout,
    validate_transfer_mode,
)


logger = get_logger(__name__)


@dataclass
class SessionSettings:
    """Connection defaults that persist between runs."""

    host: str = ""
    port: int = DEFAULT_PORT
    username: str = "anonymous"
    language: str = DEFAULT_LANGUAGE
    passive_mode: bool = True
    transfer_mode: str = "ascii"
    auto_disconnect: bool = True
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate settings after initialization."""
        for is_valid, error in (
            validate_port(self.port),
            validate_timeout(self.timeout),
            validate_transfer_mode(self.transfer_mode),
        ):
            if not is_valid:
                raise ValueError(error)

    def to_dict(self) -> dict:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SessionSettings":
        """Create settings from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)


class SettingsManager:
    """Manages settings persistence."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            config_path: Optional custom path, defaults to platform standard
        """
        self._config_path = config_path or get_settings_path()
        self._settings: Optional[SessionSettings] = None

    @property
    def config_path(self) -> Path:
        """Path to settings file."""
        return self._config_path

    def load(self) -> SessionSettings:
        """
        Load settings from disk.

        Returns:
            SessionSettings instance (defaults if the file is missing or invalid)
        """
        if self._config_path.exists():
            try:
                with open(self._config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                self._settings = SessionSettings.from_dict(data)
            except (json.JSONDecodeError, IOError, TypeError, ValueError) as e:
                logger.warning(f"Ignoring unreadable settings file {self._config_path}: {e}")
                self._settings = SessionSettings()
        else:
            self._settings = SessionSettings()

        return self._settings

    def save(self, settings: SessionSettings) -> None:
        """
        Persist settings to disk.

        Args:
            settings: Settings to save
        """
        self._settings = settings
        self._config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._config_path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)

    def reset(self) -> SessionSettings:
        """
        Reset to default settings and remove the settings file.

        Returns:
            Default SessionSettings instance
        """
        self._settings = SessionSettings()

        if self._config_path.exists():
            self._config_path.unlink()

        return self._settings

    def update(self, **kwargs) -> SessionSettings:
        """
        Update specific settings fields and save.

        Unknown field names are ignored. Nothing is saved if the
        resulting settings are invalid.

        Args:
            **kwargs: Field names and new values

        Returns:
            Updated SessionSettings instance

        Raises:
            ValueError: If a new value fails validation
        """
        if self._settings is None:
            self.load()

        updated = SessionSettings.from_dict({**self._settings.to_dict(), **kwargs})
        self.save(updated)
        return updated


def create_session(settings: SessionSettings, password: str, **kwargs) -> Session:
    """
    Build a Session configured from settings.

    Args:
        settings: Stored connection settings
        password: Password for ``settings.username``
        **kwargs: Extra Session arguments (e.g. ``transport``, ``messages``)

    Returns:
        A disconnected Session with passive, transfer and auto-disconnect
        modes applied
    """
    if not settings.host:
        raise ValueError("Host is required")

    session = Session(
        settings.host,
        settings.username,
        password,
        language=settings.language,
        port=settings.port,
        timeout=settings.timeout,
        **kwargs
    )
    session.passive(settings.passive_mode)
    session.mode(settings.transfer_mode)
    session.auto_disconnect(settings.auto_disconnect)
    return session
