"""Unit tests for MessageCatalog."""

import pytest

from ftp_session.ftp.exceptions import (
    FTPAuthenticationError,
    FTPConnectionError,
    FTPError,
    FTPNotConnectedError,
)
from ftp_session.ftp.messages import ErrorKind, MessageCatalog


class TestMessageCatalog:
    """Tests for localized error templates."""

    @pytest.fixture
    def catalog(self):
        return MessageCatalog()

    def test_builtin_languages(self, catalog):
        """Test English and Spanish ship by default."""
        assert catalog.languages == ["en", "es"]
        assert catalog.default_language == "en"
        assert catalog.supports("es") is True
        assert catalog.supports("fr") is False

    def test_english_messages(self, catalog):
        """Test English connection and login messages."""
        assert catalog.format("en", ErrorKind.CONNECTION, "ftp.example.com") == \
            'Connection error: "ftp.example.com"'
        assert catalog.format("en", ErrorKind.LOGIN, "bob") == 'Login error: "bob"'

    def test_spanish_messages(self, catalog):
        """Test Spanish connection and login messages."""
        assert catalog.format("es", ErrorKind.CONNECTION, "ftp.example.com") == \
            'Error de conexión: "ftp.example.com"'
        assert catalog.format("es", ErrorKind.LOGIN, "bob") == 'Error al iniciar sesión: "bob"'

    def test_unknown_language_falls_back(self, catalog):
        """Test an unsupported language uses the default templates."""
        assert catalog.template("fr", ErrorKind.LOGIN) == catalog.template("en", ErrorKind.LOGIN)

    def test_missing_kind_falls_back(self):
        """Test a language without a template for a kind uses the default."""
        catalog = MessageCatalog({
            "en": {ErrorKind.CONNECTION: "down: %s", ErrorKind.LOGIN: "denied: %s"},
            "de": {ErrorKind.CONNECTION: "Verbindungsfehler: %s"},
        })

        assert catalog.format("de", ErrorKind.CONNECTION, "h") == "Verbindungsfehler: h"
        assert catalog.format("de", ErrorKind.LOGIN, "u") == "denied: u"

    def test_default_language_required(self):
        """Test the default language must have templates."""
        with pytest.raises(ValueError, match="default language"):
            MessageCatalog({"es": {}}, default_language="en")


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        """Test every error derives from FTPError."""
        assert issubclass(FTPConnectionError, FTPError)
        assert issubclass(FTPAuthenticationError, FTPError)
        assert issubclass(FTPNotConnectedError, FTPError)

    def test_connection_error_default_message(self):
        """Test the connection error carries the server."""
        error = FTPConnectionError("ftp.example.com")
        assert error.server == "ftp.example.com"
        assert str(error) == 'Connection error: "ftp.example.com"'

    def test_authentication_error_with_original(self):
        """Test the original error is appended to the message."""
        original = OSError("reset")
        error = FTPAuthenticationError("bob", "Login error", original)
        assert error.username == "bob"
        assert error.original_error is original
        assert str(error) == "Login error: reset"

    def test_not_connected_error(self):
        """Test the not-connected message names the operation."""
        assert str(FTPNotConnectedError("Login")) == "Login requires an open FTP connection"
