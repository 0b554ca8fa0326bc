"""Localized error messages for the FTP session manager.

Each template carries exactly one ``%s`` slot that receives the
offending server name or username.
"""

from enum import Enum
from typing import Dict, Optional

from ftp_session.utils.logging import get_logger


logger = get_logger(__name__)


class ErrorKind(Enum):
    """Failure kinds that carry a localized message."""
    CONNECTION = "CONNECTION"
    LOGIN = "LOGIN"


DEFAULT_LANGUAGE = "en"

DEFAULT_TEMPLATES: Dict[str, Dict[ErrorKind, str]] = {
    "es": {
        ErrorKind.CONNECTION: 'Error de conexión: "%s"',
        ErrorKind.LOGIN: 'Error al iniciar sesión: "%s"',
    },
    "en": {
        ErrorKind.CONNECTION: 'Connection error: "%s"',
        ErrorKind.LOGIN: 'Login error: "%s"',
    },
}


class MessageCatalog:
    """Language-indexed error message templates."""

    def __init__(
        self,
        templates: Optional[Dict[str, Dict[ErrorKind, str]]] = None,
        default_language: str = DEFAULT_LANGUAGE
    ):
        """
        Initialize the catalog.

        Args:
            templates: Templates by language tag, defaults to the built-in set
            default_language: Language used when a tag has no templates
        """
        self._templates = templates if templates is not None else DEFAULT_TEMPLATES
        if default_language not in self._templates:
            raise ValueError(f"No templates for default language '{default_language}'")
        self._default_language = default_language

    @property
    def languages(self) -> list[str]:
        """Language tags with templates."""
        return sorted(self._templates)

    @property
    def default_language(self) -> str:
        return self._default_language

    def supports(self, language: str) -> bool:
        """True if the catalog has templates for the language."""
        return language in self._templates

    def template(self, language: str, kind: ErrorKind) -> str:
        """
        Get the message template for a language and error kind.

        Unknown languages fall back to the default language.

        Args:
            language: Language tag (e.g. "en", "es")
            kind: Error kind

        Returns:
            Template string with one ``%s`` slot
        """
        templates = self._templates.get(language)
        if templates is None or kind not in templates:
            logger.debug(f"No '{kind.value}' template for '{language}', using '{self._default_language}'")
            templates = self._templates[self._default_language]
        return templates[kind]

    def format(self, language: str, kind: ErrorKind, value: str) -> str:
        """Render the template for ``kind`` with ``value`` substituted."""
        return self.template(language, kind) % value
