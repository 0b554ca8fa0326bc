"""Configuration module for the FTP session manager.

This module handles settings and credentials:
- SettingsManager: JSON-based settings persistence
- CredentialManager: Secure credential storage via keyring
- Paths: Application data directories
- SessionSettings: Settings dataclass
"""
