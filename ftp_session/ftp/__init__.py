"""FTP operations module for the FTP session manager.

This module handles all FTP-related functionality:
- Session: Connection lifecycle and remote commands
- FtplibTransport: ftplib-backed transport
- MessageCatalog: Localized error messages
- Exceptions: FTP-specific error types
"""
