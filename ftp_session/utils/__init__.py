"""Utility module for the FTP session manager.

This module provides cross-cutting utilities:
- Logging: Configured logging with password redaction
- Validators: Input validation for host, port, timeout and mode
"""
