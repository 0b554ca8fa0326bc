"""Command-line entry point for the FTP session manager.

Runs a single remote command through a Session, filling missing
connection options from the saved settings and the system keyring.
"""

import argparse
import getpass
import logging
import sys
from typing import List, Optional

from .config.credentials import CredentialManager
from .config.paths import get_log_file_path
from .config.settings import SessionSettings, SettingsManager, create_session
from .ftp.exceptions import FTPAuthenticationError, FTPConnectionError
from .ftp.messages import MessageCatalog
from .utils.logging import setup_logging, get_logger
from .utils.validators import validate_host


EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_SESSION_FAILED = 2

# command name -> (Session method, argument names)
COMMANDS = {
    "put": ("upload", ("local", "remote")),
    "get": ("download", ("remote", "local")),
    "delete": ("delete", ("remote",)),
    "cd": ("change_dir", ("path",)),
    "mkdir": ("make_dir", ("path",)),
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ftp-session",
        description="Run one command against an FTP server.",
    )
    parser.add_argument("--host", help="server to connect to (default: saved host)")
    parser.add_argument("--port", type=int, help="control port (default: saved port)")
    parser.add_argument("--user", help="user name (default: saved user)")
    parser.add_argument("--password", help="password (default: keyring, then prompt)")
    parser.add_argument("--language", help="language for error messages")
    parser.add_argument("--mode", choices=["ascii", "bin"], help="transfer mode")
    parser.add_argument("--active", action="store_true", help="use active mode instead of passive")
    parser.add_argument("--save-password", action="store_true", help="store the password in the keyring")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, arg_names) in COMMANDS.items():
        sub = subparsers.add_parser(name)
        for arg_name in arg_names:
            sub.add_argument(arg_name)

    return parser


def resolve_settings(args: argparse.Namespace, stored: SessionSettings) -> SessionSettings:
    """Overlay command-line options on the stored settings."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "username": args.user,
        "language": args.language,
        "transfer_mode": args.mode,
    }
    data = stored.to_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})
    if args.active:
        data["passive_mode"] = False
    return SessionSettings.from_dict(data)


def resolve_password(
    args: argparse.Namespace,
    settings: SessionSettings,
    credentials: CredentialManager
) -> str:
    """Password from the command line, the keyring, or an interactive prompt."""
    if args.password is not None:
        return args.password

    password = credentials.get_password(settings.host, settings.username)
    if password is not None:
        return password

    return getpass.getpass(f"Password for {settings.username}@{settings.host}: ")


def main(
    argv: Optional[List[str]] = None,
    settings_manager: Optional[SettingsManager] = None,
    credentials: Optional[CredentialManager] = None,
    **session_kwargs
) -> int:
    """
    Run the command line.

    Args:
        argv: Arguments, defaults to sys.argv[1:]
        settings_manager: Settings source, defaults to the platform settings file
        credentials: Password store, defaults to the system keyring
        **session_kwargs: Extra Session arguments (e.g. ``transport``)

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    catalog = MessageCatalog()
    if args.language is not None and not catalog.supports(args.language):
        print(
            f"ftp-session: unsupported language '{args.language}', "
            f"choose from {', '.join(catalog.languages)}",
            file=sys.stderr
        )
        return EXIT_SESSION_FAILED

    if settings_manager is None:
        setup_logging(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            log_file=get_log_file_path()
        )
        settings_manager = SettingsManager()
    logger = get_logger(__name__)

    credentials = credentials or CredentialManager()

    try:
        settings = resolve_settings(args, settings_manager.load())
    except ValueError as e:
        print(f"ftp-session: {e}", file=sys.stderr)
        return EXIT_SESSION_FAILED

    is_valid, error = validate_host(settings.host)
    if not is_valid:
        print(f"ftp-session: {error}", file=sys.stderr)
        return EXIT_SESSION_FAILED

    password = resolve_password(args, settings, credentials)
    if args.save_password:
        credentials.save_password(settings.host, settings.username, password)

    method_name, arg_names = COMMANDS[args.command]
    command_args = [getattr(args, name) for name in arg_names]

    session_kwargs.setdefault("messages", catalog)
    with create_session(settings, password, **session_kwargs) as session:
        try:
            result = getattr(session, method_name)(*command_args)
        except (FTPConnectionError, FTPAuthenticationError) as e:
            logger.error(f"{args.command} aborted: {e}")
            print(e.message, file=sys.stderr)
            return EXIT_SESSION_FAILED

    if not result:
        logger.warning(f"{args.command} {' '.join(command_args)} failed on {settings.host}")
        print(f"ftp-session: {args.command} failed", file=sys.stderr)
        return EXIT_COMMAND_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
