"""CLI output utilities and formatting."""

import functools
import logging
from datetime import datetime, timezone

import click
from colorama import Fore, Style

from sprig.core.errors import SprigError, StorageError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def header(title: str) -> str:
    """Format a status section header."""
    return f"{Style.BRIGHT}=== {title} ==={Style.RESET_ALL}"


def format_timestamp(timestamp: int, utc: bool = False) -> str:
    """Format Unix timestamp the way log prints it."""
    if utc:
        dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    else:
        dt = datetime.fromtimestamp(timestamp).astimezone()
    return dt.strftime(DATE_FORMAT)


def format_commit(commit, utc: bool = False) -> str:
    """Render one log entry."""
    lines = [
        "===",
        f"{Fore.YELLOW}commit {commit.id}{Style.RESET_ALL}",
    ]
    if commit.is_merge:
        lines.append(f"Merge: {commit.parent[:7]} {commit.second_parent[:7]}")
    lines.append(f"Date: {format_timestamp(commit.timestamp, utc)}")
    lines.append(commit.message)
    lines.append("")
    return '\n'.join(lines)


def reports_errors(func):
    """
    Turn Sprig failures into a single red line and exit status 1.

    OSErrors are wrapped in StorageError first so users never see a
    raw traceback.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OSError as e:
            logger.debug("I/O failure", exc_info=True)
            failure = StorageError.from_os_error(e)
        except SprigError as e:
            failure = e
        click.echo(error(str(failure)))
        raise click.exceptions.Exit(1)
    return wrapper
