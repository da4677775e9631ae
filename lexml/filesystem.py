"""Filesystem helpers for lexml."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH

MAX_FILE_SIZE_ENV_VAR = "LEXML_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "LEXML_MAX_LINE_LENGTH"


def _positive_int_from_env(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        error_message = f"{name} must be a positive integer, got {value}."
        raise ValueError(error_message)

    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["LEXML_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length.

    Args:
        default: Fallback value in characters when the environment variable is
            unset.

    Returns:
        int: Maximum allowed line length in characters.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _positive_int_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate the path of an input file.

    Args:
        raw_path: User-supplied path (absolute, relative or starting with ``~``).

    Returns:
        Path: Absolute path to the file.

    Raises:
        ValueError: If the path does not exist or is not a regular file.

    Examples:
        normalize_filepath("protocols/ardrone3.xml")
    """
    path = Path(raw_path).expanduser()

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Raises:
        IOError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Args:
        stat_result: File stat used to determine size in bytes.
        max_size: Maximum allowed size in bytes.
        filepath: Path to the file being checked.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("ardrone3.xml")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error
