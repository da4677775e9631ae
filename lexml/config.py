"""Configuration loading and management."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


class OutputMode(str, enum.Enum):
    """Where tokens go.

    Attributes:
        CONSOLE: Tokens are printed as they are found.
        STREAM: Tokens are handed one by one to a consumer through a channel.
    """

    CONSOLE = "console"
    STREAM = "stream"


# Numeric selectors accepted on the command line and in config files.
OUTPUT_MODE_ALIASES = {
    "0": OutputMode.CONSOLE,
    "1": OutputMode.STREAM,
}


@dataclass
class LexConfig:
    """Configuration for lexing protocol definition files.

    Attributes:
        token_output: Output mode, ``"console"`` or ``"stream"`` (or the
            numeric aliases ``0`` and ``1``).
        strict: Raise on malformed lines instead of warning and going on.
        max_line_length: Maximum length of a physical line in characters.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        LexConfig(token_output="stream", strict=False)
    """

    token_output: str | int = OutputMode.CONSOLE.value
    strict: bool = True

    # Limits
    max_line_length: int = 10_000
    max_file_size: int = 10 * 1024 * 1024

    @property
    def output_mode(self) -> OutputMode:
        """The output mode as an `OutputMode` member."""
        return normalize_output_mode(self.token_output)


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_line_length` must be a positive integer")
    """


def normalize_output_mode(value: object) -> OutputMode:
    """Map an output selector to an `OutputMode`.

    Args:
        value: ``"console"``, ``"stream"``, ``0``, ``1`` or the string forms of
            the numbers.

    Returns:
        OutputMode: The selected mode.

    Raises:
        ConfigError: If the value names no known mode.
    """
    if isinstance(value, OutputMode):
        return value
    if isinstance(value, bool):
        raise ConfigError("`token_output` must be one of: console, stream, 0, 1")
    key = str(value).strip().lower()
    if key in OUTPUT_MODE_ALIASES:
        return OUTPUT_MODE_ALIASES[key]
    try:
        return OutputMode(key)
    except ValueError as error:
        raise ConfigError("`token_output` must be one of: console, stream, 0, 1") from error


def load_config(search_path: Path) -> LexConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.lexml]`` table from `pyproject.toml` and the ``[lexml]`` or
    ``[tool.lexml]`` table from `.lexml.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        LexConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("protocols"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "lexml")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".lexml.toml",
            table_paths=[("lexml",), ("tool", "lexml")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return LexConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> LexConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> LexConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return LexConfig()

    # TOML keys may use dashes, dataclass fields use underscores
    fields = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return LexConfig(**fields)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: LexConfig) -> LexConfig:
    return replace(config, token_output=normalize_output_mode(config.token_output).value)


def validate_config(config: LexConfig) -> None:
    """Validate a `LexConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the output mode is unknown, `strict` is not a boolean,
            or numeric limits are not positive integers.

    Examples:
        validate_config(LexConfig(max_line_length=200))
    """
    config = normalize_config(config)

    if not isinstance(config.strict, bool):
        raise ConfigError("`strict` must be a boolean")

    limits = {
        "max_line_length": config.max_line_length,
        "max_file_size": config.max_file_size,
    }
    _ensure_integers(limits)
    _ensure_positive(limits)


def apply_overrides(config: LexConfig, **overrides: object) -> LexConfig:
    """Apply override values to a `LexConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        LexConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `LexConfig`.

    Examples:
        updated = apply_overrides(config, token_output="stream", strict=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> LexConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        LexConfig: Validated configuration ready for lexing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), token_output="1")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
