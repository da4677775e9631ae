"""
Lexes a protocol definition file into tokens.
Tokens are either printed as they are found, or handed through a channel to a
consumer running alongside the lexer, which prints them.
"""

from __future__ import annotations

from dataclasses import replace

import click
from .config import ConfigError, OutputMode, build_config
from .exceptions import LexError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
    safe_read,
)
from .lexer import Lexer, lex_start
from .sinks import ConsoleSink

__all__ = ["cli"]


def _warn(message: str) -> None:
    click.echo(f"Warning: {message}", err=True)


@click.command()
@click.version_option()
@click.option(
    "--file-name",
    "-f",
    "file_name",
    required=True,
    type=click.Path(dir_okay=False),
    help="File to lex.",
)
@click.option(
    "--token-output",
    type=click.Choice(["0", "1"]),
    help="'0' prints tokens to the console, '1' sends them through a channel to a reader.",
)
@click.option("--strict/--lenient", default=None, help="Fail or warn on malformed lines.")
@click.option("--max-line-length", type=int, help="Maximum physical line length.")
def cli(
    file_name: str,
    token_output: str | None = None,
    strict: bool | None = None,
    max_line_length: int | None = None,
):
    """
    Entry point for lexing a protocol definition file.

    Args:
        file_name: Path to the file to lex.
        token_output: ``"0"`` for console output, ``"1"`` for channel output.
        strict: Override for raising on malformed lines.
        max_line_length: Override for the maximum physical line length.

    Raises:
        click.BadParameter: If the path or the configuration is invalid.
        click.ClickException: If the file cannot be opened or read, or its
            content is malformed.

    Examples:
        lexml --file-name ardrone3.xml --token-output 1
    """
    try:
        filepath = normalize_filepath(file_name)
    except ValueError as error:
        raise click.BadParameter(str(error), param_hint="'--file-name'") from error
    try:
        config = build_config(
            filepath.parent,
            token_output=token_output,
            strict=strict,
            max_line_length=max_line_length,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = replace(
            config,
            max_file_size=get_max_file_size(default=config.max_file_size),
            max_line_length=(
                config.max_line_length
                if max_line_length is not None
                else get_max_line_length(default=config.max_line_length)
            ),
        )
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), config.max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        with safe_read(filepath) as stream:
            if config.output_mode is OutputMode.STREAM:
                for token in lex_start(stream, config=config, warn=_warn):
                    click.echo(
                        f"*readToken from channel * {token.kind.value}, tokenText = {token.text}"
                    )
            else:
                Lexer(stream, ConsoleSink(), config=config, warn=_warn).run()
    except UnicodeDecodeError as error:
        raise click.ClickException(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except IOError as error:
        raise click.ClickException(str(error)) from error
    except LexError as error:
        raise click.ClickException(f"{filepath}: {error}") from error


if __name__ == "__main__":
    cli()
