"""Administrative command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import ValidationError
from safir.click import display_help

from .codec import TokenCodec
from .config import Config
from .constants import CONFIG_PATH, DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS
from .exceptions import AuthenticationError, InvalidConfigurationError
from .keypair import generate_key as generate_signing_key

__all__ = ["generate_key", "help", "main", "mint", "verify"]


def _load_codec(config_path: Path) -> TokenCodec:
    try:
        config = Config.from_file(config_path)
        return TokenCodec.from_config(config)
    except OSError as e:
        raise click.UsageError(f"Cannot read {config_path}: {e!s}") from e
    except (InvalidConfigurationError, ValidationError) as e:
        raise click.ClickException(f"Invalid configuration: {e!s}") from e


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
def main() -> None:
    """Administrative command-line interface for jwtgate."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@click.option(
    "--algorithm",
    type=click.Choice(sorted(SUPPORTED_ALGORITHMS)),
    default=DEFAULT_ALGORITHM,
    show_default=True,
    help="Signing algorithm the key will be used with.",
)
def generate_key(*, algorithm: str) -> None:
    """Generate a new signing key.

    Prints a random secret for HMAC algorithms and a PEM-encoded private key
    for RSA and ECDSA algorithms, suitable for the key setting.
    """
    key = generate_signing_key(algorithm)
    click.echo(key.decode().rstrip("\n"))


@main.command()
@click.argument("username")
@click.option(
    "--config-path",
    envvar="JWTGATE_CONFIG_PATH",
    type=click.Path(path_type=Path),
    default=CONFIG_PATH,
    help="Application configuration file.",
)
def mint(*, username: str, config_path: Path) -> None:
    """Mint a token for a user without checking credentials."""
    codec = _load_codec(config_path)
    try:
        click.echo(codec.mint(username))
    except AuthenticationError as e:
        raise click.ClickException(f"{e.error}: {e!s}") from e


@main.command()
@click.argument("token")
@click.option(
    "--config-path",
    envvar="JWTGATE_CONFIG_PATH",
    type=click.Path(path_type=Path),
    default=CONFIG_PATH,
    help="Application configuration file.",
)
def verify(*, token: str, config_path: Path) -> None:
    """Verify a token and print its claims as JSON."""
    codec = _load_codec(config_path)
    try:
        claims = codec.verify(token)
    except AuthenticationError as e:
        raise click.ClickException(f"{e.error}: {e!s}") from e
    click.echo(json.dumps(claims.to_payload(), indent=2, sort_keys=True))
