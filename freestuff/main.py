"""Command line entry point for the freestuff API client.

Examples:
    freestuff ping
    freestuff list free
    freestuff info 1234 5678
"""

import argparse
import asyncio
import dataclasses
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TextIO

import structlog

from freestuff import __version__
from freestuff.models import GameCategory, GameInfo, Price
from freestuff.services.client import MAX_BATCH_SIZE, FreestuffClient
from freestuff.services.config import ConfigurationService
from freestuff.services.decoding import MAX_GAME_ID
from freestuff.services.errors import ConfigurationError, FreestuffError, create_user_message
from freestuff.services.logging import setup_logging

log = structlog.stdlib.get_logger()


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        command: str,
        category: str,
        game_ids: list[int],
        api_key: str | None,
        api_domain: str | None,
        config: Path | None,
        log_level: str,
        log_dir: Path | None,
    ) -> None:
        self.command: str = command
        self.category: str = category
        self.game_ids: list[int] = game_ids
        self.api_key: str | None = api_key
        self.api_domain: str | None = api_domain
        self.config: Path | None = config
        self.log_level: str = log_level
        self.log_dir: Path | None = log_dir


def game_id(value: str) -> int:
    """Argument type for unsigned 64-bit game ids."""
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid game id: {value!r}") from None
    if not 0 <= parsed <= MAX_GAME_ID:
        raise argparse.ArgumentTypeError(f"invalid game id: {value!r}")
    return parsed


def parse_arguments(argv: Sequence[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="freestuff",
        description="Query the freestuffbot.xyz game deals API",
    )
    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _ = parser.add_argument(
        "--api-key",
        default=None,
        help="API key (default: FSA_API environment variable or the config file)",
    )
    _ = parser.add_argument("--api-domain", default=None, help="API base URL")
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/freestuff/config.json)",
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set the logging level (default: WARNING)",
    )
    _ = parser.add_argument("--log-dir", type=Path, default=None, help="Directory for log files")

    subparsers = parser.add_subparsers(dest="command", required=True)
    _ = subparsers.add_parser("ping", help="Check that the API is reachable")
    list_parser = subparsers.add_parser("list", help="List game ids in a category")
    _ = list_parser.add_argument(
        "category",
        nargs="?",
        default=GameCategory.FREE.value,
        choices=[category.value for category in GameCategory],
    )
    info_parser = subparsers.add_parser("info", help="Show details for games")
    _ = info_parser.add_argument("game_ids", type=game_id, nargs="+", metavar="ID")

    ns = parser.parse_args(argv)

    return ParsedArgs(
        command=ns.command,
        category=getattr(ns, "category", GameCategory.FREE.value),
        game_ids=list(getattr(ns, "game_ids", [])),
        api_key=ns.api_key,
        api_domain=ns.api_domain,
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
    )


def build_client(args: ParsedArgs) -> FreestuffClient:
    """Create a client from command-line options, falling back to the config file."""
    if args.api_key:
        builder = FreestuffClient.builder().key(args.api_key)
        if args.api_domain:
            builder = builder.api_domain(args.api_domain)
        return builder.build()

    config = ConfigurationService(args.config).load_config()
    if args.api_domain:
        config = dataclasses.replace(config, api_domain=args.api_domain)
    return FreestuffClient.from_config(config)


def chunked(items: Sequence[int], size: int) -> Iterator[list[int]]:
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def format_price(price: Price | None) -> str:
    if price is None:
        return "n/a"
    parts = []
    if price.euro is not None:
        parts.append(f"€{price.euro:.2f}")
    if price.dollar is not None:
        parts.append(f"${price.dollar:.2f}")
    return " / ".join(parts) or "n/a"


def format_game(game_id: str, game: GameInfo) -> str:
    return "\t".join([
        game_id,
        game.title,
        game.store.value,
        game.announcement.value,
        format_price(game.org_price),
        game.urls.default,
    ])


async def run_command(client: FreestuffClient, args: ParsedArgs, out: TextIO) -> None:
    """Run one command against the API, writing results to ``out``."""
    if args.command == "ping":
        await client.ping()
        print("ok", file=out)
    elif args.command == "list":
        for game_id in await client.game_list(args.category):
            print(game_id, file=out)
    elif args.command == "info":
        for batch in chunked(args.game_ids, MAX_BATCH_SIZE):
            details = await client.game_details(batch)
            for game_id, game in details.items():
                print(format_game(game_id, game), file=out)
    else:
        raise ValueError(f"Unknown command: {args.command}")


async def _run(args: ParsedArgs, out: TextIO) -> None:
    async with build_client(args) as client:
        await run_command(client, args, out)


def run(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """Run the command line tool and return its exit code."""
    args = parse_arguments(argv)
    _ = setup_logging(log_level=args.log_level, log_dir=args.log_dir)
    log.debug("Starting freestuff", version=__version__, command=args.command)

    try:
        asyncio.run(_run(args, out or sys.stdout))
        exit_code = 0
    except ConfigurationError as e:
        print(create_user_message(e), file=sys.stderr)
        exit_code = 2
    except FreestuffError as e:
        print(create_user_message(e), file=sys.stderr)
        exit_code = 1
    except KeyboardInterrupt:
        log.info("Interrupted by user")
        exit_code = 130

    log.debug("Exiting", exit_code=exit_code)
    return exit_code


def main() -> None:
    """Main entry point for the application."""
    sys.exit(run())


if __name__ == "__main__":
    main()
