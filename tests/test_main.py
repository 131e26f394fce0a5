"""Tests for the command line entry point."""

import asyncio
import io
import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import structlog

from freestuff.main import chunked, format_price, parse_arguments, run, run_command
from freestuff.models import Price
from freestuff.services.client import FreestuffClient
from freestuff.services.config import API_KEY_ENV_VAR
from payloads import envelope, game_payload


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
    structlog.reset_defaults()


def make_client(handler) -> FreestuffClient:
    return FreestuffClient.builder().key("key").transport(httpx.MockTransport(handler)).build()


def execute(argv: list[str], handler) -> str:
    out = io.StringIO()

    async def scenario() -> None:
        async with make_client(handler) as client:
            await run_command(client, parse_arguments(argv), out)

    asyncio.run(scenario())
    return out.getvalue()


def test_parse_arguments_defaults() -> None:
    args = parse_arguments(["list"])
    assert args.command == "list"
    assert args.category == "free"
    assert args.api_key is None
    assert args.log_level == "WARNING"


def test_parse_info_ids() -> None:
    args = parse_arguments(["--api-key", "k", "info", "1", "2"])
    assert args.game_ids == [1, 2]
    assert args.api_key == "k"


def test_chunked() -> None:
    assert list(chunked([1, 2, 3, 4, 5, 6, 7], 5)) == [[1, 2, 3, 4, 5], [6, 7]]
    assert list(chunked([], 5)) == []


@pytest.mark.parametrize(
    ("price", "text"),
    [
        (None, "n/a"),
        (Price(), "n/a"),
        (Price(euro=19.99), "€19.99"),
        (Price(euro=19.99, dollar=21.5), "€19.99 / $21.50"),
    ],
)
def test_format_price(price: Price | None, text: str) -> None:
    assert format_price(price) == text


def test_ping_command() -> None:
    assert execute(["ping"], lambda request: httpx.Response(200, content=b"{}")) == "ok\n"


def test_list_command() -> None:
    output = execute(["list", "approved"], lambda request: httpx.Response(200, content=envelope([3, 4])))
    assert output.splitlines() == ["3", "4"]


def test_info_command_batches_requests() -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        ids = request.url.path.split("/")[3].split("+")
        return httpx.Response(200, content=envelope({game_id: game_payload(title=f"Game {game_id}") for game_id in ids}))

    output = execute(["info", "1", "2", "3", "4", "5", "6"], handler)

    assert paths == ["/v1/game/1+2+3+4+5/info", "/v1/game/6/info"]
    lines = output.splitlines()
    assert len(lines) == 6
    assert lines[5].split("\t")[:4] == ["6", "Game 6", "steam", "free"]


def test_missing_api_key_exits_with_configuration_error(capsys: pytest.CaptureFixture[str]) -> None:
    environment = {k: v for k, v in os.environ.items() if k != API_KEY_ENV_VAR}
    with tempfile.TemporaryDirectory() as temp_dir:
        with patch.dict(os.environ, environment, clear=True):
            exit_code = run(["--config", str(Path(temp_dir) / "missing.json"), "ping"])

    assert exit_code == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_client_errors_exit_with_one(capsys: pytest.CaptureFixture[str]) -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429)

    with patch("freestuff.main.build_client", lambda args: make_client(fail)):
        exit_code = run(["--api-key", "key", "ping"])

    assert exit_code == 1
    assert "Too many requests" in capsys.readouterr().err


@pytest.mark.parametrize("value", ["-5", str(2**64), "abc"])
def test_invalid_game_id_is_a_usage_error(value: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        run(["--api-key", "key", "info", value])

    assert exc_info.value.code == 2
    assert "invalid game id" in capsys.readouterr().err


def test_largest_game_id_is_accepted() -> None:
    assert parse_arguments(["info", str(2**64 - 1)]).game_ids == [2**64 - 1]
