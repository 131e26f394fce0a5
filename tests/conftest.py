"""Shared fixtures."""

import pytest

from freestuff.models import GameInfo
from freestuff.services.decoding import decode_game_info
from payloads import game_payload


@pytest.fixture
def sample_game() -> GameInfo:
    return decode_game_info(game_payload())
