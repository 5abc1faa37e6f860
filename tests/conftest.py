import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from undercroft import logging_utils  # noqa: E402
from undercroft.dungeon import DungeonRandom, GenerationConfig  # noqa: E402

DUNGEON_ENV_KEYS = (
    "DUNGEON_SEED",
    "DUNGEON_FLOOR_SIZE",
    "DUNGEON_FLOORS_ABOVE",
    "DUNGEON_FLOORS_BELOW",
    "DUNGEON_ROOM_BUILDERS",
    "DUNGEON_MAX_ROOM_ATTEMPTS",
    "DUNGEON_ENABLE_GENERATION_METRICS",
    "UNDERCROFT_LOG_LEVEL",
    "UNDERCROFT_LOG_JSON",
)


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: timing guards for the generation pipeline")


@pytest.fixture(autouse=True)
def _clean_dungeon_env(monkeypatch):
    """Keep developer shells and .env files from leaking generation overrides into tests."""
    for key in DUNGEON_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def _restore_log_level():
    level = logging_utils.CURRENT_LEVEL
    json_mode = logging_utils.JSON_MODE
    logging_utils.configure_from_env({})
    yield
    logging_utils.CURRENT_LEVEL = level
    logging_utils.JSON_MODE = json_mode


@pytest.fixture()
def rng():
    return DungeonRandom(1)


@pytest.fixture()
def bounded_config():
    """Default layout ranges with a retry cap so a bad seed fails instead of hanging."""
    return GenerationConfig(max_room_attempts=500)
