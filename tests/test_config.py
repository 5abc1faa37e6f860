import pytest

from undercroft.dungeon.config import DEFAULT_BUILDERS, DungeonLayoutConfig, GenerationConfig, parse_range


def test_parse_range_accepts_both_separators():
    assert parse_range("3..5") == (3, 5)
    assert parse_range(" 0 , 2 ") == (0, 2)
    with pytest.raises(ValueError):
        parse_range("3")
    with pytest.raises(ValueError):
        parse_range("a..b")


def test_defaults():
    cfg = GenerationConfig()
    assert cfg.seed is None
    assert cfg.layout == DungeonLayoutConfig((3, 5), (0, 2), (0, 2))
    assert cfg.builders == DEFAULT_BUILDERS
    assert cfg.max_room_attempts is None
    assert cfg.enable_metrics is True


def test_env_overrides():
    env = {
        "DUNGEON_SEED": "99",
        "DUNGEON_FLOOR_SIZE": "2..4",
        "DUNGEON_FLOORS_BELOW": "1,3",
        "DUNGEON_ROOM_BUILDERS": " grid , cavern ,",
        "DUNGEON_MAX_ROOM_ATTEMPTS": "25",
        "DUNGEON_ENABLE_GENERATION_METRICS": "0",
    }
    cfg = GenerationConfig.from_env(env)
    assert cfg.seed == 99
    assert cfg.layout.floor_size == (2, 4)
    assert cfg.layout.floors_above == (0, 2)
    assert cfg.layout.floors_below == (1, 3)
    assert cfg.builders == ("grid", "cavern")
    assert cfg.max_room_attempts == 25
    assert cfg.enable_metrics is False


def test_explicit_overrides_beat_environment():
    env = {"DUNGEON_SEED": "99", "DUNGEON_ROOM_BUILDERS": "grid", "DUNGEON_FLOORS_ABOVE": "3..4"}
    layout = DungeonLayoutConfig(floors_above=(1, 2))
    cfg = GenerationConfig.from_env(env, seed=5, builders=("automata",), layout=layout)
    assert cfg.seed == 5
    assert cfg.builders == ("automata",)
    assert cfg.layout.floors_above == (1, 2)


def test_empty_env_values_are_ignored():
    cfg = GenerationConfig.from_env({"DUNGEON_SEED": "", "DUNGEON_FLOOR_SIZE": ""})
    assert cfg.seed is None
    assert cfg.layout.floor_size == (3, 5)


@pytest.mark.parametrize(
    "env",
    [
        {"DUNGEON_FLOOR_SIZE": "5..5"},
        {"DUNGEON_FLOORS_ABOVE": "-1..2"},
        {"DUNGEON_MAX_ROOM_ATTEMPTS": "0"},
        {"DUNGEON_ROOM_BUILDERS": " , "},
        {"DUNGEON_SEED": "abc"},
    ],
)
def test_invalid_env_values_raise(env):
    with pytest.raises(ValueError):
        GenerationConfig.from_env(env)


def test_invalid_generation_config():
    with pytest.raises(ValueError):
        GenerationConfig(builders=())
    with pytest.raises(ValueError):
        GenerationConfig(max_room_attempts=0)
