import pytest

from layoutforge.dungeon.config import SEED_MAX_INT, DungeonGenerationParams, coerce_seed


def test_coerce_seed_ints_and_digit_strings():
    assert coerce_seed(42) == 42
    assert coerce_seed("42") == 42
    assert coerce_seed(" 42 ") == 42
    assert coerce_seed(SEED_MAX_INT + 5) == 5


def test_coerce_seed_hashes_text_deterministically():
    a = coerce_seed("haunted crypt")
    assert a == coerce_seed("haunted crypt")
    assert a != coerce_seed("haunted crypts")
    assert 0 <= a < SEED_MAX_INT


@pytest.mark.parametrize("value", [None, "", "   "])
def test_coerce_seed_random_when_missing(value):
    s = coerce_seed(value)
    assert 1 <= s <= 1_000_000


def test_from_dict_ignores_unknown_keys_and_nulls():
    p = DungeonGenerationParams.from_dict({"grid_width": 30, "theme": None, "bogus": 1})
    assert p.grid_width == 30
    assert p.grid_height == 50
    assert p.theme is None


def test_normalized_swaps_inverted_room_bounds():
    p = DungeonGenerationParams(min_room_size=9, max_room_size=4).normalized()
    assert (p.min_room_size, p.max_room_size) == (4, 9)


def test_normalized_clamps_ratios_and_levels():
    p = DungeonGenerationParams(
        room_density=1.7,
        extra_connections_ratio=-0.2,
        secret_door_ratio=3,
        num_levels=12,
        grid_width=0,
    ).normalized()
    assert p.room_density == 1.0
    assert p.extra_connections_ratio == 0.0
    assert p.secret_door_ratio == 1.0
    assert p.num_levels == 5
    assert p.grid_width == 1
    assert DungeonGenerationParams(num_levels=0).normalized().num_levels == 1


def test_normalized_unknown_difficulty_is_medium():
    assert DungeonGenerationParams(difficulty="nightmare").normalized().difficulty == "medium"
    assert DungeonGenerationParams(difficulty="deadly").normalized().difficulty == "deadly"


def test_normalized_tile_spans_stay_consistent():
    p = DungeonGenerationParams(max_room_size=6, min_tile_span=9, max_tile_span=2).normalized()
    assert p.min_tile_span == 6
    assert p.max_tile_span == 6
    p = DungeonGenerationParams(min_tile_span=0).normalized()
    assert p.min_tile_span == 1 and p.max_tile_span is None


def test_normalized_leaves_original_untouched():
    raw = DungeonGenerationParams(num_levels=9)
    raw.normalized()
    assert raw.num_levels == 9
    assert raw.to_dict()["num_levels"] == 9


@pytest.mark.parametrize("value", ["²", "١٢", "-7"])
def test_coerce_seed_hashes_non_ascii_and_signed_digits(value):
    s = coerce_seed(value)
    assert s == coerce_seed(value)
    assert 0 <= s < SEED_MAX_INT
