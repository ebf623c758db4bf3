import pytest

from layoutforge.dungeon.profiles import (
    ARCHETYPES,
    LAYOUT_PROFILES,
    corridor_style_for,
    get_layout_profile,
    list_archetypes,
    resolve_dungeon_type,
    texture_set_for,
)


@pytest.mark.parametrize(
    "theme,expected",
    [
        ("Flooded Cave", "cave"),
        ("crystal grotto", "cave"),
        ("ancient crypt", "ruin"),
        ("Ruined Abbey", "ruin"),
        ("Mountain Keep", "fortress"),
        ("iron citadel", "fortress"),
        ("wizard spire", "tower"),
        ("sunken cathedral", "temple"),
        ("dragon lair", "lair"),
        ("goblin den", "lair"),
        ("test dungeon", "dungeon"),
        ("", "dungeon"),
        (None, "dungeon"),
    ],
)
def test_resolve_dungeon_type(theme, expected):
    assert resolve_dungeon_type(theme) == expected


def test_keyword_precedence_prefers_earlier_archetype():
    # cave is checked before lair, crypt before tower
    assert resolve_dungeon_type("cave den") == "cave"
    assert resolve_dungeon_type("crypt tower") == "ruin"


def test_profile_table_values():
    archetype, cave = get_layout_profile("the deep caves")
    assert archetype == "cave"
    assert cave.room_padding == 2
    assert cave.feature_bias == "organic"
    fortress = LAYOUT_PROFILES["fortress"]
    assert (fortress.min_room_size, fortress.max_room_size, fortress.min_split_size) == (4, 11, 7)
    assert all(p.default_tile_span == 2 for p in LAYOUT_PROFILES.values())


def test_every_profile_is_internally_consistent():
    for name, p in LAYOUT_PROFILES.items():
        assert 1 <= p.min_room_size <= p.max_room_size, name
        assert 0.4 <= p.split_ratio <= 0.6, name
        assert 0 <= p.room_density <= 1, name


def test_corridor_style_follows_feature_bias():
    assert corridor_style_for(LAYOUT_PROFILES["cave"]) == "organic"
    assert corridor_style_for(LAYOUT_PROFILES["lair"]) == "organic"
    assert corridor_style_for(LAYOUT_PROFILES["fortress"]) == "straight"
    assert corridor_style_for(LAYOUT_PROFILES["dungeon"]) == "straight"


def test_texture_set_defaults_to_dungeon():
    assert texture_set_for("cave") == {"floor": "cave", "wall": "cave"}
    assert texture_set_for("unknown") == texture_set_for("dungeon")
    # returned dict is a copy
    texture_set_for("dungeon")["floor"] = "lava"
    assert texture_set_for("dungeon")["floor"] == "stone"


def test_list_archetypes_covers_all_types():
    items = list_archetypes()
    assert [i["type"] for i in items] == list(ARCHETYPES)
    for item in items:
        assert set(item) == {"type", "definition", "profile", "textures"}
        assert item["definition"]["typical_features"]
        assert item["profile"]["min_room_size"] >= 1
