import json

from layoutforge.dungeon.records import FogOfWarState, LevelRef, Stair, WorldIntegration


def test_stair_serializes_all_fields():
    stair = Stair(id="stair-0", x=3, y=4, from_level=0, to_level=1, direction="down", description="Worn steps")
    assert stair.to_dict() == {
        "id": "stair-0",
        "x": 3,
        "y": 4,
        "from_level": 0,
        "to_level": 1,
        "direction": "down",
        "description": "Worn steps",
    }


def test_level_ref_condition_is_optional():
    assert "condition" not in LevelRef(0, 1, "way out").to_dict()
    assert LevelRef(0, 1, "way out", condition="after the boss").to_dict()["condition"] == "after the boss"


def test_world_integration_omits_missing_parent():
    assert WorldIntegration().to_dict() == {"connected_locations": [], "associated_factions": []}
    data = WorldIntegration(parent_location_id="w1", associated_factions=[{"id": "f", "role": "owner"}]).to_dict()
    assert data["parent_location_id"] == "w1"
    assert data["associated_factions"] == [{"id": "f", "role": "owner"}]


def test_fog_of_war_defaults():
    fog = FogOfWarState()
    assert fog.to_dict()["entry_point_visible"] is True
    assert json.loads(json.dumps(fog.to_dict()))["revealed_rooms"] == []
