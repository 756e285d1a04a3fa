import json

from parcel_extractor.records import (
    add_layout,
    add_room_layouts,
    empty_utility,
    read_staged,
    resolve_floor_level,
    write_layouts,
    write_staged,
    write_structures,
    empty_structure,
)

SOURCE = {"request_identifier": "123"}


def _load(path):
    with open(path) as f:
        return json.load(f)


def test_resolve_floor_level():
    assert resolve_floor_level(0, None) is None
    assert resolve_floor_level(3, 1) == "1st Floor"
    assert resolve_floor_level(0, 2) == "1st Floor"
    assert resolve_floor_level(1, 2) == "2nd Floor"


def test_add_room_layouts_counts_primary_rooms_and_half_bath():
    layouts = add_room_layouts([], 3, 2.5, 2)

    assert [l["space_type"] for l in layouts] == [
        "Primary Bedroom",
        "Bedroom",
        "Bedroom",
        "Primary Bathroom",
        "Full Bathroom",
        "Half Bathroom / Powder Room",
    ]
    assert [l["space_index"] for l in layouts] == [1, 2, 3, 4, 5, 6]
    assert layouts[1]["floor_level"] == "2nd Floor"
    assert all(l["is_finished"] and not l["is_exterior"] for l in layouts)


def test_add_room_layouts_without_counts():
    assert add_room_layouts([], None, None) == []


def test_empty_utility_defaults_solar_flags():
    utility = empty_utility(cooling_system_type="CentralAir")

    assert utility["solar_panel_present"] is False
    assert utility["solar_inverter_visible"] is False
    assert utility["cooling_system_type"] == "CentralAir"
    assert utility["heating_system_type"] is None


def test_staged_items_roundtrip_through_owners_dir(tmp_path):
    write_staged("layout_data.json", "A-1", "layouts", [{"space_type": "Bedroom"}], str(tmp_path))

    assert _load(tmp_path / "layout_data.json") == {
        "property_A-1": {"layouts": [{"space_type": "Bedroom"}]}
    }
    assert read_staged("layout_data.json", "A-1", "layouts", str(tmp_path)) == [{"space_type": "Bedroom"}]
    assert read_staged("layout_data.json", "B-2", "layouts", str(tmp_path)) == []
    assert read_staged("missing.json", "A-1", "layouts", str(tmp_path)) == []


def test_building_layouts_link_rooms_and_structures(tmp_path):
    layouts = []
    add_layout(layouts, "Building", building_number=1)
    add_layout(layouts, "Living Area", building_number=1)
    add_layout(layouts, "Building", building_number=2)
    add_layout(layouts, "Bedroom", building_number=2)

    write_layouts(layouts, SOURCE, str(tmp_path))
    structures = [
        empty_structure(building_number=1, structure_index=1),
        empty_structure(building_number=2, structure_index=2),
    ]
    write_structures(structures, layouts, SOURCE, str(tmp_path))

    assert _load(tmp_path / "layout_2.json")["space_type"] == "Living Area"
    assert _load(tmp_path / "layout_2.json")["request_identifier"] == "123"
    assert _load(tmp_path / "relationship_layout_1_has_layout_2.json") == {
        "from": {"/": "./layout_1.json"},
        "to": {"/": "./layout_2.json"},
    }
    assert _load(tmp_path / "relationship_layout_2_has_layout_4.json")["from"] == {"/": "./layout_3.json"}
    assert not (tmp_path / "relationship_layout_1_has_layout_4.json").exists()
    assert _load(tmp_path / "relationship_layout_2_has_structure_2.json") == {
        "from": {"/": "./layout_3.json"},
        "to": {"/": "./structure_2.json"},
    }


def test_structure_without_building_is_not_linked(tmp_path):
    write_structures([empty_structure(building_number=None, structure_index=1)], [], SOURCE, str(tmp_path))

    assert (tmp_path / "structure_1.json").exists()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["structure_1.json"]
