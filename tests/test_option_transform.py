"""Tests for persisted <-> UI option mapping."""
from options_manager.services import option_service
from options_manager.services.option_transform import (
    add_value_name,
    build_new_ui_option,
    from_ui_edit,
    is_temporary_id,
    prepare_option_for_submit,
    to_ui_shape,
)


def test_to_ui_shape_renames_fields():
    persisted = [{
        "id": "opt-1",
        "name": "Color",
        "type": "color",
        "position": 3,
        "values": [
            {"id": "v1", "value": "Red", "position": 0, "isActive": True},
            {"id": "v2", "value": "Blue", "position": 1, "isActive": False},
        ],
    }]

    assert to_ui_shape(persisted) == [{
        "id": "opt-1",
        "name": "Color",
        "type": "color",
        "position": 3,
        "values": [
            {"name": "Red", "position": 0, "checked": True},
            {"name": "Blue", "position": 1, "checked": False},
        ],
    }]


def test_to_ui_shape_defaults_type_and_position():
    ui = to_ui_shape([{"id": "opt-1", "name": "Legacy", "values": []}])
    assert ui[0]["type"] == "text"
    assert ui[0]["position"] == 0


def test_to_ui_shape_accepts_models(db):
    option = option_service.create_option(
        "shop.myshopify.com",
        {"name": "Size", "values": ["S", {"value": "M", "isActive": False}]},
    )
    ui = to_ui_shape([option])
    assert ui[0]["id"] == option.id
    assert [(v["name"], v["checked"]) for v in ui[0]["values"]] == [("S", True), ("M", False)]


def test_from_ui_edit_preserves_checked_state():
    original = {
        "id": "opt-1",
        "name": "Color",
        "type": "color",
        "position": 0,
        "values": [
            {"name": "Red", "position": 0, "checked": False},
            {"name": "Blue", "position": 1, "checked": False},
        ],
    }

    edited = from_ui_edit(original, "Colour", ["Red", "Green"], "color")

    assert edited["id"] == "opt-1"
    assert edited["name"] == "Colour"
    assert [(v["name"], v["checked"]) for v in edited["values"]] == [
        ("Red", False),
        ("Green", True),
    ]
    # original untouched
    assert [v["name"] for v in original["values"]] == ["Red", "Blue"]


def test_build_new_ui_option():
    first = build_new_ui_option("Size", ["S", "M"], "text")
    second = build_new_ui_option("Size", ["S", "M"], "text")

    assert first["id"] != second["id"]
    assert is_temporary_id(first["id"])
    assert first["name"] == "Size"
    assert all(v["checked"] for v in first["values"])
    assert [v["position"] for v in first["values"]] == [0, 1]


def test_prepare_option_for_submit():
    assert prepare_option_for_submit("Size", ("S", "M"), "text") == {
        "optionName": "Size",
        "values": ["S", "M"],
        "optionType": "text",
    }


def test_add_value_name_filters_duplicates_and_blanks():
    values = add_value_name([], " Red ")
    values = add_value_name(values, "Red")
    values = add_value_name(values, "   ")
    values = add_value_name(values, "Blue")
    assert values == ["Red", "Blue"]


def test_is_temporary_id():
    assert not is_temporary_id("3f0c1e8a-0000-4000-8000-000000000000")
    assert not is_temporary_id(None)
