"""Mapping between persisted options and the editable UI shape.

Persisted values look like ``{"value", "position", "isActive"}``; the UI works
with ``{"name", "position", "checked"}``. All functions here are pure and
return new dicts.
"""
import uuid


def _as_dict(option):
    return option.to_dict() if hasattr(option, "to_dict") else option


def to_ui_shape(options):
    """Convert persisted options (models or dicts) to UI options."""
    ui_options = []
    for option in options:
        data = _as_dict(option)
        ui_options.append(
            {
                "id": data.get("id"),
                "name": data.get("name"),
                "type": data.get("type") or "text",
                "position": data.get("position") or 0,
                "values": [
                    {
                        "name": v.get("value"),
                        "position": v.get("position") or 0,
                        "checked": bool(v.get("isActive", True)),
                    }
                    for v in data.get("values") or []
                ],
            }
        )
    return ui_options


def from_ui_edit(original, new_name, new_value_names, new_type):
    """Apply an edit to a UI option, keeping the checked state of kept values.

    Values that did not exist before start checked; values missing from
    ``new_value_names`` are dropped.
    """
    previous = {v["name"]: v["checked"] for v in original.get("values", [])}
    return {
        **original,
        "name": new_name,
        "type": new_type,
        "values": [
            {"name": name, "position": index, "checked": previous.get(name, True)}
            for index, name in enumerate(new_value_names)
        ],
    }


def build_new_ui_option(name, value_names, option_type):
    """Fresh UI option for optimistic display before the server assigns an id."""
    return {
        "id": f"temp-{uuid.uuid4().hex}",
        "name": name,
        "type": option_type or "text",
        "position": 0,
        "values": [
            {"name": v, "position": index, "checked": True}
            for index, v in enumerate(value_names)
        ],
    }


def prepare_option_for_submit(name, value_names, option_type):
    """The ``optionSet`` payload posted to the admin endpoint."""
    return {
        "optionName": name,
        "values": list(value_names),
        "optionType": option_type,
    }


def add_value_name(value_names, candidate):
    """Append ``candidate`` unless it is blank or already listed."""
    candidate = (candidate or "").strip()
    if not candidate or candidate in value_names:
        return list(value_names)
    return [*value_names, candidate]


def is_temporary_id(option_id):
    return isinstance(option_id, str) and option_id.startswith("temp-")
