import copy

from shclip.status import STATUS_FIELDS, StatusField, format_mode


def test_empty_field_shows_dash():
    assert StatusField(label="Vertices", fmt="{:d}").text() == "Vertices: -"


def test_field_uses_format():
    field = StatusField(label="Vertices", fmt="{:d}", value=8)
    assert field.text() == "Vertices: 8"


def test_field_uses_formatter():
    field = StatusField(label="Mode", formatter=format_mode, value=False)
    assert field.text() == "Mode: original"
    field.value = True
    assert field.text() == "Mode: clipped"


def test_status_fields_copy_is_independent():
    fields = copy.deepcopy(STATUS_FIELDS)
    fields["vertex_count"].value = 4
    assert STATUS_FIELDS["vertex_count"].value is None
    assert fields["vertex_count"].text() == "Vertices: 4"
    assert set(fields) == {"mode", "vertex_count", "viewport", "clip_rect"}
