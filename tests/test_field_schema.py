import pytest

from src.domain.errors import DecodeError, KeyNotFound, TypeMismatch
from src.domain.field_schema import FieldSchemaMap


@pytest.fixture
def fields():
    return FieldSchemaMap({
        "customfield_10806": {
            "required": True,
            "name": "Epic Link",
            "schema": {"type": "any", "customId": 10806},
            "operations": ["set"],
        },
        "priority": {
            "required": False,
            "name": "Priority",
            "allowedValues": [{"name": "High"}, {"name": "Low"}],
        },
    })


def test_typed_accessors(fields):
    assert fields.get_bool("customfield_10806/required") is True
    assert fields.get_string("customfield_10806/name") == "Epic Link"
    assert fields.get_int("customfield_10806/schema/customId") == 10806
    assert fields.get_list("customfield_10806/operations") == ["set"]
    assert fields.get_map("customfield_10806/schema").get_string("type") == "any"


def test_list_index_segment(fields):
    assert fields.get_string("priority/allowedValues/1/name") == "Low"


def test_missing_key(fields):
    with pytest.raises(KeyNotFound) as exc_info:
        fields.get_bool("customfield_10806/hasDefaultValue")
    assert exc_info.value.segment == "hasDefaultValue"
    assert exc_info.value.path == "customfield_10806/hasDefaultValue"


def test_missing_top_level_key(fields):
    with pytest.raises(KeyNotFound):
        fields.get_string("customfield_99999/name")


def test_index_out_of_range(fields):
    with pytest.raises(KeyNotFound):
        fields.get_string("priority/allowedValues/5/name")


def test_type_mismatch(fields):
    with pytest.raises(TypeMismatch) as exc_info:
        fields.get_bool("customfield_10806/name")
    assert exc_info.value.expected == "bool"
    assert exc_info.value.actual == "Epic Link"


def test_bool_is_not_int(fields):
    with pytest.raises(TypeMismatch):
        fields.get_int("customfield_10806/required")


def test_descending_into_scalar(fields):
    with pytest.raises(TypeMismatch):
        fields.get_string("customfield_10806/name/first")


def test_non_numeric_segment_on_list(fields):
    with pytest.raises(TypeMismatch):
        fields.get_string("priority/allowedValues/name")


def test_lookup_errors_are_decode_errors(fields):
    with pytest.raises(DecodeError):
        fields.get_string("nope/name")


def test_mapping_behaviour(fields):
    assert list(fields) == ["customfield_10806", "priority"]
    assert len(fields) == 2
    assert fields["priority"]["name"] == "Priority"
    assert fields == {"customfield_10806": fields["customfield_10806"], "priority": fields["priority"]}
