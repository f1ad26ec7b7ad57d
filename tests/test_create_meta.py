import logging

import pytest

from src.domain.create_meta import (
    IssueTypeFieldMetadata,
    IssueTypeSummary,
    ProjectMetadata,
    QueryOptions,
)
from src.domain.errors import (
    DecodeError,
    IssueTypeNotFound,
    KeyNotFound,
    MissingRequiredFields,
    TypeMismatch,
    UnknownFields,
)
from src.domain.field_schema import FieldSchemaMap


def _meta(fields: dict) -> IssueTypeFieldMetadata:
    return IssueTypeFieldMetadata(id="10002", name="Help", fields=FieldSchemaMap(fields))


@pytest.fixture
def meta():
    return _meta({
        "f1": {"required": True, "name": "Summary"},
        "f2": {"required": False, "name": "Labels"},
    })


@pytest.fixture
def project():
    return ProjectMetadata(
        id="10000",
        key="PC",
        name="Platform Care",
        issue_types=(
            IssueTypeSummary(id="10001", name="Task"),
            IssueTypeSummary(id="10002", name="Help"),
        ),
    )


# ---------------------------------------------------------------------------
# QueryOptions
# ---------------------------------------------------------------------------

def test_query_options_empty():
    assert QueryOptions().to_params() == {}


def test_query_options_serialization():
    options = QueryOptions(expand="projects.issuetypes.fields", fields_by_keys=True, project_keys="PC")
    assert options.to_params() == {
        "expand": "projects.issuetypes.fields",
        "fieldsByKeys": "true",
        "projectKeys": "PC",
    }


# ---------------------------------------------------------------------------
# issue_type_with_name
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("name", ["Help", "help", "HELP", "hElP"])
def test_issue_type_with_name_is_case_insensitive(project, name):
    assert project.issue_type_with_name(name).id == "10002"


def test_issue_type_with_name_not_found(project):
    with pytest.raises(IssueTypeNotFound) as exc_info:
        project.issue_type_with_name("Bug")
    assert exc_info.value.name == "Bug"
    assert exc_info.value.available == ["Task", "Help"]
    assert isinstance(exc_info.value, LookupError)


def test_issue_type_with_name_first_match_wins(caplog):
    project = ProjectMetadata(
        id="1",
        key="PC",
        name="Platform Care",
        issue_types=(
            IssueTypeSummary(id="20", name="Help"),
            IssueTypeSummary(id="21", name="HELP"),
        ),
    )
    with caplog.at_level(logging.WARNING):
        assert project.issue_type_with_name("help").id == "20"
    assert "20" in caplog.text and "21" in caplog.text


# ---------------------------------------------------------------------------
# mandatory_fields / all_fields
# ---------------------------------------------------------------------------

def test_mandatory_and_all_fields(meta):
    assert meta.mandatory_fields() == {"Summary": "f1"}
    assert meta.all_fields() == {"Summary": "f1", "Labels": "f2"}


def test_mandatory_is_subset_of_all():
    meta = _meta({
        "summary": {"required": True, "name": "Summary"},
        "customfield_10806": {"required": True, "name": "Epic Link"},
        "labels": {"required": False, "name": "Labels"},
        "priority": {"required": False, "name": "Priority"},
    })
    assert set(meta.mandatory_fields().values()) <= set(meta.all_fields().values())


@pytest.mark.parametrize("fields", [
    {
        "customfield_1": {"required": True, "name": "Team"},
        "customfield_2": {"required": False, "name": "Team"},
    },
    {
        "customfield_2": {"required": False, "name": "Team"},
        "customfield_1": {"required": True, "name": "Team"},
    },
])
def test_duplicate_name_prefers_required_field(fields):
    meta = _meta(fields)
    assert meta.mandatory_fields() == {"Team": "customfield_1"}
    assert meta.all_fields() == {"Team": "customfield_1"}
    assert set(meta.mandatory_fields().values()) <= set(meta.all_fields().values())
    assert meta.check_complete_and_available({"Team": "customfield_1"}) is True


def test_duplicate_optional_name_later_wins():
    meta = _meta({
        "customfield_1": {"required": False, "name": "Team"},
        "customfield_2": {"required": False, "name": "Team"},
    })
    assert meta.all_fields() == {"Team": "customfield_2"}


def test_derivations_are_idempotent(meta):
    assert meta.all_fields() == meta.all_fields()
    assert meta.mandatory_fields() == meta.mandatory_fields()


def test_missing_required_attribute_is_decode_error():
    meta = _meta({"f1": {"name": "Summary"}})
    with pytest.raises(KeyNotFound):
        meta.mandatory_fields()
    # all_fields 는 required 를 읽지 않음
    assert meta.all_fields() == {"Summary": "f1"}


def test_mistyped_name_is_decode_error():
    meta = _meta({"f1": {"required": True, "name": 42}})
    with pytest.raises(TypeMismatch):
        meta.mandatory_fields()
    with pytest.raises(DecodeError):
        meta.all_fields()


def test_required_string_is_not_bool():
    meta = _meta({"f1": {"required": "true", "name": "Summary"}})
    with pytest.raises(TypeMismatch):
        meta.mandatory_fields()


def test_empty_fields():
    meta = _meta({})
    assert meta.mandatory_fields() == {}
    assert meta.all_fields() == {}
    assert meta.check_complete_and_available({}) is True


# ---------------------------------------------------------------------------
# check_complete_and_available
# ---------------------------------------------------------------------------

def test_check_complete(meta):
    assert meta.check_complete_and_available({"Summary": "f1"}) is True
    assert meta.check_complete_and_available({"Summary": "f1", "Labels": "f2"}) is True


def test_check_missing_required(meta):
    with pytest.raises(MissingRequiredFields) as exc_info:
        meta.check_complete_and_available({"Labels": "f2"})
    assert exc_info.value.missing == ["Summary"]
    assert exc_info.value.required == ["Summary"]


def test_check_unknown_fields(meta):
    with pytest.raises(UnknownFields) as exc_info:
        meta.check_complete_and_available({"Summary": "f1", "Priority": "f3"})
    assert exc_info.value.unknown == ["Priority"]
    assert exc_info.value.available == ["Labels", "Summary"]


def test_missing_check_runs_before_unknown_check(meta):
    with pytest.raises(MissingRequiredFields):
        meta.check_complete_and_available({"Priority": "f3"})


def test_check_matches_by_name_only(meta):
    # 값(필드 키)은 검사하지 않음
    assert meta.check_complete_and_available({"Summary": "something-else"}) is True


def test_for_issue_type_copies_identity():
    issue_type = IssueTypeSummary(
        id="10002",
        name="Help",
        self_url="https://jira.example.com/rest/api/2/issuetype/10002",
        description="Ask for help.",
        icon_url="https://jira.example.com/help.svg",
        subtask=True,
    )
    meta = IssueTypeFieldMetadata.for_issue_type(issue_type, FieldSchemaMap())
    assert (meta.id, meta.name, meta.self_url, meta.description, meta.icon_url, meta.subtask) == (
        issue_type.id,
        issue_type.name,
        issue_type.self_url,
        issue_type.description,
        issue_type.icon_url,
        issue_type.subtask,
    )
