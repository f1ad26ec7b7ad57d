import logging
from dataclasses import dataclass, field

from src.domain.errors import IssueTypeNotFound, MissingRequiredFields, UnknownFields
from src.domain.field_schema import FieldSchemaMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOptions:
    """GET 요청에 붙는 공통 쿼리 옵션"""
    fields: str = ""
    expand: str = ""
    properties: str = ""
    fields_by_keys: bool = False
    update_history: bool = False
    project_keys: str = ""

    def to_params(self) -> dict[str, str]:
        """비어있는 값은 생략하고 Jira 쿼리 파라미터 이름으로 변환합니다."""
        params = {
            "fields": self.fields,
            "expand": self.expand,
            "properties": self.properties,
            "fieldsByKeys": "true" if self.fields_by_keys else "",
            "updateHistory": "true" if self.update_history else "",
            "projectKeys": self.project_keys,
        }
        return {k: v for k, v in params.items() if v}


@dataclass(frozen=True)
class IssueTypeSummary:
    """프로젝트에 속한 이슈 유형 (이름 → id 해석용)"""
    id: str
    name: str
    self_url: str = ""
    description: str = ""
    icon_url: str = ""
    subtask: bool = False


@dataclass(frozen=True)
class ProjectMetadata:
    """createmeta 용 프로젝트 메타 엔티티"""
    id: str
    key: str
    name: str
    self_url: str = ""
    issue_types: tuple[IssueTypeSummary, ...] = ()

    def issue_type_with_name(self, name: str) -> IssueTypeSummary:
        """
        이름으로 이슈 유형을 찾습니다. 대소문자를 구분하지 않습니다.

        같은 이름(대소문자 무시)의 이슈 유형이 여러 개면 응답 순서상 첫 번째를 반환하고
        경고 로그를 남깁니다.
        """
        wanted = name.casefold()
        matches = [t for t in self.issue_types if t.name.casefold() == wanted]
        if not matches:
            raise IssueTypeNotFound(name, [t.name for t in self.issue_types])
        if len(matches) > 1:
            logger.warning(
                "⚠️ 이슈 유형 이름 '%s'이(가) 여러 개입니다 (ids=%s). 첫 번째(id=%s)를 사용합니다",
                name,
                [t.id for t in matches],
                matches[0].id,
            )
        return matches[0]


@dataclass(frozen=True)
class IssueTypeFieldMetadata:
    """
    이슈 유형별 필드 메타 엔티티.

    fields 는 필드 키(예: customfield_10806) → 필드 스키마 매핑입니다.
    예를 들어 API가 아래와 같은 필드를 반환했다면

        "customfield_10806": {
            "required": true,
            "schema": {"type": "any", "custom": "com.pyxis.greenhopper.jira:gh-epic-link"},
            "name": "Epic Link",
            "operations": ["set"]
        }

    mandatory_fields() 결과는 {"Epic Link": "customfield_10806"} 이 됩니다.
    화면에 보이는 이름을 키로 두어 이슈 생성 요청을 만들기 쉽게 하기 위함입니다.
    """
    id: str
    name: str
    self_url: str = ""
    description: str = ""
    icon_url: str = ""
    subtask: bool = False
    fields: FieldSchemaMap = field(default_factory=FieldSchemaMap)

    @classmethod
    def for_issue_type(cls, issue_type: IssueTypeSummary, fields: FieldSchemaMap) -> "IssueTypeFieldMetadata":
        return cls(
            id=issue_type.id,
            name=issue_type.name,
            self_url=issue_type.self_url,
            description=issue_type.description,
            icon_url=issue_type.icon_url,
            subtask=issue_type.subtask,
            fields=fields,
        )

    def mandatory_fields(self) -> dict[str, str]:
        """필수 필드의 {이름: 필드 키} 매핑을 반환합니다."""
        result: dict[str, str] = {}
        for key in self.fields:
            if self.fields.get_bool(f"{key}/required"):
                result[self.fields.get_string(f"{key}/name")] = key
        return result

    def all_fields(self) -> dict[str, str]:
        """
        필수 여부와 관계없이 모든 필드의 {이름: 필드 키} 매핑을 반환합니다.

        서로 다른 필드가 같은 이름을 가지면 응답 순서상 뒤의 필드가 이기지만,
        필수 필드는 필수가 아닌 필드로 덮어쓰지 않습니다.
        (mandatory_fields() 결과가 항상 이 매핑에 포함되도록)
        """
        result: dict[str, str] = {}
        for key in self.fields:
            name = self.fields.get_string(f"{key}/name")
            existing = result.get(name)
            if (
                existing is not None
                and self.fields.get_bool(f"{existing}/required")
                and not self.fields.get_bool(f"{key}/required")
            ):
                continue
            result[name] = key
        return result

    def check_complete_and_available(self, candidate: dict[str, str]) -> bool:
        """
        후보 필드 매핑이 이슈 생성에 충분한지 검사합니다.

        1. 필수 필드가 모두 포함되어 있는지 (MissingRequiredFields)
        2. 포함된 필드가 모두 이 이슈 유형에서 사용 가능한지 (UnknownFields)

        두 검사는 항상 이 순서로 수행됩니다.
        """
        mandatory = self.mandatory_fields()
        available = self.all_fields()

        missing = sorted(name for name in mandatory if name not in candidate)
        if missing:
            raise MissingRequiredFields(missing, sorted(mandatory))

        unknown = sorted(name for name in candidate if name not in available)
        if unknown:
            raise UnknownFields(unknown, sorted(available))

        return True
