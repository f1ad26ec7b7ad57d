from typing import Protocol

from src.domain.create_meta import (
    IssueTypeFieldMetadata,
    IssueTypeSummary,
    ProjectMetadata,
    QueryOptions,
)


class JiraCreateMetaPort(Protocol):
    """Jira createmeta API와의 계약을 정의하는 Port"""

    def get_create_meta(
        self,
        project_key: str,
        options: QueryOptions | None = None,
    ) -> ProjectMetadata:
        """프로젝트 정보와 이슈 유형 목록을 조회합니다."""
        ...

    def get_issue_type_meta(
        self,
        project_key: str,
        issue_type: IssueTypeSummary,
        options: QueryOptions | None = None,
    ) -> IssueTypeFieldMetadata:
        """이슈 유형의 필드 스키마를 조회합니다."""
        ...
