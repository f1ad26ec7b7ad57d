import logging

from src.application.ports.field_mapping_port import FieldMappingPort
from src.application.ports.jira_create_meta_port import JiraCreateMetaPort

logger = logging.getLogger(__name__)


class CheckIssueFieldsUseCase:
    """후보 필드 매핑이 이슈 생성에 충분하고 사용 가능한지 검증하는 Use Case"""

    def __init__(
        self,
        jira_port: JiraCreateMetaPort,
        field_mapping: FieldMappingPort | None = None,
    ):
        self.jira_port = jira_port
        self.field_mapping = field_mapping

    def execute(
        self,
        project_key: str,
        issue_type_name: str,
        fields: dict[str, str] | None = None,
    ) -> dict:
        """
        fields 가 없으면 설정된 필드 매핑 파일(jira.fields)을 사용합니다.

        Raises:
            MissingRequiredFields: 필수 필드 누락
            UnknownFields: 이슈 유형에서 사용할 수 없는 필드 포함
        """
        logger.info("CheckIssueFieldsUseCase 실행: project_key=%s, issue_type=%s",
                    project_key, issue_type_name)

        if fields is None:
            if self.field_mapping is None:
                raise ValueError("검증할 fields 가 없고 필드 매핑 파일(FIELD_MAPPING_PATH)도 설정되지 않았습니다")
            fields = self.field_mapping.get_fields()
            logger.info("필드 매핑 파일 사용: %d개 필드", len(fields))

        project = self.jira_port.get_create_meta(project_key=project_key)
        issue_type = project.issue_type_with_name(issue_type_name)
        meta = self.jira_port.get_issue_type_meta(project_key=project_key, issue_type=issue_type)

        meta.check_complete_and_available(fields)
        logger.info("✅ 필드 검증 통과: %s", sorted(fields))

        return {
            "project_key": project_key,
            "issue_type": meta.name,
            "complete": True,
            "fields": fields,
        }
