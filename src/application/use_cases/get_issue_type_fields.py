import logging

from src.application.ports.jira_create_meta_port import JiraCreateMetaPort
from src.domain.create_meta import QueryOptions

logger = logging.getLogger(__name__)


class GetIssueTypeFieldsUseCase:
    """이슈 유형 이름으로 필드 스키마를 조회하고 필수/전체 필드 매핑을 만드는 Use Case"""

    def __init__(self, jira_port: JiraCreateMetaPort):
        self.jira_port = jira_port

    def execute(
        self,
        project_key: str,
        issue_type_name: str,
        options: QueryOptions | None = None,
    ) -> dict:
        """
        Args:
            project_key: Jira 프로젝트 키 (예: PC)
            issue_type_name: 이슈 유형 이름 (대소문자 무시, 예: 'Help')

        Returns:
            이슈 유형 정보와 mandatory_fields / all_fields ({이름: 필드 키})
        """
        logger.info("GetIssueTypeFieldsUseCase 실행: project_key=%s, issue_type=%s",
                    project_key, issue_type_name)

        project = self.jira_port.get_create_meta(project_key=project_key, options=options)
        issue_type = project.issue_type_with_name(issue_type_name)
        meta = self.jira_port.get_issue_type_meta(
            project_key=project_key,
            issue_type=issue_type,
            options=options,
        )

        mandatory = meta.mandatory_fields()
        all_fields = meta.all_fields()
        logger.info("✅ 필드 매핑 생성: 필수 %d개 / 전체 %d개", len(mandatory), len(all_fields))

        return {
            "project_key": project_key,
            "issue_type": {"id": meta.id, "name": meta.name, "subtask": meta.subtask},
            "mandatory_fields": mandatory,
            "all_fields": all_fields,
        }
