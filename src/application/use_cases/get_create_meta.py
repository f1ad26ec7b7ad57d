import logging

from src.application.ports.jira_create_meta_port import JiraCreateMetaPort
from src.domain.create_meta import QueryOptions

logger = logging.getLogger(__name__)


class GetCreateMetaUseCase:
    """프로젝트의 createmeta(프로젝트 정보 + 이슈 유형 목록)를 조회하는 Use Case"""

    def __init__(self, jira_port: JiraCreateMetaPort):
        self.jira_port = jira_port

    def execute(self, project_key: str, options: QueryOptions | None = None) -> dict:
        logger.info("GetCreateMetaUseCase 실행: project_key=%s", project_key)
        meta = self.jira_port.get_create_meta(project_key=project_key, options=options)

        return {
            "project_key": meta.key,
            "project_id": meta.id,
            "project_name": meta.name,
            "issue_types": [
                {
                    "id": t.id,
                    "name": t.name,
                    "description": t.description,
                    "subtask": t.subtask,
                }
                for t in meta.issue_types
            ],
        }
