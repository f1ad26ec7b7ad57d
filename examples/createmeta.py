"""
createmeta 사용 예제.

    APP_ENV=local python -m examples.createmeta [PROJECT_KEY] [ISSUE_TYPE]

.env.{APP_ENV} 또는 환경 변수로 JIRA_BASE_URL, USER_ID, USER_PASSWORD 등을 설정해야 합니다.
"""
import logging
import sys

from src.configuration.container import build_container, clear_container
from src.domain.errors import CreateMetaError

logger = logging.getLogger("createmeta")


def run(project_key: str = "PC", issue_type_name: str = "Help") -> int:
    container = build_container()
    adapter = container.jira_adapter
    try:
        meta = adapter.get_create_meta(project_key)
        issue_type = meta.issue_type_with_name(issue_type_name)
        issue_type_meta = adapter.get_issue_type_meta(project_key, issue_type)
    except CreateMetaError as e:
        logger.error("error: %s", e)
        return 1
    finally:
        clear_container()

    logger.info("issueTypeMeta: %s (id=%s), %d개 필드", issue_type_meta.name, issue_type_meta.id,
                len(issue_type_meta.fields))
    for key, schema in issue_type_meta.fields.items():
        logger.info("  %s: %s", key, schema)
    for t in meta.issue_types:
        logger.info("%r", t)
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(name)s] %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    sys.exit(run(*sys.argv[1:3]))
