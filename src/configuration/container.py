from dataclasses import dataclass
from functools import lru_cache

import httpx

from src.adapters.outbound.jira_adapter import JiraAdapter
from src.adapters.outbound.yaml_field_mapping_repository import YamlFieldMappingRepository
from src.application.use_cases.check_issue_fields import CheckIssueFieldsUseCase
from src.application.use_cases.get_create_meta import GetCreateMetaUseCase
from src.application.use_cases.get_issue_type_fields import GetIssueTypeFieldsUseCase
from src.application.use_cases.reload_field_mapping import ReloadFieldMappingUseCase
from src.configuration.settings import Settings, build_settings


@dataclass(frozen=True)
class Container:
    settings: Settings
    jira_adapter: JiraAdapter
    get_create_meta_use_case: GetCreateMetaUseCase
    get_issue_type_fields_use_case: GetIssueTypeFieldsUseCase
    check_issue_fields_use_case: CheckIssueFieldsUseCase
    reload_field_mapping_use_case: ReloadFieldMappingUseCase


def build_http_client(settings: Settings) -> httpx.Client:
    """auth와 timeout이 설정된 httpx.Client를 반환합니다."""
    return httpx.Client(
        base_url=settings.jira_base_url.rstrip("/") + "/",
        auth=(settings.user_id, settings.user_password),
        timeout=settings.jira_timeout,
        headers={"Accept": "application/json"},
    )


@lru_cache(maxsize=1)
def build_container() -> Container:
    settings = build_settings()

    jira_adapter = JiraAdapter(client=build_http_client(settings))

    field_mapping_repo = None
    if settings.field_mapping_path:
        field_mapping_repo = YamlFieldMappingRepository(yaml_path=settings.field_mapping_path)

    get_create_meta_use_case = GetCreateMetaUseCase(
        jira_port=jira_adapter,
    )

    get_issue_type_fields_use_case = GetIssueTypeFieldsUseCase(
        jira_port=jira_adapter,
    )

    check_issue_fields_use_case = CheckIssueFieldsUseCase(
        jira_port=jira_adapter,
        field_mapping=field_mapping_repo,
    )

    # 필드 매핑 핫 리로드
    reload_field_mapping_use_case = ReloadFieldMappingUseCase(
        field_mapping=field_mapping_repo,
    )

    return Container(
        settings=settings,
        jira_adapter=jira_adapter,
        get_create_meta_use_case=get_create_meta_use_case,
        get_issue_type_fields_use_case=get_issue_type_fields_use_case,
        check_issue_fields_use_case=check_issue_fields_use_case,
        reload_field_mapping_use_case=reload_field_mapping_use_case,
    )


def clear_container() -> None:
    if build_container.cache_info().currsize:
        build_container().jira_adapter.client.close()
    build_container.cache_clear()
