import logging
from typing import Any

import httpx

from src.domain.create_meta import (
    IssueTypeFieldMetadata,
    IssueTypeSummary,
    ProjectMetadata,
    QueryOptions,
)
from src.domain.errors import DecodeError, MalformedField, TransportError
from src.domain.field_schema import FieldSchemaMap

logger = logging.getLogger(__name__)

API_PREFIX = "rest/api/2"


class JiraAdapter:
    """
    Jira createmeta REST API와 통신하는 Outbound Adapter.

    인증, timeout, 커넥션 풀은 주입받은 httpx.Client 가 담당합니다.
    (base_url 이 설정된 client 를 넘겨야 합니다)
    """

    def __init__(self, client: httpx.Client):
        self.client = client

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------

    def get_create_meta(
        self,
        project_key: str,
        options: QueryOptions | None = None,
    ) -> ProjectMetadata:
        """프로젝트 정보와 이슈 유형 목록을 조회합니다."""
        logger.info("🌐 Jira createmeta 조회 시작: %s", project_key)

        request = self.new_request("GET", f"project/{project_key}", options)
        data = self.do(request, context_msg="프로젝트 createmeta 조회")
        meta = self._parse_project_meta(data)

        logger.info("✅ createmeta 조회 성공: %s (%d개 이슈 유형)", meta.key, len(meta.issue_types))
        return meta

    def get_issue_type_meta(
        self,
        project_key: str,
        issue_type: IssueTypeSummary,
        options: QueryOptions | None = None,
    ) -> IssueTypeFieldMetadata:
        """이슈 유형의 필드 스키마를 조회해 필드 키 기준으로 재구성합니다."""
        logger.info("🌐 이슈 유형 필드 조회 시작: project=%s, issuetype=%s(id=%s)",
                    project_key, issue_type.name, issue_type.id)

        request = self.new_request(
            "GET",
            f"issue/createmeta/{project_key}/issuetypes/{issue_type.id}",
            options,
        )
        data = self.do(request, context_msg="이슈 유형 필드 조회")
        fields = self._parse_field_values(data)

        logger.info("✅ 이슈 유형 필드 조회 성공: %s (%d개 필드)", issue_type.name, len(fields))
        return IssueTypeFieldMetadata.for_issue_type(issue_type, fields)

    def new_request(
        self,
        method: str,
        path: str,
        options: QueryOptions | None = None,
    ) -> httpx.Request:
        """API 경로와 쿼리 옵션으로 요청을 만듭니다."""
        params = options.to_params() if options is not None else None
        request = self.client.build_request(method, f"{API_PREFIX}/{path}", params=params)
        logger.info("URL: %s", request.url)
        return request

    def do(self, request: httpx.Request, *, context_msg: str = "Jira API") -> Any:
        """요청을 보내고 JSON 본문을 반환합니다."""
        try:
            response = self.client.send(request)
            logger.info("HTTP Status: %d", response.status_code)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("❌ HTTP 오류 발생: %d", e.response.status_code)
            logger.error("응답 본문: %s", e.response.text[:500])
            self._raise_jira_error(e, context_msg)
        except httpx.HTTPError as e:
            logger.error("❌ 네트워크 오류: %s", str(e))
            raise TransportError(f"Jira 서버 연결 실패: {request.url}") from e

        try:
            return response.json()
        except ValueError as e:
            logger.error("❌ JSON 파싱 실패: %s", response.text[:500])
            raise DecodeError(f"{context_msg} 응답이 JSON 형식이 아닙니다") from e

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_jira_error(self, e: httpx.HTTPStatusError, context_msg: str) -> None:
        """HTTP 상태 코드별 TransportError 를 발생시킵니다."""
        status = e.response.status_code
        body = e.response.text[:500]
        if status == 401:
            msg = "Jira 인증 실패: 사용자명 또는 비밀번호를 확인하세요"
        elif status == 403:
            msg = "Jira 접근 권한이 없습니다"
        elif status == 404:
            msg = f"{context_msg} 대상을 찾을 수 없습니다: {e.request.url}"
        else:
            msg = f"Jira API 오류: {status}"
        raise TransportError(msg, status_code=status, body=body) from e

    def _parse_project_meta(self, data: Any) -> ProjectMetadata:
        """API 응답을 ProjectMetadata 엔티티로 파싱합니다."""
        if not isinstance(data, dict):
            raise DecodeError(f"프로젝트 응답이 객체가 아닙니다: {type(data).__name__}")

        # Jira 는 issueTypes 로 내려주지만 issuetypes 도 허용
        raw_types = data.get("issuetypes", data.get("issueTypes", []))
        if raw_types is None:
            raw_types = []
        if not isinstance(raw_types, list):
            raise DecodeError("issuetypes 가 배열이 아닙니다")

        issue_types = []
        for i, item in enumerate(raw_types):
            if not isinstance(item, dict):
                raise DecodeError(f"issuetypes[{i}] 가 객체가 아닙니다")
            issue_types.append(self._parse_issue_type(item, f"issuetypes[{i}]"))

        return ProjectMetadata(
            self_url=_str_attr(data, "self", "project"),
            id=_str_attr(data, "id", "project"),
            key=_str_attr(data, "key", "project"),
            name=_str_attr(data, "name", "project"),
            issue_types=tuple(issue_types),
        )

    def _parse_issue_type(self, item: dict[str, Any], where: str) -> IssueTypeSummary:
        subtask = item.get("subtask", False)
        if not isinstance(subtask, bool):
            raise DecodeError(f"{where}.subtask 가 bool 이 아닙니다")
        return IssueTypeSummary(
            self_url=_str_attr(item, "self", where),
            id=_str_attr(item, "id", where),
            description=_str_attr(item, "description", where),
            icon_url=_str_attr(item, "iconUrl", where),
            name=_str_attr(item, "name", where),
            subtask=subtask,
        )

    def _parse_field_values(self, data: Any) -> FieldSchemaMap:
        """values 배열을 {fieldId: 필드 스키마} 매핑으로 바꿉니다."""
        if not isinstance(data, dict):
            raise DecodeError(f"필드 응답이 객체가 아닙니다: {type(data).__name__}")
        values = data.get("values")
        if values is None:
            values = []
        if not isinstance(values, list):
            raise DecodeError("values 가 배열이 아닙니다")

        fields: dict[str, Any] = {}
        for i, blob in enumerate(values):
            if not isinstance(blob, dict) or not isinstance(blob.get("fieldId"), str):
                raise MalformedField(i, blob)
            fields[blob["fieldId"]] = blob
        return FieldSchemaMap(fields)


def _str_attr(data: dict[str, Any], key: str, where: str) -> str:
    """문자열 속성을 읽습니다. 없으면 빈 문자열, 타입이 다르면 DecodeError."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{where}.{key} 가 문자열이 아닙니다: {value!r}")
    return value
