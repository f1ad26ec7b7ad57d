from pathlib import Path
from typing import Protocol


class FieldMappingPort(Protocol):
    """이슈 생성에 사용할 후보 필드 매핑(jira.fields) 저장소 계약"""

    @property
    def path(self) -> Path:
        """매핑을 읽어오는 파일 경로"""
        ...

    def get_fields(self) -> dict[str, str]:
        """{필드 이름: 필드 키} 매핑을 반환합니다."""
        ...

    def reload(self) -> None:
        """캐시를 무효화하고 설정 파일을 다시 로드합니다."""
        ...
