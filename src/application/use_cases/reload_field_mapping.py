import logging

from src.application.ports.field_mapping_port import FieldMappingPort

logger = logging.getLogger(__name__)


class ReloadFieldMappingUseCase:
    """필드 매핑(jira.fields) 캐시를 무효화하고 다시 로드하는 Use Case"""

    def __init__(self, field_mapping: FieldMappingPort | None):
        self._repo = field_mapping

    def execute(self) -> dict:
        if self._repo is None:
            raise ValueError("필드 매핑 파일(FIELD_MAPPING_PATH)이 설정되지 않았습니다")

        logger.info("필드 매핑 리로드 실행")
        self._repo.reload()

        # 검증: 로드 가능한지 확인
        fields = self._repo.get_fields()

        return {
            "status": "success",
            "path": str(self._repo.path),
            "field_count": len(fields),
            "fields": fields,
        }
