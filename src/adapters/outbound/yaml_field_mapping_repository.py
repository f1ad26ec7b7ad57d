import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


class YamlFieldMappingRepository:
    """
    YAML 파일의 jira.fields 블록을 읽는 후보 필드 매핑 저장소 (mtime 캐시)

    예:
        jira:
          fields:
            Summary: summary
            Epic Link: customfield_10806
    """

    def __init__(self, yaml_path: str | Path):
        self._path = Path(yaml_path)
        self._cache: dict[str, str] | None = None
        self._cache_mtime: float = 0.0

    def _ensure_loaded(self) -> dict[str, str]:
        """파일이 변경되었으면 다시 로드합니다."""
        try:
            current_mtime = self._path.stat().st_mtime
        except FileNotFoundError:
            raise FileNotFoundError(
                f"필드 매핑 YAML 파일을 찾을 수 없습니다: {self._path}"
            )

        if self._cache is None or current_mtime > self._cache_mtime:
            logger.info("필드 매핑 YAML 로드: %s", self._path)
            with open(self._path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            self._cache = self._extract_fields(data)
            self._cache_mtime = current_mtime
            logger.info("필드 매핑 YAML 로드 완료: %d개 필드", len(self._cache))

        return self._cache

    def _extract_fields(self, data) -> dict[str, str]:
        jira = data.get("jira") if isinstance(data, dict) else None
        if not isinstance(jira, dict) or "fields" not in jira:
            raise ValueError(f"jira.fields 설정이 없습니다: {self._path}")
        fields = jira["fields"]
        if not isinstance(fields, dict):
            raise ValueError(f"jira.fields 는 매핑이어야 합니다: {self._path}")
        empty = [str(name) for name, key in fields.items() if key is None]
        if empty:
            raise ValueError(f"jira.fields 에 필드 키가 비어있는 항목이 있습니다: {empty} ({self._path})")
        return {str(name): str(key) for name, key in fields.items()}

    @property
    def path(self) -> Path:
        return self._path

    def get_fields(self) -> dict[str, str]:
        return dict(self._ensure_loaded())

    def reload(self) -> None:
        """캐시를 강제로 무효화합니다."""
        logger.info("필드 매핑 캐시 강제 무효화")
        self._cache = None
        self._cache_mtime = 0.0
