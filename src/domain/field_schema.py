from collections.abc import Iterator, Mapping
from typing import Any

from src.domain.errors import KeyNotFound, TypeMismatch

PATH_SEPARATOR = "/"


class FieldSchemaMap(Mapping[str, Any]):
    """
    임의의 키를 갖는 JSON 객체를 경로 기반으로 조회하는 읽기 전용 매핑.

    createmeta 응답은 required/name/schema 같은 고정 키와
    customfield_NNNNN 같은 사용자 정의 키가 섞여 있어 정적인 구조로 선언할 수 없습니다.

    예:
        fields.get_bool("customfield_10806/required")
        fields.get_string("customfield_10806/schema/custom")
        fields.get_string("priority/allowedValues/0/name")
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldSchemaMap):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"FieldSchemaMap({self._data!r})"

    def value(self, path: str) -> Any:
        """slash로 구분된 경로를 따라 내려가 값을 반환합니다."""
        current: Any = self._data
        walked: list[str] = []
        for segment in path.split(PATH_SEPARATOR):
            walked.append(segment)
            if isinstance(current, Mapping):
                if segment not in current:
                    raise KeyNotFound(path, segment)
                current = current[segment]
            elif isinstance(current, list):
                if not segment.isdigit():
                    raise TypeMismatch(PATH_SEPARATOR.join(walked[:-1]), "object", current)
                index = int(segment)
                if index >= len(current):
                    raise KeyNotFound(path, segment)
                current = current[index]
            else:
                raise TypeMismatch(PATH_SEPARATOR.join(walked[:-1]), "object", current)
        return current

    def get_bool(self, path: str) -> bool:
        value = self.value(path)
        if not isinstance(value, bool):
            raise TypeMismatch(path, "bool", value)
        return value

    def get_string(self, path: str) -> str:
        value = self.value(path)
        if not isinstance(value, str):
            raise TypeMismatch(path, "string", value)
        return value

    def get_int(self, path: str) -> int:
        value = self.value(path)
        # JSON true/false 는 int 로 취급하지 않음
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatch(path, "int", value)
        return value

    def get_list(self, path: str) -> list[Any]:
        value = self.value(path)
        if not isinstance(value, list):
            raise TypeMismatch(path, "array", value)
        return value

    def get_map(self, path: str) -> "FieldSchemaMap":
        value = self.value(path)
        if not isinstance(value, Mapping):
            raise TypeMismatch(path, "object", value)
        return FieldSchemaMap(value)
