from typing import Any


class CreateMetaError(RuntimeError):
    """create-meta 조회/검증 과정의 최상위 예외"""


class TransportError(CreateMetaError):
    """Jira 호출 자체가 실패한 경우 (네트워크 오류, 2xx 이외의 응답)"""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(CreateMetaError):
    """응답 본문이 기대한 형태가 아닌 경우"""


class KeyNotFound(DecodeError):
    def __init__(self, path: str, segment: str):
        super().__init__(f"경로 '{path}'에서 키 '{segment}'를 찾을 수 없습니다")
        self.path = path
        self.segment = segment


class TypeMismatch(DecodeError):
    def __init__(self, path: str, expected: str, actual: Any):
        super().__init__(
            f"경로 '{path}'의 값이 {expected} 타입이 아닙니다 (실제: {type(actual).__name__})"
        )
        self.path = path
        self.expected = expected
        self.actual = actual


class MalformedField(DecodeError):
    """필드 스키마에 문자열 fieldId가 없는 경우"""

    def __init__(self, index: int, blob: Any):
        super().__init__(f"values[{index}] 항목에 문자열 fieldId가 없습니다: {blob!r}"[:300])
        self.index = index
        self.blob = blob


class IssueTypeNotFound(CreateMetaError, LookupError):
    def __init__(self, name: str, available: list[str]):
        super().__init__(f"이슈 유형을 찾을 수 없습니다: '{name}'. 사용 가능: {available}")
        self.name = name
        self.available = available


class FieldValidationError(CreateMetaError, ValueError):
    """후보 필드 매핑 검증 실패"""


class MissingRequiredFields(FieldValidationError):
    def __init__(self, missing: list[str], required: list[str]):
        super().__init__(f"필수 필드가 누락되었습니다: {missing}. 필수 필드 목록: {required}")
        self.missing = missing
        self.required = required


class UnknownFields(FieldValidationError):
    def __init__(self, unknown: list[str], available: list[str]):
        super().__init__(f"Jira에서 사용할 수 없는 필드입니다: {unknown}. 사용 가능: {available}")
        self.unknown = unknown
        self.available = available
