"""
gemini_genai 에러 클래스
- 설정/인자 오류는 ValueError 계열로 즉시 발생
- HTTP 실패(TransportError)와 응답 파싱 실패(DeserializationError)를 구분
- 재시도 없음: 모든 에러는 호출자에게 그대로 전파된다
"""

from __future__ import annotations


class GenAIError(Exception):
    """gemini_genai 모든 예외의 베이스"""


class ConfigurationError(GenAIError, ValueError):
    """API 키/백엔드 모드 설정이 잘못되었을 때 (예: Vertex AI인데 project 누락)"""


class InvalidArgumentError(GenAIError, ValueError):
    """지원하지 않는 contents 형태, 빈 메시지 리스트, 필수 인자 누락"""


class TransportError(GenAIError):
    """
    HTTP 호출 실패 시 발생하는 예외

    Attributes:
        status_code: HTTP 상태 코드 (네트워크 오류/타임아웃이면 None)
        message: 에러 메시지
        body: 응답 본문 원문 (있을 때만)
    """

    def __init__(
        self,
        status_code: int | None,
        message: str,
        body: str | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.body = body
        if status_code is None:
            super().__init__(f"[gemini] transport error: {message}")
        else:
            super().__init__(f"[gemini] API error {status_code}: {message}")


class DeserializationError(GenAIError):
    """
    응답 본문을 GenerateContentResponse로 파싱할 수 없을 때 발생하는 예외

    HTTP 호출 자체는 성공했으므로 TransportError와 구분된다.
    """

    def __init__(self, message: str, body: str | None = None):
        self.message = message
        self.body = body
        super().__init__(f"[gemini] 응답 파싱 실패: {message}")


class CancellationError(GenAIError):
    """호출자가 전달한 cancellation 신호로 요청이 중단되었을 때"""
