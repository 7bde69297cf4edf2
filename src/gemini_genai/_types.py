"""HTTP 옵션 및 백엔드(Developer API / Vertex AI) 공통 타입 정의."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import httpx

GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com"
GEMINI_API_URL = GEMINI_API_BASE_URL + "/v1beta/models/{model}:{method}"

VERTEX_API_BASE_URL = "https://{location}-aiplatform.googleapis.com"
VERTEX_API_URL = (
    VERTEX_API_BASE_URL
    + "/v1/projects/{project}/locations/{location}"
    "/publishers/google/models/{model}:{method}"
)

DEFAULT_TIMEOUT = 120.0


@dataclass(frozen=True, slots=True)
class HttpOptions:
    """공유 HTTP 클라이언트 설정.

    timeout 은 클라이언트 전체에 적용된다 (호출별 override 없음).
    Vertex AI 인증 헤더는 headers 로 외부에서 주입한다.
    """

    timeout: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(default_factory=dict)
    transport: httpx.AsyncBaseTransport | None = None


@dataclass(frozen=True, slots=True)
class DeveloperApiBackend:
    """Gemini Developer API (API 키 인증)."""

    api_key: str | None = None

    provider_name = "Google Gemini"

    @property
    def provider_uri(self) -> str:
        return GEMINI_API_BASE_URL

    def url(self, model: str, method: str = "generateContent") -> str:
        return GEMINI_API_URL.format(model=model, method=method)

    def params(self) -> dict[str, str]:
        # 키가 없으면 쿼리 없이 보내고 서버 거절을 그대로 전파한다
        return {"key": self.api_key} if self.api_key else {}


@dataclass(frozen=True, slots=True)
class VertexAIBackend:
    """Vertex AI (프로젝트/리전 스코프, 인증은 외부 자격증명)."""

    project: str
    location: str

    provider_name = "Google Vertex AI"

    @property
    def provider_uri(self) -> str:
        return VERTEX_API_BASE_URL.format(location=self.location)

    def url(self, model: str, method: str = "generateContent") -> str:
        return VERTEX_API_URL.format(
            project=self.project,
            location=self.location,
            model=model,
            method=method,
        )

    def params(self) -> dict[str, str]:
        return {}


Backend = Union[DeveloperApiBackend, VertexAIBackend]
