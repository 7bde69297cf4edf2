"""
generateContent 요청/응답 모델
- Gemini REST API(camelCase) 포맷에 맞춘 Pydantic 모델
- 생성 후 변경 불가(frozen), 파이썬 쪽에서는 snake_case 필드명 사용
- 직렬화는 to_api_dict(): alias(camelCase) + None 필드 생략
"""

from __future__ import annotations

import base64
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    """camelCase wire alias + snake_case 필드명 모두 허용하는 베이스"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        protected_namespaces=(),
    )

    def to_api_dict(self) -> dict[str, Any]:
        """API 포맷으로 직렬화 (값이 없는 필드는 null이 아니라 생략)"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Content ---


class InlineData(_ApiModel):
    """base64 인코딩된 바이너리 (이미지 등)"""
    mime_type: str | None = None
    data: str | None = None


class FileData(_ApiModel):
    """URI로 참조하는 파일"""
    file_uri: str | None = None
    mime_type: str | None = None


class Part(_ApiModel):
    """
    Content의 한 조각

    text / inline_data / file_data 중 하나만 채워진다.
    응답에 functionCall 같은 미지원 part가 오면 셋 다 비어 있는 Part가 된다.
    """
    text: str | None = None
    inline_data: InlineData | None = None
    file_data: FileData | None = None

    @model_validator(mode="after")
    def check_single_variant(self) -> Part:
        populated = [
            name
            for name in ("text", "inline_data", "file_data")
            if getattr(self, name) is not None
        ]
        if len(populated) > 1:
            raise ValueError(
                f"Part에는 하나의 값만 지정할 수 있습니다: {', '.join(populated)}"
            )
        return self

    @classmethod
    def from_text(cls, text: str) -> Part:
        return cls(text=text)

    @classmethod
    def from_uri(cls, file_uri: str, mime_type: str) -> Part:
        return cls(file_data=FileData(file_uri=file_uri, mime_type=mime_type))

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> Part:
        """raw bytes를 base64로 인코딩해 inline_data part 생성"""
        encoded = base64.b64encode(data).decode("ascii")
        return cls(inline_data=InlineData(mime_type=mime_type, data=encoded))


class Content(_ApiModel):
    """한 턴의 메시지: role + 순서 있는 parts"""
    role: str | None = None
    parts: list[Part] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> Content:
        """user role 텍스트 Content"""
        return cls(role="user", parts=[Part.from_text(text)])


# --- Config ---


class GenerateContentConfig(_ApiModel):
    """
    생성 파라미터 (모두 선택)

    값 범위는 검증하지 않는다. 서버가 검증한다.
    system_instruction은 generationConfig가 아니라 요청 최상위로 나간다.
    """
    system_instruction: str | None = None
    temperature: float | None = None
    max_output_tokens: int | None = None
    top_p: float | None = None
    top_k: int | None = None
    candidate_count: int | None = None
    response_mime_type: str | None = None

    def generation_config(self) -> dict[str, Any]:
        """설정된 생성 필드만 wire 이름으로 반환 (system_instruction 제외)"""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"system_instruction"},
        )


# --- Response ---


class SafetyRating(_ApiModel):
    category: str | None = None
    probability: str | None = None


class PromptFeedback(_ApiModel):
    """프롬프트 자체가 차단되었을 때 채워진다"""
    block_reason: str | None = None
    safety_ratings: list[SafetyRating] | None = None


class Candidate(_ApiModel):
    content: Content | None = None
    finish_reason: str | None = None
    safety_ratings: list[SafetyRating] | None = None


class UsageMetadata(_ApiModel):
    """토큰 사용량"""
    prompt_token_count: int | None = None
    candidates_token_count: int | None = None
    total_token_count: int | None = None


class GenerateContentResponse(_ApiModel):
    """
    generateContent 응답

    raw JSON → GenerateContentResponse.from_api_response() 로 생성
    """
    candidates: list[Candidate] = Field(default_factory=list)
    prompt_feedback: PromptFeedback | None = None
    usage_metadata: UsageMetadata | None = None
    model_version: str | None = None
    response_id: str | None = None

    @property
    def text(self) -> str | None:
        """첫 번째 candidate의 텍스트 part를 순서대로 이어붙인 값"""
        if not self.candidates or self.candidates[0].content is None:
            return None
        return "".join(
            part.text
            for part in self.candidates[0].content.parts
            if part.text is not None
        )

    @classmethod
    def from_api_response(cls, data: Any) -> GenerateContentResponse:
        return cls.model_validate(data)
