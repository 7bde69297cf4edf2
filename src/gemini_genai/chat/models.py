"""
범용 채팅 메시지 & 응답 모델
- Provider에 독립적인 채팅 추상화 (role + content 아이템 리스트)
- AIContent 서브클래스: TextContent, ImageContent (그 외 종류는 어댑터가 무시)
- ChatCompletion / StreamingChatCompletionUpdate: 어댑터가 반환하는 결과
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRole(str, enum.Enum):
    """메시지 작성자 role"""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class AIContent(BaseModel):
    """메시지에 들어가는 콘텐츠 아이템의 베이스"""
    model_config = ConfigDict(frozen=True)


class TextContent(AIContent):
    """텍스트 콘텐츠"""
    text: str


class ImageContent(AIContent):
    """URI로 참조하는 이미지 (media_type 미지정 시 어댑터가 image/jpeg 사용)"""
    uri: str | None = None
    media_type: str | None = None


class ChatMessage(BaseModel):
    """
    대화 메시지

    role은 ChatRole 또는 임의의 문자열 (대소문자 무관).
    """
    model_config = ConfigDict(frozen=True)

    role: str
    contents: list[AIContent] = Field(default_factory=list)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, role: Any) -> Any:
        return role.value if isinstance(role, ChatRole) else role

    @classmethod
    def from_text(cls, role: ChatRole | str, text: str) -> ChatMessage:
        return cls(role=role, contents=[TextContent(text=text)])

    @property
    def text(self) -> str:
        """텍스트 콘텐츠를 모두 이어붙여 반환"""
        return "".join(c.text for c in self.contents if isinstance(c, TextContent))


class ChatResponseFormat(str, enum.Enum):
    TEXT = "text"
    JSON = "json"


class ChatOptions(BaseModel):
    """범용 생성 옵션 (모두 선택)"""
    model_config = ConfigDict(protected_namespaces=())

    temperature: float | None = None
    max_output_tokens: int | None = None
    top_p: float | None = None
    response_format: ChatResponseFormat | None = None
    model_id: str | None = None


class ChatFinishReason(str, enum.Enum):
    """응답 종료 이유"""
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"


class ChatUsage(BaseModel):
    """토큰 사용량"""
    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None


class ChatCompletion(BaseModel):
    """complete() 결과"""
    model_config = ConfigDict(protected_namespaces=())

    message: ChatMessage
    completion_id: str | None = None
    model_id: str | None = None
    finish_reason: ChatFinishReason | None = None
    usage: ChatUsage | None = None
    # provider 원본 응답 (GenerateContentResponse 등)
    raw_response: Any = None

    @property
    def text(self) -> str:
        return self.message.text


class StreamingChatCompletionUpdate(BaseModel):
    """complete_streaming()이 yield하는 부분 업데이트"""
    model_config = ConfigDict(protected_namespaces=())

    completion_id: str | None = None
    role: str | None = None
    contents: list[AIContent] = Field(default_factory=list)
    finish_reason: ChatFinishReason | None = None
    model_id: str | None = None

    @property
    def text(self) -> str:
        return "".join(c.text for c in self.contents if isinstance(c, TextContent))


class ChatClientMetadata(BaseModel):
    """채팅 클라이언트 설명 정보"""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    provider_name: str
    provider_uri: str | None = None
    model_id: str | None = None
