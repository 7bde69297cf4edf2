"""
Gemini 채팅 어댑터
- BaseChatClient 구현체 (범용 채팅 추상화 ↔ generateContent)
- ChatMessage → Content 변환 (assistant → model), ChatOptions → GenerateContentConfig
- 첫 번째 candidate의 텍스트만 assistant 메시지로 변환
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from .._types import DeveloperApiBackend, HttpOptions
from ..client import Client, resolve_backend
from ..errors import ConfigurationError, InvalidArgumentError
from ..models import Models
from ..types import Content, GenerateContentConfig, GenerateContentResponse, Part
from .base import BaseChatClient
from .models import (
    ChatClientMetadata,
    ChatCompletion,
    ChatFinishReason,
    ChatMessage,
    ChatOptions,
    ChatResponseFormat,
    ChatRole,
    ChatUsage,
    ImageContent,
    TextContent,
)

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

# Gemini finishReason → ChatFinishReason (그 외 값은 None)
FINISH_REASON_MAP = {
    "STOP": ChatFinishReason.STOP,
    "MAX_TOKENS": ChatFinishReason.LENGTH,
}


class GeminiChatClient(BaseChatClient):
    """
    Gemini generateContent 기반 채팅 클라이언트

    사용법:
        async with GeminiChatClient("gemini-2.0-flash-001", api_key="...") as chat:
            completion = await chat.complete([
                ChatMessage.from_text(ChatRole.USER, "안녕"),
            ])
            print(completion.text)
    """

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        *,
        vertexai: bool = False,
        project: str | None = None,
        location: str | None = None,
        http_options: HttpOptions | None = None,
    ):
        if not model:
            raise InvalidArgumentError("model이 필요합니다.")

        # 채팅 어댑터는 Developer API 키를 생성 시점에 검증한다
        backend = resolve_backend(api_key, vertexai, project, location)
        if isinstance(backend, DeveloperApiBackend) and not backend.api_key:
            raise ConfigurationError(
                "api_key가 필요합니다. 직접 전달하거나 "
                "GOOGLE_API_KEY 또는 GEMINI_API_KEY 환경변수를 설정하세요."
            )

        self._client = Client(
            api_key,
            vertexai=vertexai,
            project=project,
            location=location,
            http_options=http_options,
        )

        self.model = model
        self._metadata = ChatClientMetadata(
            provider_name=backend.provider_name,
            provider_uri=backend.provider_uri,
            model_id=model,
        )

    @property
    def metadata(self) -> ChatClientMetadata:
        return self._metadata

    @property
    def client(self) -> Client:
        return self._client

    @property
    def models(self) -> Models:
        return self._client.models

    @staticmethod
    def convert_messages(messages: Sequence[ChatMessage]) -> list[Content]:
        """
        ChatMessage 리스트를 Gemini Content 리스트로 변환

        - role은 소문자화, "assistant"만 "model"로 바꾸고 나머지는 그대로
        - TextContent → text part
        - uri가 있는 ImageContent → file_data part (mime 기본값 image/jpeg)
        - 그 외 콘텐츠는 무시
        """
        contents = []
        for message in messages:
            role = message.role.lower()
            if role == ChatRole.ASSISTANT.value:
                role = "model"

            parts = []
            for item in message.contents:
                if isinstance(item, TextContent):
                    parts.append(Part.from_text(item.text))
                elif isinstance(item, ImageContent) and item.uri:
                    parts.append(
                        Part.from_uri(
                            item.uri, item.media_type or DEFAULT_IMAGE_MIME_TYPE
                        )
                    )
                else:
                    logger.debug(
                        f"[gemini] unsupported content dropped: {type(item).__name__}"
                    )

            contents.append(Content(role=role, parts=parts))
        return contents

    @staticmethod
    def convert_options(options: ChatOptions | None) -> GenerateContentConfig | None:
        """ChatOptions → GenerateContentConfig (options가 없으면 None)"""
        if options is None:
            return None

        response_mime_type = (
            "application/json"
            if options.response_format == ChatResponseFormat.JSON
            else None
        )
        return GenerateContentConfig(
            temperature=options.temperature,
            max_output_tokens=options.max_output_tokens,
            top_p=options.top_p,
            response_mime_type=response_mime_type,
        )

    @staticmethod
    def convert_response(
        response: GenerateContentResponse,
        model_id: str,
    ) -> ChatCompletion:
        """
        GenerateContentResponse → ChatCompletion

        첫 번째 candidate의 text part만 TextContent로 옮긴다 (그 외 part는 미지원).
        """
        contents = []
        finish_reason = None

        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content is not None:
                contents = [
                    TextContent(text=part.text)
                    for part in candidate.content.parts
                    if part.text is not None
                ]
            finish_reason = FINISH_REASON_MAP.get(candidate.finish_reason or "")

        usage = None
        if response.usage_metadata is not None:
            usage = ChatUsage(
                input_tokens=response.usage_metadata.prompt_token_count,
                output_tokens=response.usage_metadata.candidates_token_count,
                total_tokens=response.usage_metadata.total_token_count,
            )

        return ChatCompletion(
            message=ChatMessage(role=ChatRole.ASSISTANT, contents=contents),
            completion_id=response.response_id,
            model_id=model_id,
            finish_reason=finish_reason,
            usage=usage,
            raw_response=response,
        )

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
        *,
        cancellation: asyncio.Event | None = None,
    ) -> ChatCompletion:
        """
        Gemini generateContent 호출

        Raises:
            InvalidArgumentError: messages가 비었을 때
            TransportError / DeserializationError / CancellationError: Models 참고
        """
        if not messages:
            raise InvalidArgumentError("messages가 비어 있습니다.")

        model_id = (options.model_id if options else None) or self.model
        contents = self.convert_messages(messages)
        config = self.convert_options(options)

        logger.debug(
            f"[gemini] chat request: model={model_id}, messages={len(messages)}"
        )

        response = await self._client.models.generate_content(
            model_id, contents, config, cancellation=cancellation
        )
        return self.convert_response(response, model_id)

    def complete_sync(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
        *,
        cancellation: asyncio.Event | None = None,
    ) -> ChatCompletion:
        """complete()의 동기 버전 (cancellation은 Models.generate_content_sync 참고)"""
        return self._client.run_sync(
            self.complete(messages, options, cancellation=cancellation)
        )

    async def close(self) -> None:
        await self._client.close()

    def close_sync(self) -> None:
        self._client.close_sync()

    def __enter__(self) -> GeminiChatClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close_sync()

    async def __aenter__(self) -> GeminiChatClient:
        return self
