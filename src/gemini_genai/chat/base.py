"""
채팅 클라이언트 추상 인터페이스
- 범용 채팅 추상화(ChatMessage 리스트 + ChatOptions)를 Provider 호출로 연결
- 호출 간 상태 없음: 멀티턴 히스토리는 호출자가 매번 전체를 다시 전달한다
- 스트리밍은 단일 응답을 한 번 yield하는 형태 (점진적 전달 아님)
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from typing import Any, TypeVar

from .models import (
    ChatClientMetadata,
    ChatCompletion,
    ChatMessage,
    ChatOptions,
    StreamingChatCompletionUpdate,
)

S = TypeVar("S")


class BaseChatClient(ABC):
    """
    채팅 Provider 추상 클라이언트

    구현체는 complete()에서 Provider 고유 API를 호출한 뒤
    ChatCompletion으로 변환하여 반환한다.

    사용법:
        async with SomeChatClient(...) as client:
            completion = await client.complete([ChatMessage.from_text("user", "안녕")])
    """

    @property
    @abstractmethod
    def metadata(self) -> ChatClientMetadata:
        """Provider/모델 설명 정보"""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
        *,
        cancellation: asyncio.Event | None = None,
    ) -> ChatCompletion:
        """
        채팅 메시지를 보내고 응답 메시지를 반환

        Args:
            messages: 전체 대화 메시지 리스트
            options: 생성 옵션 (None이면 서버 기본값)
            cancellation: set 되면 진행 중인 요청 중단

        Returns:
            ChatCompletion
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        ...

    async def complete_streaming(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
        *,
        cancellation: asyncio.Event | None = None,
    ) -> AsyncIterator[StreamingChatCompletionUpdate]:
        """
        스트리밍 형태의 complete()

        현재는 complete()를 한 번 호출해 전체 결과를 담은 업데이트 하나만 yield한다.
        """
        completion = await self.complete(
            messages, options, cancellation=cancellation
        )

        yield StreamingChatCompletionUpdate(
            completion_id=completion.completion_id,
            role=completion.message.role,
            contents=list(completion.message.contents),
            finish_reason=completion.finish_reason,
            model_id=completion.model_id,
        )

    def get_service(self, service_type: type[S], key: Any = None) -> S | None:
        """
        요청 타입이 구현체 클래스(또는 그 상위 구현체)이면 self, 아니면 None

        추상 인터페이스 BaseChatClient 자체나 무관한 타입은 None.
        """
        if (
            isinstance(service_type, type)
            and issubclass(service_type, BaseChatClient)
            and service_type is not BaseChatClient
            and isinstance(self, service_type)
        ):
            return self  # type: ignore[return-value]
        return None

    async def __aenter__(self) -> BaseChatClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
