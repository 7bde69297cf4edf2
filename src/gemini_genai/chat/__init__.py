"""gemini_genai.chat 패키지 공개 API.

- BaseChatClient: 채팅 Provider 추상 인터페이스
- GeminiChatClient: generateContent 기반 구현체
- ChatMessage, ChatCompletion 등 범용 채팅 모델
"""

from .base import BaseChatClient
from .client import GeminiChatClient
from .models import (
    AIContent,
    ChatClientMetadata,
    ChatCompletion,
    ChatFinishReason,
    ChatMessage,
    ChatOptions,
    ChatResponseFormat,
    ChatRole,
    ChatUsage,
    ImageContent,
    StreamingChatCompletionUpdate,
    TextContent,
)

__all__ = [
    "BaseChatClient",
    "GeminiChatClient",
    "AIContent",
    "ChatClientMetadata",
    "ChatCompletion",
    "ChatFinishReason",
    "ChatMessage",
    "ChatOptions",
    "ChatResponseFormat",
    "ChatRole",
    "ChatUsage",
    "ImageContent",
    "StreamingChatCompletionUpdate",
    "TextContent",
]
