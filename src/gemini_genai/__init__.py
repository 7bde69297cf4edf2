"""
gemini-genai: Gemini Developer API / Vertex AI generateContent 클라이언트
"""

from ._types import DeveloperApiBackend, HttpOptions, VertexAIBackend
from .chat import (
    BaseChatClient,
    ChatCompletion,
    ChatFinishReason,
    ChatMessage,
    ChatOptions,
    ChatResponseFormat,
    ChatRole,
    GeminiChatClient,
    ImageContent,
    StreamingChatCompletionUpdate,
    TextContent,
)
from .client import Client
from .errors import (
    CancellationError,
    ConfigurationError,
    DeserializationError,
    GenAIError,
    InvalidArgumentError,
    TransportError,
)
from .logging import setup_logging
from .models import Models
from .types import (
    Candidate,
    Content,
    FileData,
    GenerateContentConfig,
    GenerateContentResponse,
    InlineData,
    Part,
    PromptFeedback,
    SafetyRating,
    UsageMetadata,
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Models",
    "HttpOptions",
    "DeveloperApiBackend",
    "VertexAIBackend",
    "Content",
    "Part",
    "InlineData",
    "FileData",
    "GenerateContentConfig",
    "GenerateContentResponse",
    "Candidate",
    "SafetyRating",
    "PromptFeedback",
    "UsageMetadata",
    "BaseChatClient",
    "GeminiChatClient",
    "ChatMessage",
    "ChatRole",
    "ChatOptions",
    "ChatResponseFormat",
    "ChatCompletion",
    "ChatFinishReason",
    "StreamingChatCompletionUpdate",
    "TextContent",
    "ImageContent",
    "GenAIError",
    "ConfigurationError",
    "InvalidArgumentError",
    "TransportError",
    "DeserializationError",
    "CancellationError",
    "setup_logging",
    "__version__",
]
