"""공개 API import 테스트."""


def test_import_clients():
    from gemini_genai import Client, GeminiChatClient, Models

    assert Client is not None
    assert GeminiChatClient is not None
    assert Models is not None


def test_import_types():
    from gemini_genai import (
        Content,
        GenerateContentConfig,
        GenerateContentResponse,
        HttpOptions,
        Part,
    )

    assert Content is not None
    assert Part is not None
    assert GenerateContentConfig is not None
    assert GenerateContentResponse is not None
    assert HttpOptions is not None


def test_error_hierarchy():
    from gemini_genai import (
        CancellationError,
        ConfigurationError,
        DeserializationError,
        GenAIError,
        InvalidArgumentError,
        TransportError,
    )

    for error in (
        CancellationError,
        ConfigurationError,
        DeserializationError,
        InvalidArgumentError,
        TransportError,
    ):
        assert issubclass(error, GenAIError)
    assert not issubclass(TransportError, DeserializationError)
    assert not issubclass(DeserializationError, TransportError)


def test_http_options_defaults():
    from gemini_genai import HttpOptions

    options = HttpOptions()
    assert options.timeout == 120.0
    assert options.headers == {}
    assert options.transport is None


def test_transport_error_str():
    from gemini_genai import TransportError

    assert str(TransportError(503, "unavailable")) == "[gemini] API error 503: unavailable"
    assert str(TransportError(None, "timeout")) == "[gemini] transport error: timeout"
